"""Store notification channel.

ONLY event delivery - a per-store publish/subscribe channel that decouples
event emission from subscriber execution.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ...core.events import StoreEvent, StoreEventKind
from ...core.protocols.event_handler import EventHandler

logger = logging.getLogger(__name__)

EventKindLike = Union[StoreEventKind, str]


@dataclass(eq=False)
class _Subscription:
    """Registered handler for one event kind."""
    handler: EventHandler
    once: bool = False


class NotificationChannel:
    """Asynchronous notification channel.

    ``emit`` only enqueues. A background delivery loop running on the event
    loop hands each event to its subscribers after the emitting code has
    yielded control, so subscribers can never block or break the caller.

    Delivery guarantees:
    - Events are delivered one at a time in emission order
    - The handler list is snapshotted per event
    - One-shot handlers are removed before they are invoked
    - Exceptions raised by handlers are logged and discarded
    """

    def __init__(self):
        """Initialize an empty channel.

        The delivery loop is started lazily on the first emit that happens
        inside a running event loop.
        """
        self._handlers: Dict[StoreEventKind, List[_Subscription]] = {}
        self._queue: asyncio.Queue = asyncio.Queue()
        self._delivery_task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._closed = False

    # Subscription

    def on(self, kind: EventKindLike, handler: EventHandler) -> None:
        """Subscribe a persistent handler to an event kind.

        Raises:
            UnknownEventKind: If kind is not a store event kind
        """
        self._subscribe(kind, handler, once=False)

    def once(self, kind: EventKindLike, handler: EventHandler) -> None:
        """Subscribe a handler that is removed after its first delivery.

        Raises:
            UnknownEventKind: If kind is not a store event kind
        """
        self._subscribe(kind, handler, once=True)

    def off(self, kind: EventKindLike, handler: EventHandler) -> bool:
        """Unsubscribe a handler from an event kind.

        Removes the most recently added registration of the handler.

        Returns:
            True if the handler was subscribed and has been removed
        """
        event_kind = StoreEventKind.parse(kind)
        subscriptions = self._handlers.get(event_kind, [])

        for index in range(len(subscriptions) - 1, -1, -1):
            if subscriptions[index].handler == handler:
                del subscriptions[index]
                return True
        return False

    def listener_count(self, kind: EventKindLike) -> int:
        """Get number of handlers subscribed to an event kind."""
        return len(self._handlers.get(StoreEventKind.parse(kind), []))

    def _subscribe(self, kind: EventKindLike, handler: EventHandler, once: bool) -> None:
        if self._closed:
            logger.debug(f"Ignoring subscription to {kind} on closed channel")
            return

        event_kind = StoreEventKind.parse(kind)
        if not isinstance(handler, EventHandler):
            raise TypeError(f"Event handler must be callable, got {type(handler).__name__}")

        self._handlers.setdefault(event_kind, []).append(_Subscription(handler, once))

    # Emission

    @property
    def pending(self) -> int:
        """Number of events queued but not yet delivered."""
        return self._queue.qsize()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def emit(self, event: StoreEvent) -> None:
        """Schedule an event for delivery.

        Never invokes a handler synchronously.
        """
        if self._closed:
            logger.debug(f"Dropping {event.get_event_type()} event emitted after close")
            return

        self._queue.put_nowait(event)
        self._ensure_delivery_loop()

    async def drain(self) -> None:
        """Wait until every event queued so far has been delivered.

        Events emitted with no running loop, or left over from a loop that has
        since finished, are delivered on the current loop.
        """
        if self._closed:
            return
        self._ensure_delivery_loop()
        await self._queue.join()

    async def close(self) -> None:
        """Deliver outstanding events, stop the delivery loop and drop handlers."""
        if self._closed:
            return

        await self.drain()
        self._closed = True

        task = self._delivery_task
        if task and not task.done():
            task.cancel()
            # Only the delivery task's own cancellation is absorbed here
            await asyncio.gather(task, return_exceptions=True)
        self._delivery_task = None
        self._handlers.clear()

    # Delivery

    def _ensure_delivery_loop(self) -> None:
        """Start the delivery loop on the running event loop, if any."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop; events stay queued until one is available
            return

        if self._loop is not loop:
            self._rebind(loop)
        elif self._delivery_task and not self._delivery_task.done():
            return

        self._delivery_task = loop.create_task(self._delivery_loop())
        self._delivery_task.add_done_callback(self._on_delivery_stopped)

    def _rebind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Move queued events to a fresh queue owned by ``loop``.

        An asyncio queue stays bound to the first loop that waits on it, so a
        channel reused under a later ``asyncio.run`` needs a new one. A delivery
        task left on the previous loop is abandoned.
        """
        pending: List[StoreEvent] = []
        while not self._queue.empty():
            pending.append(self._queue.get_nowait())

        self._queue = asyncio.Queue()
        for event in pending:
            self._queue.put_nowait(event)

        if self._loop is not None:
            logger.debug(f"Notification channel moved to a new event loop with {len(pending)} pending events")
        self._loop = loop
        self._delivery_task = None

    def _on_delivery_stopped(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Notification delivery loop stopped: {error}")

    async def _delivery_loop(self) -> None:
        """Background delivery loop."""
        while True:
            event = await self._queue.get()
            try:
                await self._deliver(event)
            finally:
                self._queue.task_done()

    async def _deliver(self, event: StoreEvent) -> None:
        """Deliver one event to a snapshot of its subscribers."""
        subscriptions = list(self._handlers.get(event.kind, []))

        for subscription in subscriptions:
            if subscription.once and not self._remove(event.kind, subscription):
                continue

            try:
                result = subscription.handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(f"Discarding error from {event.get_event_type()} handler: {e}")

    def _remove(self, kind: StoreEventKind, subscription: _Subscription) -> bool:
        subscriptions = self._handlers.get(kind, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)
            return True
        return False
