"""Event handler protocol."""

from typing import Any, Awaitable, Union
from typing_extensions import Protocol, runtime_checkable

from ..events.store_event import StoreEvent


@runtime_checkable
class EventHandler(Protocol):
    """Subscriber callable for store events.

    Handlers may be plain functions or coroutine functions. A returned
    awaitable is awaited by the delivery loop; anything raised is discarded.
    """

    def __call__(self, event: StoreEvent) -> Union[None, Awaitable[Any]]:
        ...
