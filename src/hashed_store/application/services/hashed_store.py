"""Hashed store service.

ONLY cache validation and refresh - keeps fetched objects in memory and
revalidates them against the backend's cheap hash before refetching.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from ...core.events import (
    CacheHit,
    CacheMiss,
    HashComputationFailed,
    HashFetchFailed,
    NameListFetchFailed,
    ObjectAdded,
    ObjectDeleted,
    ObjectFetchFailed,
    ObjectUpdated,
    StoreEvent,
)
from ...core.protocols.event_handler import EventHandler
from ...core.protocols.store_backend import HashedStoreBackend
from ...infrastructure.notifications import NotificationChannel
from ...infrastructure.notifications.notification_channel import EventKindLike

logger = logging.getLogger(__name__)

O = TypeVar("O")
N = TypeVar("N")
H = TypeVar("H")


class HashedStore(Generic[O, N, H]):
    """Hash-validated object cache.

    Cached objects are returned as-is only when the backend's remote hash and
    the cached object's hash are both known and equal. Any other outcome,
    including a failure to obtain either hash, triggers a refetch.

    Failure policy:
    - ``get_objects`` raises only when the name list cannot be fetched, and
      then leaves the cache untouched
    - ``get_object`` raises only when the final fetch fails, and then evicts
      the cached entry
    - Hash failures and per-name fan-out failures are reported as events only

    Every transition is published on the store's notification channel; use
    ``on``, ``once`` and ``off`` to subscribe.
    """

    def __init__(
        self,
        backend: HashedStoreBackend[O, N, H],
        notifications: Optional[NotificationChannel] = None
    ):
        """Initialize store.

        Args:
            backend: Backend resolving names to hashes and objects
            notifications: Notification channel, created with the store if omitted
        """
        self.backend = backend
        self._notifications = notifications or NotificationChannel()
        self._objects: Dict[N, O] = {}

    # Object Storage

    async def get_objects(self) -> List[O]:
        """Refresh the cache and return the current list of objects.

        Names no longer listed by the backend are pruned first. Every listed
        name is then validated or fetched concurrently; names that fail are
        left out of the result.

        Returns:
            Resolved objects, in no particular order

        Raises:
            Exception: Whatever the backend raised while listing names
        """
        try:
            names = await self.backend.fetch_object_names()
        except Exception as e:
            # Assume a transient failure and keep the cache
            logger.warning(f"Failed to fetch object names, keeping {len(self._objects)} cached objects: {e}")
            self._emit(NameListFetchFailed(e))
            raise

        listed = set(names)
        for name in [name for name in self._objects if name not in listed]:
            self.delete_object(name)

        results = await asyncio.gather(
            *(self.get_object(name) for name in names),
            return_exceptions=True
        )
        objects, failures = self._partition_results(names, results)

        if failures:
            logger.debug(f"Refresh skipped {len(failures)}/{len(names)} objects: {[name for name, _ in failures]}")
        return objects

    def get_objects_sync(self) -> List[O]:
        """Get all cached objects without checking if they are up-to-date."""
        return list(self._objects.values())

    def delete_objects(self, predicate: Optional[Callable[[N, O], bool]] = None) -> None:
        """Delete cached objects.

        Args:
            predicate: Called with ``(name, obj)``; only entries for which it
                returns True are deleted. All entries when omitted.
        """
        for name, obj in list(self._objects.items()):
            if predicate is None or predicate(name, obj):
                self.delete_object(name)

    async def get_object(self, name: N) -> O:
        """Get an object, revalidating or fetching it as needed.

        Raises:
            Exception: Whatever the backend raised while fetching the object
        """
        had_current = name in self._objects
        current = self._objects.get(name)

        if had_current:
            new_hash = await self._fetch_remote_hash(name)
            old_hash = self._compute_local_hash(current)

            if old_hash is not None and new_hash is not None and old_hash == new_hash:
                logger.debug(f"Cache hit for {name!r} (hash={new_hash!r})")
                self._emit(CacheHit(name, new_hash))
                return current

            logger.debug(f"Cache miss for {name!r} (cached={old_hash!r}, remote={new_hash!r})")
            self._emit(CacheMiss(name, old_hash, new_hash))

        try:
            obj = await self.backend.fetch_object(name)
        except Exception as e:
            # The object might simply no longer exist
            logger.warning(f"Failed to fetch object {name!r}: {e}")
            self._emit(ObjectFetchFailed(e, name))
            self.delete_object(name)
            raise

        self._objects[name] = obj
        if had_current:
            self._emit(ObjectUpdated(name, current, obj))
        else:
            self._emit(ObjectAdded(name, obj))

        return obj

    def get_object_sync(self, name: N) -> Optional[O]:
        """Get a cached object without doing any updates."""
        return self._objects.get(name)

    def delete_object(self, name: N) -> bool:
        """Remove an object from the cache.

        Returns:
            True if the object was cached
        """
        if name not in self._objects:
            return False

        del self._objects[name]
        logger.debug(f"Deleted {name!r} from cache")
        self._emit(ObjectDeleted(name))
        return True

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, name: Any) -> bool:
        return name in self._objects

    async def _fetch_remote_hash(self, name: N) -> Optional[H]:
        try:
            return await self.backend.fetch_object_hash(name)
        except Exception as e:
            logger.warning(f"Failed to fetch remote hash for {name!r}: {e}")
            self._emit(HashFetchFailed(e, name))
            return None

    def _compute_local_hash(self, obj: O) -> Optional[H]:
        try:
            return self.backend.get_object_hash(obj)
        except Exception as e:
            logger.warning(f"Failed to compute hash of cached object {obj!r}: {e}")
            self._emit(HashComputationFailed(e, obj))
            return None

    @staticmethod
    def _partition_results(
        names: Sequence[N],
        results: Sequence[Any]
    ) -> Tuple[List[O], List[Tuple[N, BaseException]]]:
        """Split settled fan-out results into objects and per-name failures."""
        objects: List[O] = []
        failures: List[Tuple[N, BaseException]] = []

        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                failures.append((name, result))
            else:
                objects.append(result)

        return objects, failures

    # Event Handling

    @property
    def notifications(self) -> NotificationChannel:
        """Notification channel owned by this store."""
        return self._notifications

    def on(self, kind: EventKindLike, handler: EventHandler) -> None:
        """Subscribe a persistent handler to an event kind."""
        self._notifications.on(kind, handler)

    def once(self, kind: EventKindLike, handler: EventHandler) -> None:
        """Subscribe a handler for the next event of a kind only."""
        self._notifications.once(kind, handler)

    def off(self, kind: EventKindLike, handler: EventHandler) -> bool:
        """Unsubscribe a handler from an event kind."""
        return self._notifications.off(kind, handler)

    async def drain(self) -> None:
        """Wait until all events emitted so far have been delivered."""
        await self._notifications.drain()

    async def close(self) -> None:
        """Deliver outstanding events and tear down the notification channel."""
        await self._notifications.close()

    async def __aenter__(self) -> "HashedStore[O, N, H]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _emit(self, event: StoreEvent) -> None:
        self._notifications.emit(event)
