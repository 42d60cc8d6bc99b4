"""Object deleted event."""

from dataclasses import dataclass
from typing import Any, ClassVar

from .event_kind import StoreEventKind
from .store_event import StoreEvent


@dataclass(frozen=True)
class ObjectDeleted(StoreEvent):
    """Fired when a name leaves the cache.

    Covers explicit deletion, pruning during a name list refresh and eviction
    after a failed refetch.
    """

    kind: ClassVar[StoreEventKind] = StoreEventKind.DELETE

    name: Any
