"""Object updated event."""

from dataclasses import dataclass
from typing import Any, ClassVar

from .event_kind import StoreEventKind
from .store_event import StoreEvent


@dataclass(frozen=True)
class ObjectUpdated(StoreEvent):
    """Fired when a cached object is replaced after a successful refetch."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.UPDATE

    name: Any
    old_obj: Any
    new_obj: Any
