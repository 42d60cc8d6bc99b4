"""Object added event."""

from dataclasses import dataclass
from typing import Any, ClassVar

from .event_kind import StoreEventKind
from .store_event import StoreEvent


@dataclass(frozen=True)
class ObjectAdded(StoreEvent):
    """Fired when a name is cached for the first time."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.ADD

    name: Any
    obj: Any
