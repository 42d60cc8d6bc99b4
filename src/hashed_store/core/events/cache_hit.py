"""Cache hit event.

ONLY hit events - the cached object was confirmed current because the remote
and local hashes are both known and equal.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from .event_kind import StoreEventKind
from .store_event import StoreEvent


@dataclass(frozen=True)
class CacheHit(StoreEvent):
    """Cache hit event."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.CACHE_HIT

    name: Any
    hash: Any
