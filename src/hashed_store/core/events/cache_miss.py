"""Cache miss event.

ONLY miss events - a cached object could not be confirmed current and is
about to be refetched.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from .event_kind import StoreEventKind
from .store_event import StoreEvent


@dataclass(frozen=True)
class CacheMiss(StoreEvent):
    """Cache miss event.

    Either hash may be ``None`` when it is unknown. An unknown local hash and
    an unknown remote hash are treated alike.
    """

    kind: ClassVar[StoreEventKind] = StoreEventKind.CACHE_MISS

    name: Any
    old_hash: Optional[Any]
    new_hash: Optional[Any]

    @property
    def is_mismatch(self) -> bool:
        """Check if both hashes were known and differ."""
        return (
            self.old_hash is not None and
            self.new_hash is not None and
            self.old_hash != self.new_hash
        )
