"""Store event kinds.

The values double as the subscription keys accepted by the notification
channel.
"""

from enum import Enum
from typing import Union

from ..exceptions.unknown_event_kind import UnknownEventKind


class StoreEventKind(str, Enum):
    """Fixed taxonomy of store events."""

    ADD = "add"                                 # name, obj
    UPDATE = "update"                           # name, old_obj, new_obj
    DELETE = "delete"                           # name
    CACHE_HIT = "cache_hit"                     # name, hash
    CACHE_MISS = "cache_miss"                   # name, old_hash, new_hash
    ERROR_FETCH_NAMES = "error_fetch_names"     # error
    ERROR_FETCH_OBJECT = "error_fetch_object"   # error, name
    ERROR_FETCH_HASH = "error_fetch_hash"       # error, name
    ERROR_GET_HASH = "error_get_hash"           # error, obj

    @property
    def is_error(self) -> bool:
        """Check if kind reports a failure."""
        return self.value.startswith("error_")

    @classmethod
    def parse(cls, kind: Union["StoreEventKind", str]) -> "StoreEventKind":
        """Resolve an event kind from an enum member or its string value.

        Raises:
            UnknownEventKind: If the value is not part of the taxonomy
        """
        if isinstance(kind, cls):
            return kind
        try:
            return cls(kind)
        except ValueError:
            raise UnknownEventKind(kind) from None
