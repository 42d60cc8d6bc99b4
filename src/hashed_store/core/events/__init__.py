"""Hashed store events.

One event per cache state transition or failure mode. Events are
informational; delivering them never affects cache correctness.
"""

from .event_kind import StoreEventKind
from .store_event import StoreEvent
from .object_added import ObjectAdded
from .object_updated import ObjectUpdated
from .object_deleted import ObjectDeleted
from .cache_hit import CacheHit
from .cache_miss import CacheMiss
from .failures import (
    NameListFetchFailed,
    ObjectFetchFailed,
    HashFetchFailed,
    HashComputationFailed,
)

__all__ = [
    "StoreEventKind",
    "StoreEvent",
    "ObjectAdded",
    "ObjectUpdated",
    "ObjectDeleted",
    "CacheHit",
    "CacheMiss",
    "NameListFetchFailed",
    "ObjectFetchFailed",
    "HashFetchFailed",
    "HashComputationFailed",
]
