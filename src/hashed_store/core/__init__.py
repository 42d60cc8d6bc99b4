"""Hashed store core domain layer.

Clean core containing only events, exceptions, entities and the backend
contract. No orchestration logic.
"""

from .entities import *
from .events import *
from .exceptions import *
from .protocols import *

__all__ = [
    # Entities
    "Archive",
    "Group",

    # Events
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

    # Exceptions
    "HashedStoreError",
    "UnknownEventKind",
    "BackendRequestFailed",
    "ObjectNotFound",

    # Protocols
    "HashedStoreBackend",
    "EventHandler",
]
