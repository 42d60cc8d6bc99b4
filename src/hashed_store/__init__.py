"""Hashed Store - hash-validated local cache for remotely named objects.

The store keeps fetched objects in memory, revalidates them against a cheap
remote fingerprint before paying for a full fetch, and reports every cache
transition through a per-store notification channel.
"""

from .__version__ import __version__

from .config import HashedStoreSettings, get_settings, setup_logging

from .core.exceptions import (
    HashedStoreError,
    UnknownEventKind,
    BackendRequestFailed,
    ObjectNotFound,
)

from .core.events import (
    StoreEventKind,
    StoreEvent,
    ObjectAdded,
    ObjectUpdated,
    ObjectDeleted,
    CacheHit,
    CacheMiss,
    NameListFetchFailed,
    ObjectFetchFailed,
    HashFetchFailed,
    HashComputationFailed,
)

from .core.protocols import HashedStoreBackend, EventHandler
from .core.entities import Archive, Group

from .application.services import HashedStore
from .infrastructure.notifications import NotificationChannel

__all__ = [
    "__version__",

    # Configuration
    "HashedStoreSettings",
    "get_settings",
    "setup_logging",

    # Exceptions
    "HashedStoreError",
    "UnknownEventKind",
    "BackendRequestFailed",
    "ObjectNotFound",

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

    # Contracts
    "HashedStoreBackend",
    "EventHandler",

    # Entities
    "Archive",
    "Group",

    # Services
    "HashedStore",
    "NotificationChannel",
]
