"""Hashed store exceptions.

One exception per file following maximum separation architecture.
"""

from .base import HashedStoreError
from .unknown_event_kind import UnknownEventKind
from .backend_request_failed import BackendRequestFailed
from .object_not_found import ObjectNotFound

__all__ = [
    "HashedStoreError",
    "UnknownEventKind",
    "BackendRequestFailed",
    "ObjectNotFound",
]
