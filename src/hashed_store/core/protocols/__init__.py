"""Hashed store protocols.

Contracts the store depends on but does not implement.
"""

from .store_backend import HashedStoreBackend
from .event_handler import EventHandler

__all__ = [
    "HashedStoreBackend",
    "EventHandler",
]
