"""Hashed store application services."""

from .hashed_store import HashedStore

__all__ = [
    "HashedStore",
]
