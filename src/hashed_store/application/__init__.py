"""Hashed store application layer."""

from .services import HashedStore

__all__ = [
    "HashedStore",
]
