"""Hashed store backend contract.

ONLY the backend contract - the four capabilities the store needs to resolve
names to hashes and objects. Implementations live outside the core.

Following maximum separation architecture - one file = one purpose.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

O = TypeVar("O")
N = TypeVar("N")
H = TypeVar("H")


class HashedStoreBackend(ABC, Generic[O, N, H]):
    """Backend for a hashed store.

    Generic over the cached object type ``O``, the name type ``N`` (used as a
    dictionary key, so it must be hashable) and the hash type ``H`` (compared
    with ``==``).

    Every method may raise. A backend that cannot fingerprint its objects may
    return ``None`` from both hash methods; the store then refetches on every
    access.
    """

    @abstractmethod
    async def fetch_object_hash(self, name: N) -> Optional[H]:
        """Fetch the current remote hash for a name.

        Returns:
            The remote hash, or None if unknown or unsupported
        """
        pass

    @abstractmethod
    async def fetch_object(self, name: N) -> O:
        """Fetch the full object for a name."""
        pass

    @abstractmethod
    async def fetch_object_names(self) -> List[N]:
        """Fetch the authoritative list of names that currently exist."""
        pass

    @abstractmethod
    def get_object_hash(self, obj: O) -> Optional[H]:
        """Compute or extract the hash of an object already held locally.

        Returns:
            The object's hash, or None if unknown
        """
        pass
