"""Store failure events.

Reported failures are observability only. Whether a failure propagates to the
caller is decided by the store, not by these events.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from .event_kind import StoreEventKind
from .store_event import StoreEvent


@dataclass(frozen=True)
class NameListFetchFailed(StoreEvent):
    """The authoritative name list could not be fetched. The cache is kept."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.ERROR_FETCH_NAMES

    error: BaseException


@dataclass(frozen=True)
class ObjectFetchFailed(StoreEvent):
    """A full object fetch failed. Any cached entry for the name is evicted."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.ERROR_FETCH_OBJECT

    error: BaseException
    name: Any


@dataclass(frozen=True)
class HashFetchFailed(StoreEvent):
    """Fetching the remote hash failed. The remote hash is treated as unknown."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.ERROR_FETCH_HASH

    error: BaseException
    name: Any


@dataclass(frozen=True)
class HashComputationFailed(StoreEvent):
    """Computing the hash of a cached object failed. Treated as unknown."""

    kind: ClassVar[StoreEventKind] = StoreEventKind.ERROR_GET_HASH

    error: BaseException
    obj: Any
