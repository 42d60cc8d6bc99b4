"""Pytest configuration and fixtures for hashed-store tests."""

from typing import Dict, List, Optional, Set

import pytest

from hashed_store.application.services import HashedStore
from hashed_store.config import get_settings
from hashed_store.core.events import StoreEvent, StoreEventKind
from hashed_store.core.protocols import HashedStoreBackend


class FakeBackend(HashedStoreBackend[dict, str, str]):
    """In-memory backend with switchable failures and call recording.

    Remote objects are dicts carrying their own ``hash``. Every fetch returns
    a fresh copy so tests can tell cached instances from refetched ones.
    """

    def __init__(self):
        self.remote: Dict[str, dict] = {}
        self.remote_hash_overrides: Dict[str, Optional[str]] = {}
        self.names_override: Optional[List[str]] = None

        self.fail_names = False
        self.fail_fetch: Set[str] = set()
        self.fail_remote_hash: Set[str] = set()
        self.fail_local_hash = False

        self.fetch_calls: List[str] = []
        self.hash_calls: List[str] = []
        self.names_calls = 0

    def put(self, name: str, hash: Optional[str], **data) -> None:
        self.remote[name] = {"name": name, "hash": hash, **data}

    async def fetch_object_hash(self, name: str) -> Optional[str]:
        self.hash_calls.append(name)
        if name in self.fail_remote_hash:
            raise ConnectionError(f"hash lookup failed for {name}")
        if name in self.remote_hash_overrides:
            return self.remote_hash_overrides[name]
        remote = self.remote.get(name)
        return remote["hash"] if remote else None

    async def fetch_object(self, name: str) -> dict:
        self.fetch_calls.append(name)
        if name in self.fail_fetch or name not in self.remote:
            raise LookupError(f"no such object: {name}")
        return dict(self.remote[name])

    async def fetch_object_names(self) -> List[str]:
        self.names_calls += 1
        if self.fail_names:
            raise ConnectionError("name list unavailable")
        if self.names_override is not None:
            return list(self.names_override)
        return list(self.remote)

    def get_object_hash(self, obj: dict) -> Optional[str]:
        if self.fail_local_hash:
            raise ValueError("cannot hash object")
        return obj.get("hash")


class EventRecorder:
    """Collects every event a store delivers."""

    def __init__(self, store: HashedStore):
        self.events: List[StoreEvent] = []
        self._store = store

    def __call__(self, event: StoreEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[str]:
        return [event.kind.value for event in self.events]

    def of_kind(self, kind: StoreEventKind) -> List[StoreEvent]:
        return [event for event in self.events if event.kind == kind]

    async def reset(self) -> None:
        """Deliver everything already emitted, then forget it."""
        await self._store.drain()
        self.events.clear()


@pytest.fixture
def backend() -> FakeBackend:
    """Backend serving objects ``a`` and ``b``."""
    fake = FakeBackend()
    fake.put("a", "h1", value=1)
    fake.put("b", "h2", value=2)
    return fake


@pytest.fixture
def store(backend) -> HashedStore:
    return HashedStore(backend)


@pytest.fixture
def recorder(store) -> EventRecorder:
    """Recorder subscribed to every event kind of the store."""
    events = EventRecorder(store)
    for kind in StoreEventKind:
        store.on(kind, events)
    return events


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
