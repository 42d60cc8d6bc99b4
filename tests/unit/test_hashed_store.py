"""Tests for the hashed store service."""

import asyncio
import logging

import pytest

from hashed_store.application.services import HashedStore
from hashed_store.core.events import (
    CacheHit,
    CacheMiss,
    HashComputationFailed,
    HashFetchFailed,
    NameListFetchFailed,
    ObjectAdded,
    ObjectDeleted,
    ObjectFetchFailed,
    ObjectUpdated,
    StoreEventKind,
)
from hashed_store.infrastructure.notifications import NotificationChannel


class TestGetObject:
    """Test single object validate-or-fetch."""

    @pytest.mark.asyncio
    async def test_first_fetch_adds_object(self, store, backend, recorder):
        """Test an uncached name is fetched without any hash lookup."""
        obj = await store.get_object("a")
        await store.drain()

        assert obj == {"name": "a", "hash": "h1", "value": 1}
        assert store.get_object_sync("a") is obj
        assert backend.fetch_calls == ["a"]
        assert backend.hash_calls == []

        assert recorder.kinds() == ["add"]
        added = recorder.events[0]
        assert isinstance(added, ObjectAdded)
        assert added.name == "a"
        assert added.obj is obj

    @pytest.mark.asyncio
    async def test_matching_hashes_return_cached_instance(self, store, backend, recorder):
        """Test a confirmed hash returns the identical object without fetching."""
        cached = await store.get_object("a")
        await recorder.reset()

        result = await store.get_object("a")
        await store.drain()

        assert result is cached
        assert backend.fetch_calls == ["a"]
        assert backend.hash_calls == ["a"]

        assert recorder.kinds() == ["cache_hit"]
        hit = recorder.events[0]
        assert isinstance(hit, CacheHit)
        assert hit.name == "a"
        assert hit.hash == "h1"

    @pytest.mark.asyncio
    async def test_repeated_hits_do_not_refetch(self, store, backend, recorder):
        """Test two healthy lookups yield two hits and no redundant fetch."""
        await store.get_object("a")
        await recorder.reset()

        await store.get_object("a")
        await store.get_object("a")
        await store.drain()

        assert recorder.kinds() == ["cache_hit", "cache_hit"]
        assert backend.fetch_calls == ["a"]

    @pytest.mark.asyncio
    async def test_hash_mismatch_refetches_and_updates(self, store, backend, recorder):
        """Test a changed remote hash replaces the cached object."""
        old = await store.get_object("a")
        backend.put("a", "h9", value=10)
        await recorder.reset()

        new = await store.get_object("a")
        await store.drain()

        assert new is not old
        assert new["value"] == 10
        assert store.get_object_sync("a") is new
        assert backend.fetch_calls == ["a", "a"]

        assert recorder.kinds() == ["cache_miss", "update"]
        miss, update = recorder.events
        assert isinstance(miss, CacheMiss)
        assert (miss.name, miss.old_hash, miss.new_hash) == ("a", "h1", "h9")
        assert miss.is_mismatch
        assert isinstance(update, ObjectUpdated)
        assert update.old_obj is old
        assert update.new_obj is new

    @pytest.mark.asyncio
    async def test_unknown_remote_hash_forces_refetch(self, store, backend, recorder):
        """Test an absent remote hash is treated as a miss."""
        old = await store.get_object("a")
        backend.remote_hash_overrides["a"] = None
        await recorder.reset()

        new = await store.get_object("a")
        await store.drain()

        assert new is not old
        assert recorder.kinds() == ["cache_miss", "update"]
        miss = recorder.events[0]
        assert miss.old_hash == "h1"
        assert miss.new_hash is None
        assert not miss.is_mismatch

    @pytest.mark.asyncio
    async def test_unknown_local_hash_forces_refetch(self, store, backend, recorder):
        """Test an absent cached hash is treated like an absent remote hash."""
        backend.put("c", None)
        await store.get_object("c")
        backend.remote_hash_overrides["c"] = "h3"
        await recorder.reset()

        await store.get_object("c")
        await store.drain()

        assert recorder.kinds() == ["cache_miss", "update"]
        assert recorder.events[0].old_hash is None
        assert recorder.events[0].new_hash == "h3"

    @pytest.mark.asyncio
    async def test_remote_hash_failure_is_soft(self, store, backend, recorder):
        """Test a failing remote hash lookup degrades to a miss."""
        await store.get_object("a")
        backend.fail_remote_hash.add("a")
        await recorder.reset()

        obj = await store.get_object("a")
        await store.drain()

        assert obj["value"] == 1
        assert recorder.kinds() == ["error_fetch_hash", "cache_miss", "update"]
        failure = recorder.events[0]
        assert isinstance(failure, HashFetchFailed)
        assert failure.name == "a"
        assert isinstance(failure.error, ConnectionError)
        assert recorder.events[1].new_hash is None

    @pytest.mark.asyncio
    async def test_local_hash_failure_is_soft(self, store, backend, recorder):
        """Test a failing local hash computation degrades to a miss."""
        cached = await store.get_object("a")
        backend.fail_local_hash = True
        await recorder.reset()

        await store.get_object("a")
        await store.drain()

        assert recorder.kinds() == ["error_get_hash", "cache_miss", "update"]
        failure = recorder.events[0]
        assert isinstance(failure, HashComputationFailed)
        assert failure.obj is cached
        assert isinstance(failure.error, ValueError)
        assert recorder.events[1].old_hash is None

    @pytest.mark.asyncio
    async def test_fetch_failure_evicts_and_propagates(self, store, backend, recorder):
        """Test a failed refetch removes the stale entry and raises."""
        await store.get_object("a")
        backend.put("a", "h9")
        backend.fail_fetch.add("a")
        await recorder.reset()

        with pytest.raises(LookupError):
            await store.get_object("a")
        await store.drain()

        assert "a" not in store
        assert store.get_object_sync("a") is None
        assert recorder.kinds() == ["cache_miss", "error_fetch_object", "delete"]
        failure = recorder.events[1]
        assert isinstance(failure, ObjectFetchFailed)
        assert failure.name == "a"
        assert isinstance(failure.error, LookupError)

    @pytest.mark.asyncio
    async def test_fetch_failure_for_uncached_name(self, store, recorder):
        """Test fetching an unknown name raises without a delete event."""
        with pytest.raises(LookupError):
            await store.get_object("missing")
        await store.drain()

        assert len(store) == 0
        assert recorder.kinds() == ["error_fetch_object"]

    @pytest.mark.asyncio
    async def test_backend_without_hashes_always_refetches(self, store, backend, recorder):
        """Test a backend that never knows hashes degrades to always-refetch."""
        backend.put("a", None)
        await store.get_object("a")
        await recorder.reset()

        await store.get_object("a")
        await store.get_object("a")
        await store.drain()

        assert backend.fetch_calls == ["a", "a", "a"]
        assert recorder.kinds() == ["cache_miss", "update", "cache_miss", "update"]


class TestGetObjects:
    """Test bulk refresh."""

    @pytest.mark.asyncio
    async def test_initial_refresh_fetches_all(self, store, backend, recorder):
        objects = await store.get_objects()
        await store.drain()

        assert sorted(obj["name"] for obj in objects) == ["a", "b"]
        assert sorted(backend.fetch_calls) == ["a", "b"]
        assert sorted(recorder.kinds()) == ["add", "add"]
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_refresh_scenario(self, store, backend, recorder):
        """Test hit for unchanged names, refetch for changed ones, then pruning."""
        obj_a = await store.get_object("a")
        backend.put("b", "h1")
        await store.get_object("b")
        backend.put("b", "h2", value=2)
        await recorder.reset()
        backend.fetch_calls.clear()

        objects = await store.get_objects()
        await store.drain()

        by_name = {obj["name"]: obj for obj in objects}
        assert set(by_name) == {"a", "b"}
        assert by_name["a"] is obj_a
        assert by_name["b"]["hash"] == "h2"
        assert backend.fetch_calls == ["b"]

        assert len(recorder.of_kind(StoreEventKind.CACHE_HIT)) == 1
        assert recorder.of_kind(StoreEventKind.CACHE_HIT)[0].name == "a"
        assert len(recorder.of_kind(StoreEventKind.CACHE_MISS)) == 1
        assert recorder.of_kind(StoreEventKind.CACHE_MISS)[0].name == "b"
        assert len(recorder.of_kind(StoreEventKind.UPDATE)) == 1
        assert not recorder.of_kind(StoreEventKind.ADD)

        backend.names_override = ["a"]
        await recorder.reset()

        objects = await store.get_objects()
        await store.drain()

        assert objects == [obj_a]
        assert objects[0] is obj_a
        assert "b" not in store
        deletes = recorder.of_kind(StoreEventKind.DELETE)
        assert [event.name for event in deletes] == ["b"]

    @pytest.mark.asyncio
    async def test_pruning_happens_before_fetching(self, store, backend, recorder):
        """Test unlisted entries are deleted before any per-name work starts."""
        await store.get_objects()
        backend.names_override = ["a"]
        await recorder.reset()

        await store.get_objects()
        await store.drain()

        assert recorder.kinds() == ["delete", "cache_hit"]

    @pytest.mark.asyncio
    async def test_individual_failures_are_isolated(self, store, backend, recorder):
        """Test a failing name is excluded without failing the refresh."""
        backend.put("c", "h3")
        backend.fail_fetch.add("b")

        objects = await store.get_objects()
        await store.drain()

        assert sorted(obj["name"] for obj in objects) == ["a", "c"]
        assert "b" not in store
        failures = recorder.of_kind(StoreEventKind.ERROR_FETCH_OBJECT)
        assert [event.name for event in failures] == ["b"]

    @pytest.mark.asyncio
    async def test_listed_name_that_vanished_is_evicted(self, store, backend):
        """Test a cached name whose refetch fails is dropped from the cache."""
        await store.get_objects()
        backend.put("b", "h9")
        backend.fail_fetch.add("b")

        objects = await store.get_objects()

        assert [obj["name"] for obj in objects] == ["a"]
        assert "b" not in store

    @pytest.mark.asyncio
    async def test_name_list_failure_keeps_cache(self, store, backend, recorder):
        """Test a failing name list raises and leaves the cache unchanged."""
        await store.get_objects()
        snapshot = {name: store.get_object_sync(name) for name in ("a", "b")}
        backend.fail_names = True
        backend.fetch_calls.clear()
        await recorder.reset()

        with pytest.raises(ConnectionError):
            await store.get_objects()
        await store.drain()

        assert len(store) == 2
        for name, obj in snapshot.items():
            assert store.get_object_sync(name) is obj
        assert backend.fetch_calls == []
        assert recorder.kinds() == ["error_fetch_names"]
        assert isinstance(recorder.events[0], NameListFetchFailed)
        assert isinstance(recorder.events[0].error, ConnectionError)

    @pytest.mark.asyncio
    async def test_retry_after_name_list_failure(self, store, backend):
        backend.fail_names = True
        with pytest.raises(ConnectionError):
            await store.get_objects()

        backend.fail_names = False
        objects = await store.get_objects()

        assert len(objects) == 2

    @pytest.mark.asyncio
    async def test_empty_name_list_clears_cache(self, store, backend, recorder):
        await store.get_objects()
        backend.names_override = []
        await recorder.reset()

        objects = await store.get_objects()
        await store.drain()

        assert objects == []
        assert len(store) == 0
        assert sorted(event.name for event in recorder.events) == ["a", "b"]
        assert set(recorder.kinds()) == {"delete"}


class TestSyncOperations:
    """Test operations that never contact the backend."""

    @pytest.mark.asyncio
    async def test_get_objects_sync_returns_snapshot(self, store, backend):
        assert store.get_objects_sync() == []

        await store.get_objects()
        backend.fetch_calls.clear()
        snapshot = store.get_objects_sync()

        assert sorted(obj["name"] for obj in snapshot) == ["a", "b"]
        assert backend.fetch_calls == []
        assert backend.names_calls == 1

    def test_get_object_sync_missing(self, store, backend):
        assert store.get_object_sync("a") is None
        assert backend.fetch_calls == []

    @pytest.mark.asyncio
    async def test_delete_object(self, store, backend, recorder):
        await store.get_object("a")
        await recorder.reset()

        assert store.delete_object("a") is True
        assert store.delete_object("a") is False
        await store.drain()

        assert "a" not in store
        assert recorder.kinds() == ["delete"]
        assert isinstance(recorder.events[0], ObjectDeleted)
        assert backend.fetch_calls == ["a"]

    @pytest.mark.asyncio
    async def test_delete_objects_without_predicate(self, store, recorder):
        await store.get_objects()
        await recorder.reset()

        store.delete_objects()
        await store.drain()

        assert len(store) == 0
        assert sorted(event.name for event in recorder.of_kind(StoreEventKind.DELETE)) == ["a", "b"]
        assert len(recorder.events) == 2

    @pytest.mark.asyncio
    async def test_delete_objects_with_predicate(self, store, recorder):
        await store.get_objects()
        await recorder.reset()

        store.delete_objects(lambda name, obj: obj["value"] > 1)
        await store.drain()

        assert "a" in store
        assert "b" not in store
        assert [event.name for event in recorder.events] == ["b"]

    @pytest.mark.asyncio
    async def test_delete_objects_on_empty_store(self, store, recorder):
        store.delete_objects()
        await store.drain()

        assert recorder.events == []


class TestStoreLifecycle:
    """Test notification channel ownership."""

    def test_each_store_owns_a_channel(self, backend):
        first = HashedStore(backend)
        second = HashedStore(backend)

        assert isinstance(first.notifications, NotificationChannel)
        assert first.notifications is not second.notifications

    @pytest.mark.asyncio
    async def test_injected_channel_is_used(self, backend):
        channel = NotificationChannel()
        store = HashedStore(backend, notifications=channel)
        received = []
        channel.on("add", received.append)

        await store.get_object("a")
        await store.drain()

        assert [event.name for event in received] == ["a"]

    @pytest.mark.asyncio
    async def test_events_do_not_leak_between_stores(self, backend):
        first = HashedStore(backend)
        second = HashedStore(backend)
        received = []
        second.on("add", received.append)

        await first.get_object("a")
        await first.drain()
        await second.drain()

        assert received == []

    @pytest.mark.asyncio
    async def test_context_manager_closes_channel(self, backend):
        received = []

        async with HashedStore(backend) as store:
            store.on("add", received.append)
            await store.get_object("a")

        assert len(received) == 1
        assert store.notifications.is_closed

    @pytest.mark.asyncio
    async def test_once_and_off_passthrough(self, store):
        once_events = []
        persistent_events = []

        store.once("delete", once_events.append)
        store.on("delete", persistent_events.append)
        await store.get_objects()

        store.delete_object("a")
        store.delete_object("b")
        await store.drain()

        assert [event.name for event in once_events] == ["a"]
        assert [event.name for event in persistent_events] == ["a", "b"]
        assert store.off("delete", persistent_events.append) is True
        assert store.off("delete", persistent_events.append) is False

    def test_store_reused_across_event_loops(self, store, backend, recorder, caplog):
        async def refresh():
            await store.get_objects()
            await store.drain()

        with caplog.at_level(logging.ERROR):
            asyncio.run(refresh())
            store.delete_object("a")
            asyncio.run(refresh())
            store.delete_object("b")
            asyncio.run(store.close())

        assert recorder.kinds().count("add") == 3
        assert [event.name for event in recorder.of_kind(StoreEventKind.DELETE)] == ["a", "b"]
        assert [event.name for event in recorder.of_kind(StoreEventKind.CACHE_HIT)] == ["b"]
        assert store.notifications.is_closed
        assert caplog.records == []
