"""Tests for the key-value store backends and the sync/async bridge."""

from __future__ import annotations

import pytest

from gw2api.storage import (
    API_KEY_STORE_KEY,
    DiskStore,
    KeyValueStore,
    MemoryStore,
    resolve_maybe_awaitable,
)


class AsyncDictStore:
    """Store whose methods are coroutines."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def get(self, key: str):
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class TestMemoryStore:
    def test_set_and_get(self) -> None:
        store = MemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        assert "k" in store
        assert len(store) == 1

    def test_missing_key_is_none(self) -> None:
        assert MemoryStore().get("missing") is None

    def test_instances_do_not_share_state(self) -> None:
        a, b = MemoryStore(), MemoryStore()
        a.set("k", "v")
        assert b.get("k") is None

    def test_initial_data_is_copied(self) -> None:
        initial = {"k": "v"}
        store = MemoryStore(initial)
        store.set("k2", "v2")
        assert "k2" not in initial

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStore(), KeyValueStore)
        assert isinstance(AsyncDictStore(), KeyValueStore)


class TestDiskStore:
    def test_set_and_get(self, tmp_path) -> None:
        with DiskStore(tmp_path / "store") as store:
            store.set(API_KEY_STORE_KEY, "secret")
            assert store.get(API_KEY_STORE_KEY) == "secret"
            assert store.get("missing") is None

    def test_persists_across_instances(self, tmp_path) -> None:
        with DiskStore(tmp_path / "store") as store:
            store.set("k", '{"id": 1}')
        with DiskStore(tmp_path / "store") as store:
            assert store.get("k") == '{"id": 1}'

    def test_stats(self, tmp_path) -> None:
        with DiskStore(tmp_path / "store") as store:
            store.set("a", "1")
            store.set("b", "2")
            stats = store.stats()
        assert stats["size"] == 2
        assert stats["directory"].endswith("store")


class TestResolveMaybeAwaitable:
    @pytest.mark.asyncio
    async def test_plain_value_passes_through(self) -> None:
        assert await resolve_maybe_awaitable("v") == "v"
        assert await resolve_maybe_awaitable(None) is None

    @pytest.mark.asyncio
    async def test_awaitable_is_awaited(self) -> None:
        store = AsyncDictStore()
        await resolve_maybe_awaitable(store.set("k", "v"))
        assert await resolve_maybe_awaitable(store.get("k")) == "v"
