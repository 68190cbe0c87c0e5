"""Unit tests for MemoryCacheProvider."""

from __future__ import annotations

import pytest

from birdwalk.providers.cache.memory_cache import MemoryCacheProvider
from tests.conftest import FakeClock


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self, fake_clock: FakeClock) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=3, ttl=60, timer=fake_clock)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider, fake_clock: FakeClock) -> None:
        await cache.set("Common raven", "https://img/raven.jpg")
        entry = await cache.get("Common raven")
        assert entry is not None
        assert entry.value == "https://img/raven.jpg"
        assert entry.stored_at == fake_clock.now

    @pytest.mark.asyncio
    async def test_none_value_is_cached(self, cache: MemoryCacheProvider) -> None:
        await cache.set("Mystery warbler", None)
        entry = await cache.get("Mystery warbler")
        assert entry is not None
        assert entry.value is None
        assert await cache.exists("Mystery warbler") is True

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "old")
        await cache.set("key1", "new")
        entry = await cache.get("key1")
        assert entry is not None and entry.value == "new"
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_entry_alive_until_ttl(self, cache: MemoryCacheProvider, fake_clock: FakeClock) -> None:
        await cache.set("key1", "value1")
        fake_clock.advance(60)
        assert await cache.get("key1") is not None

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, cache: MemoryCacheProvider, fake_clock: FakeClock) -> None:
        await cache.set("key1", "value1")
        fake_clock.advance(61)
        assert await cache.get("key1") is None
        # Expired entries are dropped on read.
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_full_cache_evicts_oldest_inserted(self, cache: MemoryCacheProvider) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)
        await cache.set("d", 4)

        assert len(cache) == 3
        assert await cache.get("a") is None
        assert await cache.exists("b") is True
        assert await cache.exists("d") is True

    @pytest.mark.asyncio
    async def test_eviction_ignores_reads(self, cache: MemoryCacheProvider) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)
        # Reading "a" does not protect it: eviction is by insertion order.
        await cache.get("a")
        await cache.set("d", 4)

        assert await cache.get("a") is None
        assert await cache.exists("b") is True

    @pytest.mark.asyncio
    async def test_overwrite_when_full_does_not_evict(self, cache: MemoryCacheProvider) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)
        await cache.set("b", 20)

        assert len(cache) == 3
        assert await cache.exists("a") is True

    @pytest.mark.asyncio
    async def test_delete_removes_key(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        await cache.delete("key1")
        assert await cache.get("key1") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, cache: MemoryCacheProvider) -> None:
        await cache.delete("nonexistent")

    def test_properties(self, cache: MemoryCacheProvider) -> None:
        assert cache.max_size == 3
        assert cache.ttl == 60
