"""Unit tests for ImageResolutionService."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from birdwalk.providers.cache.memory_cache import MemoryCacheProvider
from birdwalk.services.image_resolution_service import ImageResolutionService
from tests.conftest import RAVEN_THUMB, SCAUP_THUMB, FakeClock


@pytest.fixture
def service(mock_image_provider, memory_cache: MemoryCacheProvider) -> ImageResolutionService:
    return ImageResolutionService(provider=mock_image_provider, cache=memory_cache)


# ======================================================================
# resolve_name
# ======================================================================


class TestResolveName:
    @pytest.mark.asyncio
    async def test_miss_queries_provider_and_caches(
        self, service: ImageResolutionService, mock_image_provider, memory_cache: MemoryCacheProvider
    ) -> None:
        assert await service.resolve_name("Lesser Scaup") == SCAUP_THUMB

        mock_image_provider.lookup.assert_awaited_once_with("Lesser Scaup")
        entry = await memory_cache.get("Lesser scaup")
        assert entry is not None and entry.value == SCAUP_THUMB

    @pytest.mark.asyncio
    async def test_hit_skips_provider(
        self, service: ImageResolutionService, mock_image_provider
    ) -> None:
        await service.resolve_name("Lesser Scaup")
        await service.resolve_name("Lesser Scaup")

        assert mock_image_provider.lookup.await_count == 1

    @pytest.mark.asyncio
    async def test_case_variants_share_an_entry(
        self, service: ImageResolutionService, mock_image_provider
    ) -> None:
        await service.resolve_name("Lesser Scaup")
        assert await service.resolve_name("LESSER SCAUP") == SCAUP_THUMB
        assert await service.resolve_name("lesser scaup") == SCAUP_THUMB

        assert mock_image_provider.lookup.await_count == 1

    @pytest.mark.asyncio
    async def test_negative_result_is_cached(
        self, service: ImageResolutionService, mock_image_provider, memory_cache: MemoryCacheProvider
    ) -> None:
        assert await service.resolve_name("Mystery Warbler") is None
        assert await service.resolve_name("Mystery Warbler") is None

        assert mock_image_provider.lookup.await_count == 1
        assert await memory_cache.exists("Mystery warbler") is True

    @pytest.mark.asyncio
    async def test_expired_entry_is_requeried(
        self, service: ImageResolutionService, mock_image_provider, fake_clock: FakeClock
    ) -> None:
        await service.resolve_name("Lesser Scaup")
        fake_clock.advance(24 * 60 * 60 + 1)
        await service.resolve_name("Lesser Scaup")

        assert mock_image_provider.lookup.await_count == 2

    @pytest.mark.asyncio
    async def test_entry_within_ttl_is_reused(
        self, service: ImageResolutionService, mock_image_provider, fake_clock: FakeClock
    ) -> None:
        await service.resolve_name("Lesser Scaup")
        fake_clock.advance(24 * 60 * 60 - 1)
        await service.resolve_name("Lesser Scaup")

        assert mock_image_provider.lookup.await_count == 1

    @pytest.mark.asyncio
    async def test_capacity_evicts_oldest_name(
        self, service: ImageResolutionService, mock_image_provider, memory_cache: MemoryCacheProvider
    ) -> None:
        for i in range(1000):
            await service.resolve_name(f"Bird {i}")
        assert len(memory_cache) == 1000

        await service.resolve_name("Bird 1000")

        assert len(memory_cache) == 1000
        assert await memory_cache.exists("Bird 0") is False
        assert await memory_cache.exists("Bird 1") is True
        assert await memory_cache.exists("Bird 1000") is True


# ======================================================================
# resolve
# ======================================================================


class TestResolve:
    @pytest.mark.asyncio
    async def test_scientific_name_wins(self, service: ImageResolutionService) -> None:
        assert await service.resolve(["Corvus corax", "Common Raven"]) == RAVEN_THUMB

    @pytest.mark.asyncio
    async def test_falls_back_to_common_name(self, service: ImageResolutionService) -> None:
        assert await service.resolve(["Aythya affinis", "Lesser Scaup"]) == SCAUP_THUMB

    @pytest.mark.asyncio
    async def test_single_candidate(self, service: ImageResolutionService) -> None:
        assert await service.resolve(["Lesser Scaup"]) == SCAUP_THUMB

    @pytest.mark.asyncio
    async def test_no_candidate_has_image(self, service: ImageResolutionService) -> None:
        assert await service.resolve(["Testus nullus", "Mystery Warbler"]) is None

    @pytest.mark.asyncio
    async def test_every_candidate_is_looked_up(
        self, service: ImageResolutionService, mock_image_provider
    ) -> None:
        await service.resolve(["Corvus corax", "Common Raven"])

        looked_up = {c.args[0] for c in mock_image_provider.lookup.await_args_list}
        assert looked_up == {"Corvus corax", "Common Raven"}

    @pytest.mark.asyncio
    async def test_priority_is_by_position_not_completion(
        self, mock_image_provider, memory_cache: MemoryCacheProvider
    ) -> None:
        common_done = asyncio.Event()

        async def _lookup(name: str) -> str | None:
            if name == "Corvus corax":
                # Finish only after the common-name lookup has completed.
                await common_done.wait()
                return "https://img/scientific.jpg"
            common_done.set()
            return "https://img/common.jpg"

        mock_image_provider.lookup = AsyncMock(side_effect=_lookup)
        service = ImageResolutionService(provider=mock_image_provider, cache=memory_cache)

        result = await service.resolve(["Corvus corax", "Common Raven"])

        assert result == "https://img/scientific.jpg"

    @pytest.mark.asyncio
    async def test_failing_candidate_is_absorbed(
        self, mock_image_provider, memory_cache: MemoryCacheProvider
    ) -> None:
        async def _lookup(name: str) -> str | None:
            if name == "Aythya affinis":
                raise RuntimeError("provider blew up")
            return SCAUP_THUMB

        mock_image_provider.lookup = AsyncMock(side_effect=_lookup)
        service = ImageResolutionService(provider=mock_image_provider, cache=memory_cache)

        assert await service.resolve(["Aythya affinis", "Lesser Scaup"]) == SCAUP_THUMB
        # The failed candidate is not cached.
        assert await memory_cache.exists("Aythya affinis") is False

    @pytest.mark.asyncio
    async def test_empty_candidate_list(
        self, service: ImageResolutionService, mock_image_provider
    ) -> None:
        assert await service.resolve([]) is None
        mock_image_provider.lookup.assert_not_called()
