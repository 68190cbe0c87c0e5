"""Shared pytest fixtures for the birdwalk test suite."""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from birdwalk.interfaces.image_provider import IImageProvider
from birdwalk.interfaces.taxonomy_provider import ITaxonomyProvider, TaxonEntry
from birdwalk.models.journal import Sighting, SightingType, Walk
from birdwalk.providers.cache.memory_cache import MemoryCacheProvider

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"

RAVEN_THUMB = "https://upload.wikimedia.org/thumb/Corvus_corax.jpg/400px-Corvus_corax.jpg"
SCAUP_THUMB = "https://upload.wikimedia.org/thumb/Aythya_affinis.jpg/400px-Aythya_affinis.jpg"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for cache TTL tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def wikipedia_page(title: str, thumbnail: str | None, page_id: str = "12345") -> dict[str, Any]:
    """Build a MediaWiki ``pageimages`` query response body."""
    page: dict[str, Any] = {"pageid": int(page_id), "ns": 0, "title": title}
    if thumbnail:
        page["thumbnail"] = {"source": thumbnail, "width": 400, "height": 300}
    return {"batchcomplete": "", "query": {"pages": {page_id: page}}}


def wikipedia_missing(title: str) -> dict[str, Any]:
    """Build the MediaWiki response for a title with no article."""
    return {"batchcomplete": "", "query": {"pages": {"-1": {"ns": 0, "title": title, "missing": ""}}}}


def json_response(payload: Any, status_code: int = 200, url: str = WIKIPEDIA_API_URL) -> httpx.Response:
    """Build a real httpx response bound to a request so raise_for_status works."""
    return httpx.Response(status_code, json=payload, request=httpx.Request("GET", url))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(fake_clock: FakeClock) -> MemoryCacheProvider:
    """A fresh image cache with the production TTL and capacity."""
    return MemoryCacheProvider(max_size=1000, ttl=24 * 60 * 60, timer=fake_clock)


@pytest.fixture
def mock_image_provider() -> IImageProvider:
    """Mock IImageProvider whose lookup() answers from a name -> URL table.

    Override with ``mock_image_provider.lookup.side_effect = ...`` for
    specific tests.
    """
    images = {
        "Corvus corax": RAVEN_THUMB,
        "Common Raven": RAVEN_THUMB,
        "Lesser Scaup": SCAUP_THUMB,
    }

    async def _lookup(name: str) -> str | None:
        return images.get(name)

    mock = MagicMock(spec=IImageProvider)
    mock.get_provider_name.return_value = "mock-images"
    mock.is_available.return_value = True
    mock.lookup = AsyncMock(side_effect=_lookup)
    mock.fetch_one = AsyncMock(return_value=None)
    mock.resolve_image = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def sample_taxonomy() -> list[TaxonEntry]:
    """A small slice of the eBird taxonomy, including many 'rav' matches."""
    entries = [
        TaxonEntry("comrav", "Common Raven", "Corvus corax"),
        TaxonEntry("chirav", "Chihuahuan Raven", "Corvus cryptoleucus"),
        TaxonEntry("lessca", "Lesser Scaup", "Aythya affinis"),
        TaxonEntry("amecro", "American Crow", "Corvus brachyrhynchos"),
        TaxonEntry("gragra", "Gray Gravelbird", "Testus gravelus"),
    ]
    # Twelve extra ravens so the result cap is exercised.
    entries.extend(
        TaxonEntry(f"rav{i:03d}", f"Test Raven {i}", f"Corvus testus{i}") for i in range(12)
    )
    return entries


@pytest.fixture
def mock_taxonomy_provider(sample_taxonomy: list[TaxonEntry]) -> ITaxonomyProvider:
    """Mock ITaxonomyProvider returning ``sample_taxonomy``."""
    mock = MagicMock(spec=ITaxonomyProvider)
    mock.get_provider_name.return_value = "mock-ebird"
    mock.is_available.return_value = True
    mock.get_taxonomy = AsyncMock(return_value=sample_taxonomy)
    return mock


@pytest.fixture
def sample_walks() -> list[Walk]:
    return [
        Walk(
            id="walk-1",
            name="Lakeshore loop",
            date=datetime.date(2024, 4, 6),
            start_time=datetime.datetime(2024, 4, 6, 7, 30, tzinfo=datetime.timezone.utc),
            user_id="user-1",
        ),
        Walk(
            id="walk-2",
            name="Ridge trail",
            date=datetime.date(2024, 5, 11),
            start_time=datetime.datetime(2024, 5, 11, 6, 45, tzinfo=datetime.timezone.utc),
            notes="Windy",
            latitude=45.52,
            longitude=-122.68,
            user_id="user-1",
        ),
    ]


@pytest.fixture
def sample_sightings() -> list[Sighting]:
    utc = datetime.timezone.utc
    return [
        Sighting(
            id="s-1",
            walk_id="walk-1",
            species_code="comrav",
            species_name="Common Raven",
            scientific_name="Corvus corax",
            timestamp=datetime.datetime(2024, 4, 6, 7, 45, tzinfo=utc),
        ),
        Sighting(
            id="s-2",
            walk_id="walk-1",
            species_code="lessca",
            species_name="Lesser Scaup",
            type=SightingType.SEEN,
            timestamp=datetime.datetime(2024, 4, 6, 8, 10, tzinfo=utc),
        ),
        Sighting(
            id="s-3",
            walk_id="walk-2",
            species_code="comrav",
            species_name="Common Raven",
            scientific_name="Corvus corax",
            type=SightingType.HEARD,
            timestamp=datetime.datetime(2024, 5, 11, 7, 5, tzinfo=utc),
        ),
        Sighting(
            id="s-4",
            walk_id="walk-gone",
            species_code="xxxunk",
            species_name="Mystery Warbler",
            timestamp=datetime.datetime(2024, 3, 1, 9, 0, tzinfo=utc),
        ),
    ]
