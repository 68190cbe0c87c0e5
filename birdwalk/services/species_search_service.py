"""Species search over the eBird taxonomy.

Backs the species autocomplete: a substring match on common names against
the full taxonomy listing.  The listing is large and changes about once a
year, so it is held in a one-slot ``cachetools.TTLCache`` instead of being
downloaded on every keystroke.

Also exposes the species-code -> scientific-name map used to fill in
scientific names on sightings recorded before they were captured.
"""

from __future__ import annotations

import asyncio

import structlog
from cachetools import TTLCache

from birdwalk.interfaces.taxonomy_provider import ITaxonomyProvider, TaxonEntry
from birdwalk.utils.logging import get_logger

_TAXONOMY_KEY = "taxonomy"

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


class SpeciesSearchService:
    """Case-insensitive common-name search over a cached taxonomy.

    Parameters
    ----------
    provider:
        Source of the taxonomy listing.
    ttl:
        Seconds the downloaded listing stays cached.
    min_query_length:
        Queries shorter than this return no results without touching the
        provider.
    max_results:
        Cap on the number of matches returned.
    """

    def __init__(
        self,
        provider: ITaxonomyProvider,
        ttl: int = 24 * 60 * 60,
        min_query_length: int = MIN_QUERY_LENGTH,
        max_results: int = MAX_RESULTS,
    ) -> None:
        self._provider = provider
        self._min_query_length = min_query_length
        self._max_results = max_results
        self._cache: TTLCache[str, list[TaxonEntry]] = TTLCache(maxsize=1, ttl=ttl)
        # Serializes the download so concurrent keystrokes share one fetch.
        self._load_lock = asyncio.Lock()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def _get_taxonomy(self) -> list[TaxonEntry]:
        async with self._load_lock:
            taxonomy = self._cache.get(_TAXONOMY_KEY)
            if taxonomy is None:
                taxonomy = await self._provider.get_taxonomy()
                self._cache[_TAXONOMY_KEY] = taxonomy
            return taxonomy

    async def search(self, query: str | None) -> list[TaxonEntry]:
        """Return up to ``max_results`` species whose common name contains *query*.

        Raises whatever the provider raises (``ConfigurationError``,
        ``TaxonomyError``, ``ProviderUnavailableError``).
        """
        if not query or len(query) < self._min_query_length:
            return []

        taxonomy = await self._get_taxonomy()
        needle = query.lower()
        matches = [entry for entry in taxonomy if needle in entry.common_name.lower()]

        self._logger.debug("species_search", query=query, matches=len(matches))
        return matches[: self._max_results]

    async def scientific_names(self) -> dict[str, str]:
        """Return a ``species_code -> scientific_name`` map for the whole taxonomy."""
        taxonomy = await self._get_taxonomy()
        return {entry.species_code: entry.scientific_name for entry in taxonomy}
