"""eBird taxonomy provider.

Fetches the full eBird species taxonomy (``/v2/ref/taxonomy/ebird``,
species category only) using the ``X-eBirdApiToken`` header.  The listing
is roughly 11k entries; callers are expected to cache it.
"""

from __future__ import annotations

import httpx
import structlog

from birdwalk.config.settings import Settings
from birdwalk.interfaces.taxonomy_provider import ITaxonomyProvider, TaxonEntry
from birdwalk.utils.errors import ConfigurationError, ProviderUnavailableError, TaxonomyError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 30.0


class EBirdTaxonomyProvider(ITaxonomyProvider):
    """eBird 2.0 taxonomy API client."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._api_key = settings.ebird_api_key
        self._taxonomy_url = settings.ebird_taxonomy_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(_DEFAULT_TIMEOUT),
            headers={"User-Agent": settings.user_agent},
        )

    async def get_taxonomy(self) -> list[TaxonEntry]:
        """Download and parse the species-level taxonomy."""
        if not self._api_key:
            raise ConfigurationError(
                message="eBird API not configured",
                provider_name=self.get_provider_name(),
            )

        try:
            response = await self._client.get(
                self._taxonomy_url,
                params={"fmt": "json", "cat": "species"},
                headers={"X-eBirdApiToken": self._api_key},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise TaxonomyError(
                message=f"eBird API error: {exc.response.status_code}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                message=f"eBird API unreachable: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise TaxonomyError(
                message=f"eBird taxonomy is not valid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(payload, list):
            raise TaxonomyError(
                message="eBird taxonomy response is not a list",
                provider_name=self.get_provider_name(),
            )

        entries: list[TaxonEntry] = []
        for item in payload:
            if not isinstance(item, dict) or not item.get("speciesCode"):
                continue
            entries.append(
                TaxonEntry(
                    species_code=item["speciesCode"],
                    common_name=item.get("comName", ""),
                    scientific_name=item.get("sciName", ""),
                )
            )

        logger.info("ebird_taxonomy_loaded", species=len(entries))
        return entries

    def get_provider_name(self) -> str:
        return "ebird"

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
