"""Wikipedia species image provider.

Queries the MediaWiki ``pageimages`` API for the lead thumbnail of a bird's
article.  Titles are matched exactly, so names are first folded to
Wikipedia's sentence case ("Common Raven" -> "Common raven"); if that
misses, the untouched original string is tried as well.

Every failure (transport error, bad status, unparseable body, missing page,
page without a thumbnail) degrades to ``None``.  Nothing is retried.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from birdwalk.config.settings import Settings
from birdwalk.interfaces.image_provider import IImageProvider
from birdwalk.utils.errors import ImageLookupError
from birdwalk.utils.name_normalizer import normalize_species_name

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"
_DEFAULT_THUMB_SIZE = 400
_DEFAULT_TIMEOUT = 10.0

# MediaWiki reports an unknown title as a single page keyed "-1".
_MISSING_PAGE_ID = "-1"


class WikipediaImageProvider(IImageProvider):
    """Species thumbnails from the English Wikipedia ``pageimages`` API.

    Parameters
    ----------
    http_client:
        Shared async client.  When omitted the provider creates and owns
        its own client, closed by :meth:`aclose`.
    settings:
        Optional settings supplying the API URL, thumbnail size and user
        agent.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._api_url = settings.wikipedia_api_url if settings else _DEFAULT_API_URL
        self._thumb_size = settings.wikipedia_thumb_size if settings else _DEFAULT_THUMB_SIZE
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout if settings else _DEFAULT_TIMEOUT),
            headers={"User-Agent": settings.user_agent} if settings else None,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _query(self, title: str) -> dict[str, Any]:
        """Run the page-info query for *title* and return the decoded body."""
        try:
            response = await self._client.get(
                self._api_url,
                params={
                    "action": "query",
                    "titles": title,
                    "prop": "pageimages",
                    "format": "json",
                    "piprop": "thumbnail",
                    "pithumbsize": str(self._thumb_size),
                },
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ImageLookupError(
                message=f"HTTP {exc.response.status_code} looking up '{title}'",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise ImageLookupError(
                message=f"Request failed looking up '{title}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise ImageLookupError(
                message=f"Unparseable response for '{title}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, dict):
            raise ImageLookupError(
                message=f"Unexpected response shape for '{title}'",
                provider_name=self.get_provider_name(),
            )
        return data

    @staticmethod
    def _extract_thumbnail(data: dict[str, Any]) -> str | None:
        """Pull the thumbnail URL of the first page out of a query response."""
        pages = (data.get("query") or {}).get("pages")
        if not pages or not isinstance(pages, dict):
            return None

        page_id = next(iter(pages))
        if page_id == _MISSING_PAGE_ID:
            return None

        thumbnail = (pages[page_id] or {}).get("thumbnail") or {}
        return thumbnail.get("source") or None

    # ------------------------------------------------------------------
    # IImageProvider implementation
    # ------------------------------------------------------------------

    async def fetch_one(self, title: str) -> str | None:
        """Return the thumbnail URL for the exact Wikipedia *title*, or ``None``."""
        try:
            data = await self._query(title)
        except ImageLookupError as exc:
            logger.warning("wikipedia_lookup_failed", title=title, error=str(exc))
            return None

        image_url = self._extract_thumbnail(data)
        logger.debug("wikipedia_lookup", title=title, found=image_url is not None)
        return image_url

    async def lookup(self, name: str) -> str | None:
        """Resolve *name* via its sentence-case title, then the raw string."""
        title = normalize_species_name(name)
        image_url = await self.fetch_one(title)
        if image_url is None and title != name:
            image_url = await self.fetch_one(name)
        return image_url

    async def resolve_image(self, candidate_names: list[str]) -> str | None:
        """Return the first image found across *candidate_names*, in order."""
        for name in candidate_names:
            image_url = await self.lookup(name)
            if image_url is not None:
                logger.info("wikipedia_image_resolved", name=name)
                return image_url

        logger.info("wikipedia_image_not_found", candidates=candidate_names)
        return None

    def get_provider_name(self) -> str:
        return "wikipedia"

    def is_available(self) -> bool:
        return True

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
