"""Server-side species image resolution with a shared TTL cache.

Sits between the image endpoint and the image provider.  One request may
carry several candidate names for the same bird (scientific name first,
then common name).  Every candidate is resolved concurrently, each through
the cache, and the answer is the first non-null URL *by candidate
position*, not by which lookup happened to finish first.

Architecture role: **Cache-aside facade**
-----------------------------------------
- Cache keys are the Wikipedia sentence-case form of the name, so
  "Common Raven", "COMMON RAVEN" and "Common raven" share one entry.
- ``None`` ("no picture for this bird") is cached exactly like a URL so
  birds without an image are not re-queried on every page view.
- A lookup that raises is absorbed as ``None`` for that candidate only;
  the other candidates of the request are unaffected.

Cache access never suspends between the check and the write-back (the
memory cache's coroutines do not await anything), so under the
single-threaded event loop no lock is needed around it.
"""

from __future__ import annotations

import asyncio

import structlog

from birdwalk.interfaces.cache_provider import ICacheProvider
from birdwalk.interfaces.image_provider import IImageProvider
from birdwalk.utils.concurrency import throttled_gather
from birdwalk.utils.logging import get_logger
from birdwalk.utils.name_normalizer import normalize_species_name


class ImageResolutionService:
    """Resolve candidate species names to one image URL, with caching.

    Parameters
    ----------
    provider:
        The image provider consulted on a cache miss.
    cache:
        Cache holding normalized-name -> URL-or-None entries.  Its lifecycle
        is the process; tests construct a fresh one per case.
    max_concurrency:
        Upper bound on simultaneous provider lookups across all requests.
    """

    def __init__(
        self,
        provider: IImageProvider,
        cache: ICacheProvider,
        max_concurrency: int = 8,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    async def resolve_name(self, name: str) -> str | None:
        """Return the image URL for one *name*, consulting the cache first."""
        key = normalize_species_name(name)

        entry = await self._cache.get(key)
        if entry is not None:
            self._logger.debug("image_cache_hit", key=key, found=entry.value is not None)
            return entry.value

        image_url = await self._provider.lookup(name)
        await self._cache.set(key, image_url)
        self._logger.debug("image_cache_store", key=key, found=image_url is not None)
        return image_url

    async def resolve(self, names: list[str]) -> str | None:
        """Resolve all *names* concurrently and return the first hit by position.

        Parameters
        ----------
        names:
            Candidate names in priority order (scientific name first).

        Returns
        -------
        str or None
            The URL of the highest-priority candidate that has an image,
            or ``None`` when no candidate does.
        """
        results = await throttled_gather(
            [self.resolve_name(name) for name in names],
            semaphore=self._semaphore,
            return_exceptions=True,
        )

        image_url: str | None = None
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                self._logger.warning(
                    "image_candidate_failed",
                    name=name,
                    error=str(result),
                )
                continue
            if result is not None and image_url is None:
                image_url = result

        self._logger.info(
            "image_resolved",
            candidates=names,
            found=image_url is not None,
        )
        return image_url
