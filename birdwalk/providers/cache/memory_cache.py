"""In-memory cache provider for species image lookups.

Backed by ``cachetools.FIFOCache`` so that a full cache evicts the entry
that was inserted first, regardless of how often it has been read since.
Expiry is lazy: each entry carries its write time, and a read that finds
an entry older than the TTL drops it and reports a miss.  There is no
background sweep; capacity eviction keeps the cache bounded.

One instance lives for the whole process (it is created in the app
lifespan and held on ``app.state``).  Tests build a fresh instance each.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import structlog
from cachetools import FIFOCache

from birdwalk.interfaces.cache_provider import CacheEntry, ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """Bounded in-memory cache with a uniform TTL and insertion-order eviction.

    Parameters
    ----------
    max_size:
        Maximum number of entries.  Inserting a new key into a full cache
        first evicts the oldest-inserted entry.
    ttl:
        Time-to-live in seconds, measured from the write.
    timer:
        Clock used to stamp and age entries.  Defaults to
        ``time.monotonic``; tests inject a fake clock.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl: float = 24 * 60 * 60,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._timer = timer
        self._cache: FIFOCache[str, CacheEntry] = FIFOCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def ttl(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._cache)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for *key*, dropping it if it has expired."""
        entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None

        if self._timer() - entry.stored_at > self._ttl:
            del self._cache[key]
            logger.debug("cache_expired", key=key)
            return None

        logger.debug("cache_hit", key=key)
        return entry

    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*; evicts the oldest entry when full."""
        if key not in self._cache and len(self._cache) >= self._cache.maxsize:
            logger.debug("cache_evict", size=len(self._cache))
        self._cache[key] = CacheEntry(value=value, stored_at=self._timer())
        logger.debug("cache_set", key=key, cached_none=value is None)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return await self.get(key) is not None
