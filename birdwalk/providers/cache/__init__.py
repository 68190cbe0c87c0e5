"""Cache providers.

MemoryCacheProvider is a process-local cache with TTL expiry and
insertion-order eviction.  It is not shared across worker processes; for a
multi-worker deployment, swap in another ICacheProvider adapter without
changing the resolution service.
"""

from birdwalk.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
