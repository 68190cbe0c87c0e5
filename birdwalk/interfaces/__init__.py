"""Abstract provider contracts.

Business logic depends only on these interfaces; concrete adapters live in
``birdwalk.providers`` and are wired together in ``birdwalk.main``.
"""

from birdwalk.interfaces.cache_provider import CacheEntry, ICacheProvider
from birdwalk.interfaces.image_provider import IImageProvider
from birdwalk.interfaces.taxonomy_provider import ITaxonomyProvider, TaxonEntry

__all__ = [
    "CacheEntry",
    "ICacheProvider",
    "IImageProvider",
    "ITaxonomyProvider",
    "TaxonEntry",
]
