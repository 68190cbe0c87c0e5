"""Species taxonomy providers (eBird)."""

from birdwalk.providers.taxonomy.ebird_provider import EBirdTaxonomyProvider

__all__ = ["EBirdTaxonomyProvider"]
