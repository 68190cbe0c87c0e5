"""Utility modules for birdwalk.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at BirdWalkError.
- **concurrency** -- asyncio semaphore throttling for fan-out lookups.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **name_normalizer** -- Wikipedia sentence-case folding for species names
  and candidate-name ordering (scientific first, then common).
"""

from birdwalk.utils.concurrency import throttled_gather
from birdwalk.utils.errors import (
    BirdWalkError,
    ConfigurationError,
    ImageLookupError,
    ProviderUnavailableError,
    TaxonomyError,
)
from birdwalk.utils.logging import configure_logging, get_logger, quiet_logging
from birdwalk.utils.name_normalizer import candidate_names, normalize_species_name

__all__ = [
    "BirdWalkError",
    "ConfigurationError",
    "ImageLookupError",
    "ProviderUnavailableError",
    "TaxonomyError",
    "candidate_names",
    "configure_logging",
    "get_logger",
    "normalize_species_name",
    "quiet_logging",
    "throttled_gather",
]
