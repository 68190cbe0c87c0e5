"""Business services: image resolution, species search and lifer aggregation."""

from birdwalk.services.image_resolution_service import ImageResolutionService
from birdwalk.services.lifer_service import aggregate_lifers, backfill_scientific_names
from birdwalk.services.species_search_service import SpeciesSearchService

__all__ = [
    "ImageResolutionService",
    "SpeciesSearchService",
    "aggregate_lifers",
    "backfill_scientific_names",
]
