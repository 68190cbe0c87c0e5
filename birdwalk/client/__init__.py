"""Consumer-side access to the species image endpoint."""

from birdwalk.client.image_client import BirdImageClient, ImageRequest, cache_key

__all__ = ["BirdImageClient", "ImageRequest", "cache_key"]
