"""birdwalk - a personal bird-sighting journal service.

The interesting part of the package is species image resolution: mapping a
bird's common or scientific name to a Wikipedia thumbnail, with a TTL cache
on the server side and a deduplicating cache on the client side.
"""

__version__ = "0.1.0"
