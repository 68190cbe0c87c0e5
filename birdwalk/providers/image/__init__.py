"""Species image providers.

WikipediaImageProvider is the only implementation: it looks up the lead
thumbnail of a bird's English Wikipedia article.
"""

from birdwalk.providers.image.wikipedia_provider import WikipediaImageProvider

__all__ = ["WikipediaImageProvider"]
