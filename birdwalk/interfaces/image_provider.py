"""Abstract base class for species image providers.

An image provider turns a bird's name into the URL of a representative
picture.  Lookups never raise: every failure mode (network error, bad
status, unknown title, page without a picture) is reported as ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: WikipediaImageProvider (birdwalk/providers/image/)
class IImageProvider(ABC):
    """Contract for services that resolve species names to image URLs."""

    @abstractmethod
    async def fetch_one(self, title: str) -> str | None:
        """Query the backing service for the exact *title* given.

        Returns
        -------
        str or None
            The image URL, or ``None`` if there is no image or the request
            failed.
        """

    @abstractmethod
    async def lookup(self, name: str) -> str | None:
        """Resolve a single free-form species *name* to an image URL.

        Implementations normalize the name to the service's title
        convention and may fall back to the raw name.
        """

    @abstractmethod
    async def resolve_image(self, candidate_names: list[str]) -> str | None:
        """Try each of *candidate_names* in order and return the first hit.

        Later candidates are not queried once one succeeds.  Returns
        ``None`` only if every candidate fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider (e.g. ``"wikipedia"``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured and usable."""
