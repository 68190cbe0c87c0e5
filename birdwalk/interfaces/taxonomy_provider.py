"""Abstract base class for species taxonomy providers.

A taxonomy provider returns the full species listing of an external bird
database (eBird).  Searching and code-to-name mapping happen in
:mod:`birdwalk.services.species_search_service`; providers only fetch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TaxonEntry:
    """One species in the taxonomy.

    Attributes
    ----------
    species_code:
        eBird species code, e.g. ``"comrav"``.
    common_name:
        English common name, e.g. ``"Common Raven"``.
    scientific_name:
        Binomial name, e.g. ``"Corvus corax"``.
    """

    species_code: str
    common_name: str
    scientific_name: str


class ITaxonomyProvider(ABC):
    """Contract for services that list known bird species."""

    @abstractmethod
    async def get_taxonomy(self) -> list[TaxonEntry]:
        """Fetch every species in the taxonomy.

        Raises
        ------
        birdwalk.utils.errors.ConfigurationError
            If the provider is missing its credentials.
        birdwalk.utils.errors.TaxonomyError
            If the upstream request fails or returns unparseable data.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider (e.g. ``"ebird"``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
