"""birdwalk domain models - re-exports the journal record types."""

from __future__ import annotations

from birdwalk.models.journal import Lifer, LiferSighting, Sighting, SightingType, Walk

__all__ = [
    "Lifer",
    "LiferSighting",
    "Sighting",
    "SightingType",
    "Walk",
]
