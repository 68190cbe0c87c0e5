"""Journal records: walks, sightings and the lifer view built from them.

Walks and sightings are owned by the relational store; birdwalk only reads
them.  The image subsystem consumes nothing but ``species_name`` and
``scientific_name``.  All models use frozen config so a record handed to
a service cannot be mutated behind the store's back.
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SightingType(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """How the bird was detected."""

    SEEN = "seen"
    HEARD = "heard"


class Walk(BaseModel):
    """A birding session with a name, a date and an owner."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    date: datetime.date
    start_time: datetime.datetime
    notes: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    user_id: str


class Sighting(BaseModel):
    """One observation of one species during one walk."""

    model_config = ConfigDict(frozen=True)

    id: str
    walk_id: str
    species_code: str
    species_name: str
    scientific_name: str | None = None
    type: SightingType = SightingType.SEEN
    notes: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    timestamp: datetime.datetime


class LiferSighting(BaseModel):
    """A sighting as listed under a lifer, with its walk's name and date."""

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime.datetime
    walk_id: str
    walk_name: str
    walk_date: datetime.date | None = None


class Lifer(BaseModel):
    """Every sighting of one species, aggregated across all walks."""

    model_config = ConfigDict(frozen=True)

    species_code: str
    species_name: str
    scientific_name: str | None = None
    most_recent_sighting: datetime.datetime
    total_sightings: int = Field(ge=1)
    sightings: list[LiferSighting] = Field(default_factory=list)
