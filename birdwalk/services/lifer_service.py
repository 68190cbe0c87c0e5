"""Lifer aggregation and scientific-name backfill over journal records.

A *lifer* is a species as it appears on the life list: every sighting of
one species code, grouped, with the most recent sighting first.  The
common and scientific names on a lifer come from its newest sighting,
and are what the image cards resolve.

``backfill_scientific_names`` fills in sightings recorded before the
scientific name was captured, using the taxonomy's code -> name map.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from birdwalk.models.journal import Lifer, LiferSighting, Sighting, Walk
from birdwalk.utils.logging import get_logger

_UNKNOWN_WALK = "Unknown Walk"

_logger: structlog.BoundLogger = get_logger(__name__)


def aggregate_lifers(sightings: Iterable[Sighting], walks: Iterable[Walk] = ()) -> list[Lifer]:
    """Group *sightings* by species code into lifers, newest first.

    Args:
        sightings: Sightings in any order.
        walks: Walks the sightings belong to; sightings whose walk is not
            present are listed under ``"Unknown Walk"``.

    Returns:
        One :class:`Lifer` per species code, sorted by most recent
        sighting, newest first.
    """
    walks_by_id = {walk.id: walk for walk in walks}
    grouped: dict[str, dict] = {}

    newest_first = sorted(sightings, key=lambda s: s.timestamp, reverse=True)
    for sighting in newest_first:
        walk = walks_by_id.get(sighting.walk_id)
        lifer_sighting = LiferSighting(
            id=sighting.id,
            timestamp=sighting.timestamp,
            walk_id=sighting.walk_id,
            walk_name=walk.name if walk else _UNKNOWN_WALK,
            walk_date=walk.date if walk else None,
        )

        existing = grouped.get(sighting.species_code)
        if existing is None:
            grouped[sighting.species_code] = {
                "species_code": sighting.species_code,
                "species_name": sighting.species_name,
                "scientific_name": sighting.scientific_name,
                "most_recent_sighting": sighting.timestamp,
                "total_sightings": 1,
                "sightings": [lifer_sighting],
            }
            continue

        existing["total_sightings"] += 1
        existing["sightings"].append(lifer_sighting)

    lifers = [Lifer(**fields) for fields in grouped.values()]
    lifers.sort(key=lambda lifer: lifer.most_recent_sighting, reverse=True)
    return lifers


def backfill_scientific_names(
    sightings: Iterable[Sighting],
    names_by_code: dict[str, str],
) -> tuple[list[Sighting], list[str]]:
    """Fill missing scientific names from a ``species_code -> name`` map.

    Only sightings without a scientific name are considered.

    Returns:
        A pair ``(updated, not_found)``: copies of the sightings that
        received a scientific name, and the species codes that had no
        entry in *names_by_code* (each listed once).
    """
    updated: list[Sighting] = []
    not_found: list[str] = []

    for sighting in sightings:
        if sighting.scientific_name:
            continue
        scientific_name = names_by_code.get(sighting.species_code)
        if scientific_name:
            updated.append(sighting.model_copy(update={"scientific_name": scientific_name}))
        elif sighting.species_code not in not_found:
            not_found.append(sighting.species_code)

    _logger.info(
        "scientific_name_backfill",
        updated=len(updated),
        not_found=len(not_found),
    )
    return updated, not_found
