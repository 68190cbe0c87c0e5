# =============================================================================
# birdwalk/cli/lookup.py - Command-line lookups without the web server
# =============================================================================
#
# Runs the same providers and services the API uses, directly:
#
#   python -m birdwalk.cli image "Common Raven" --scientific "Corvus corax"
#   python -m birdwalk.cli search rav
#   python -m birdwalk.cli lifers journal.json
#   python -m birdwalk.cli --json backfill journal.json
#
# Journal files are JSON objects of the form
#   {"walks": [...], "sightings": [...]}
# with records shaped like birdwalk.models.journal.Walk / Sighting.
#
# --json prints machine-readable output and implies --quiet so stdout holds
# nothing but the result.
# =============================================================================

"""Command-line access to species image lookup, species search and lifers."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from birdwalk.config.settings import Settings
from birdwalk.models.journal import Sighting, Walk
from birdwalk.providers.image.wikipedia_provider import WikipediaImageProvider
from birdwalk.providers.taxonomy.ebird_provider import EBirdTaxonomyProvider
from birdwalk.services.lifer_service import aggregate_lifers, backfill_scientific_names
from birdwalk.services.species_search_service import SpeciesSearchService
from birdwalk.utils.errors import BirdWalkError
from birdwalk.utils.logging import quiet_logging
from birdwalk.utils.name_normalizer import candidate_names


def _load_journal(path: Path) -> tuple[list[Walk], list[Sighting]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with 'walks' and 'sightings'")
    walks = [Walk.model_validate(item) for item in data.get("walks", [])]
    sightings = [Sighting.model_validate(item) for item in data.get("sightings", [])]
    return walks, sightings


def _read_journal_or_report(path: Path) -> tuple[list[Walk], list[Sighting]] | None:
    try:
        return _load_journal(path)
    except (OSError, json.JSONDecodeError, ValidationError, TypeError, ValueError) as exc:
        print(f"Error: cannot read journal {path}: {exc}", file=sys.stderr)
        return None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _cmd_image(args: argparse.Namespace, settings: Settings) -> int:
    provider = WikipediaImageProvider(settings=settings)
    try:
        names = candidate_names(args.name, args.scientific)
        image_url = await provider.resolve_image(names)
    finally:
        await provider.aclose()

    if args.json_output:
        print(json.dumps({"imageUrl": image_url}))
    else:
        print(image_url or "No image found")
    return 0 if image_url else 1


async def _cmd_search(args: argparse.Namespace, settings: Settings) -> int:
    provider = EBirdTaxonomyProvider(settings=settings)
    service = SpeciesSearchService(provider=provider, ttl=settings.ebird_taxonomy_ttl)
    try:
        matches = await service.search(args.query)
    except BirdWalkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await provider.aclose()

    if args.json_output:
        payload = [
            {
                "speciesCode": m.species_code,
                "comName": m.common_name,
                "sciName": m.scientific_name,
            }
            for m in matches
        ]
        print(json.dumps(payload, indent=2))
    else:
        for m in matches:
            print(f"{m.species_code:<10} {m.common_name} ({m.scientific_name})")
    return 0


async def _cmd_lifers(args: argparse.Namespace, settings: Settings) -> int:
    journal = _read_journal_or_report(Path(args.journal))
    if journal is None:
        return 1
    walks, sightings = journal
    lifers = aggregate_lifers(sightings, walks)

    if args.json_output:
        print(json.dumps([lifer.model_dump(mode="json") for lifer in lifers], indent=2))
    else:
        print(f"Life list: {len(lifers)} species")
        for lifer in lifers:
            print(
                f"  {lifer.species_name:<30} x{lifer.total_sightings:<3} "
                f"last {lifer.most_recent_sighting:%Y-%m-%d}"
            )
    return 0


async def _cmd_backfill(args: argparse.Namespace, settings: Settings) -> int:
    journal = _read_journal_or_report(Path(args.journal))
    if journal is None:
        return 1
    _walks, sightings = journal

    provider = EBirdTaxonomyProvider(settings=settings)
    service = SpeciesSearchService(provider=provider, ttl=settings.ebird_taxonomy_ttl)
    try:
        names_by_code = await service.scientific_names()
    except BirdWalkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await provider.aclose()

    updated, not_found = backfill_scientific_names(sightings, names_by_code)

    if args.json_output:
        print(
            json.dumps(
                {
                    "updated": [s.model_dump(mode="json") for s in updated],
                    "notFound": not_found,
                },
                indent=2,
            )
        )
    else:
        for sighting in updated:
            print(f"+ {sighting.species_name} -> {sighting.scientific_name}")
        for code in not_found:
            print(f"- no scientific name for species code: {code}")
        print(f"Updated {len(updated)} sightings, {len(not_found)} species codes not found")
    return 0


_COMMANDS = {
    "image": _cmd_image,
    "search": _cmd_search,
    "lifers": _cmd_lifers,
    "backfill": _cmd_backfill,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m birdwalk.cli",
        description="Species image lookup, species search and life-list tools.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    image = sub.add_parser("image", help="Find a Wikipedia image for a species.")
    image.add_argument("name", help="Common name, e.g. 'Common Raven'.")
    image.add_argument("--scientific", "-s", default=None, help="Scientific name (tried first).")

    search = sub.add_parser("search", help="Search eBird species by common name.")
    search.add_argument("query")

    lifers = sub.add_parser("lifers", help="Print the life list from a journal file.")
    lifers.add_argument("journal", help="Path to a journal JSON file.")

    backfill = sub.add_parser("backfill", help="Fill missing scientific names from eBird.")
    backfill.add_argument("journal", help="Path to a journal JSON file.")

    return parser


def run(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Parse *argv*, run the selected command, and return its exit code."""
    args = _build_parser().parse_args(argv)
    if args.quiet or args.json_output:
        quiet_logging()

    command = _COMMANDS[args.command]
    return asyncio.run(command(args, settings or Settings()))


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
