"""FastAPI API routes for birdwalk.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/wikipedia/image?name=..       GET     Resolve candidate names → image URL
# /api/v1/ebird/search?q=..             GET     Species autocomplete (eBird taxonomy)
# /api/v1/health                        GET     Health check + provider status
#
# DEPENDENCY INJECTION PATTERN:
# Each route declares its services as Annotated[...] params.  FastAPI
# resolves them via Depends() helpers that read from app.state (populated
# at startup in main.py's _build_all).  Tests populate app.state directly.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from birdwalk import __version__
from birdwalk.api.schemas import ErrorResponse, HealthResponse, ImageResponse, SpeciesSearchResult
from birdwalk.services.image_resolution_service import ImageResolutionService
from birdwalk.services.species_search_service import SpeciesSearchService
from birdwalk.utils.errors import BirdWalkError, ConfigurationError
from birdwalk.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

# Matches the server-side image cache TTL so a CDN can answer repeats.
_IMAGE_CACHE_SECONDS = 24 * 60 * 60


def _get_image_service(request: Request) -> ImageResolutionService:
    """Return the image resolution service from application state."""
    return request.app.state.image_service


def _get_species_search(request: Request) -> SpeciesSearchService:
    """Return the species search service from application state."""
    return request.app.state.species_search


def _get_image_cache_seconds(request: Request) -> int:
    return getattr(request.app.state, "image_cache_seconds", _IMAGE_CACHE_SECONDS)


ImageServiceDep = Annotated[ImageResolutionService, Depends(_get_image_service)]
SpeciesSearchDep = Annotated[SpeciesSearchService, Depends(_get_species_search)]
CacheSecondsDep = Annotated[int, Depends(_get_image_cache_seconds)]


# ---------------------------------------------------------------------------
# Species images
# ---------------------------------------------------------------------------


@router.get(
    "/wikipedia/image",
    response_model=ImageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Resolve a species image from candidate names",
)
async def get_species_image(
    response: Response,
    service: ImageServiceDep,
    cache_seconds: CacheSecondsDep,
    name: Annotated[list[str] | None, Query()] = None,
) -> ImageResponse:
    """Return the first image found across the ``name`` candidates, in order.

    Pass the scientific name first and the common name second, e.g.
    ``?name=Corvus%20corax&name=Common%20Raven``.
    """
    names = [n for n in (name or []) if n]
    if not names:
        raise HTTPException(status_code=400, detail="name parameter is required")

    try:
        image_url = await service.resolve(names)
    except Exception as exc:
        _logger.error("image_resolution_failed", names=names, error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to fetch image") from exc

    response.headers["Cache-Control"] = (
        f"public, max-age={cache_seconds}, s-maxage={cache_seconds}"
    )
    return ImageResponse(image_url=image_url)


# ---------------------------------------------------------------------------
# Species search
# ---------------------------------------------------------------------------


@router.get(
    "/ebird/search",
    response_model=list[SpeciesSearchResult],
    responses={500: {"model": ErrorResponse}},
    summary="Search species by common name",
)
async def search_species(
    search: SpeciesSearchDep,
    q: Annotated[str | None, Query()] = None,
) -> list[SpeciesSearchResult]:
    """Return up to 10 species whose common name contains ``q`` (2+ chars)."""
    try:
        matches = await search.search(q)
    except ConfigurationError as exc:
        _logger.error("species_search_not_configured", error=str(exc))
        raise HTTPException(status_code=500, detail="eBird API not configured") from exc
    except BirdWalkError as exc:
        _logger.error("species_search_failed", query=q, error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to search species") from exc

    return [
        SpeciesSearchResult(
            species_code=entry.species_code,
            common_name=entry.common_name,
            scientific_name=entry.scientific_name,
        )
        for entry in matches
    ]


# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and provider availability."""
    providers: dict[str, Any] = dict(getattr(request.app.state, "provider_registry", {}))
    cache = getattr(request.app.state, "image_cache", None)

    status = "healthy" if providers.get("wikipedia", False) else "unhealthy"
    if status == "healthy" and not providers.get("ebird", False):
        status = "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        providers=providers,
        image_cache_size=len(cache) if cache is not None else 0,
    )
