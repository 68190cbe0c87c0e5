"""Pydantic response schemas for the birdwalk API.

# ─── HOW SCHEMAS WORK ─────────────────────────────────────────────────
#
# These Pydantic models define the *shape* of every HTTP response body.
# FastAPI uses them for serialization (via response_model=...) and for
# the generated OpenAPI docs at /docs.
#
# The browser-facing JSON uses camelCase keys (``imageUrl``,
# ``speciesCode``).  Fields stay snake_case in Python and carry a camelCase
# alias; FastAPI serializes response models by alias.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImageResponse(BaseModel):
    """Resolved species image, or ``null`` when no candidate has one."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: str | None = Field(default=None, alias="imageUrl")


class SpeciesSearchResult(BaseModel):
    """One species matching a search query."""

    model_config = ConfigDict(populate_by_name=True)

    species_code: str = Field(alias="speciesCode")
    common_name: str = Field(alias="comName")
    scientific_name: str = Field(alias="sciName")


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]
    image_cache_size: int = 0


class ErrorResponse(BaseModel):
    """Standard error response body for application errors."""

    error: str
    detail: str | None = None
