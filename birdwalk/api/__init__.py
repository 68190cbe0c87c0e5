"""birdwalk API layer - routes, schemas, and middleware."""

from birdwalk.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from birdwalk.api.routes import router
from birdwalk.api.schemas import (
    ErrorResponse,
    HealthResponse,
    ImageResponse,
    SpeciesSearchResult,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "ImageResponse",
    "SpeciesSearchResult",
]
