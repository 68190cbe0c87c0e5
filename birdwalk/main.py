"""birdwalk FastAPI application entry point.

Wires together providers, caches, services, and routes via dependency
injection.  Loads configuration from ``.env`` and ``config/config.yaml``
and configures structured logging.

The image cache built here lives for the whole process: it is created once
in the lifespan, stored on ``app.state``, and never torn down explicitly.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from birdwalk import __version__
from birdwalk.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from birdwalk.api.routes import router as api_router
from birdwalk.config.loader import load_config
from birdwalk.config.settings import Settings
from birdwalk.providers.cache.memory_cache import MemoryCacheProvider
from birdwalk.providers.image.wikipedia_provider import WikipediaImageProvider
from birdwalk.providers.taxonomy.ebird_provider import EBirdTaxonomyProvider
from birdwalk.services.image_resolution_service import ImageResolutionService
from birdwalk.services.species_search_service import SpeciesSearchService
from birdwalk.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    app_config = app_config or {}
    ebird_config = app_config.get("ebird", {})

    # -- Shared resources --
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.http_timeout),
        headers={"User-Agent": app_settings.user_agent},
    )

    # -- Species images --
    image_provider = WikipediaImageProvider(http_client=http_client, settings=app_settings)
    image_cache = MemoryCacheProvider(
        max_size=app_settings.image_cache_max_size,
        ttl=app_settings.image_cache_ttl,
    )
    image_service = ImageResolutionService(
        provider=image_provider,
        cache=image_cache,
        max_concurrency=app_settings.image_lookup_concurrency,
    )

    # -- Species search --
    taxonomy_provider = EBirdTaxonomyProvider(settings=app_settings, http_client=http_client)
    species_search = SpeciesSearchService(
        provider=taxonomy_provider,
        ttl=app_settings.ebird_taxonomy_ttl,
        min_query_length=ebird_config.get("search_min_query_length", 2),
        max_results=ebird_config.get("search_max_results", 10),
    )

    provider_registry: dict[str, bool] = {
        image_provider.get_provider_name(): image_provider.is_available(),
        taxonomy_provider.get_provider_name(): taxonomy_provider.is_available(),
        "cache": True,
    }

    return {
        "http_client": http_client,
        "image_cache": image_cache,
        "image_cache_seconds": app_settings.image_cache_ttl,
        "image_service": image_service,
        "species_search": species_search,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=__version__,
        environment=settings.app_env,
        providers=components["provider_registry"],
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="birdwalk API",
        version=__version__,
        description=(
            "Bird-sighting journal backend: species image resolution from "
            "Wikipedia with server-side caching, and eBird species search."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "birdwalk.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
