"""HTTP middleware for the birdwalk API.

Installed by :func:`birdwalk.main.create_app`, outermost first:

    CORS -> RequestLoggingMiddleware -> ErrorHandlingMiddleware -> routes

Routes turn expected failures into ``HTTPException`` themselves (400 for a
missing ``name``, 500 for search errors).  ``ErrorHandlingMiddleware`` is
the backstop for a ``BirdWalkError`` that a route did not translate.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from birdwalk.api.schemas import ErrorResponse
from birdwalk.utils.errors import BirdWalkError
from birdwalk.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Allow the journal front end to call the API from another origin.

    Only GET is needed; every origin is allowed unless *allowed_origins*
    narrows it.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one ``http_request`` event per request, with its final status.

    Image lookups also record whether the response is cacheable downstream,
    which is how repeated identical requests end up never reaching us.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status = 500
        cache_control: str | None = None

        try:
            response = await call_next(request)
            status = response.status_code
            cache_control = response.headers.get("cache-control")
            return response
        finally:
            _logger.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.query_params) or None,
                status=status,
                cache_control=cache_control,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Answer an untranslated ``BirdWalkError`` with a 500 ``ErrorResponse``.

    The provider name and path go to the log; the client gets the error
    class name and its message only.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except BirdWalkError as exc:
            _logger.error(
                "unhandled_birdwalk_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=request.url.path,
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(status_code=500, content=body.model_dump())
