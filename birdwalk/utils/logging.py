"""structlog setup shared by the API server and the CLI.

Two entry points configure the same processor chain:

``configure_logging``
    Server mode.  Coloured console output while developing, one JSON
    object per line when ``APP_ENV=production`` (or ``json_output=True``).
    Stdlib logging (uvicorn, httpx) is routed through the same renderer.

``quiet_logging``
    CLI mode.  Only warnings and errors, plain text, on stderr, so stdout
    carries nothing but command output.

Modules obtain loggers with :func:`get_logger` and log snake_case event
names with key/value context, e.g. ``logger.info("image_resolved", ...)``.
"""

import logging
import os
import sys
from typing import TextIO

import structlog

# Libraries that log every request at INFO; RequestLoggingMiddleware covers that.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _route_stdlib(renderer: structlog.types.Processor, level: int, stream: TextIO) -> None:
    """Send stdlib log records through *renderer* on *stream*."""
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_shared_processors(),
            renderer,
        ],
    )
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog for the API server.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.
        json_output: Force JSON lines.  Otherwise JSON is used only when
            ``APP_ENV`` is ``"production"``.

    Returns:
        A configured structlog BoundLogger.
    """
    level = logging.getLevelName(log_level.upper())
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*_shared_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _route_stdlib(renderer, level, sys.stdout)

    return structlog.get_logger()


def quiet_logging() -> None:
    """Configure structlog for CLI use: WARNING and above, plain text, stderr."""
    renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*_shared_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    _route_stdlib(renderer, logging.WARNING, sys.stderr)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
