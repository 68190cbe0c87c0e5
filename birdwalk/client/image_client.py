"""Client-side species image cache with in-flight request deduplication.

A page of sighting cards typically shows the same bird several times (a
card, a lifer row, a detail modal).  :class:`BirdImageClient` makes sure
all of them share one request to the image endpoint:

1. Resolved answers (URL or ``None``) are kept for the whole session.
2. While a request for a bird is outstanding, later callers for the same
   bird await that request instead of starting another.
3. When the request settles, the in-flight entry is removed whatever the
   outcome, and the answer (failures count as ``None``) is cached.

The cache check and the in-flight registration in :meth:`get_image` run
without any ``await`` in between, so under asyncio's cooperative
scheduling a second caller always sees the first caller's request.

One client is created per browsing session and passed to every consumer;
it is not module-level state.
"""

from __future__ import annotations

import asyncio
from typing import Callable

import httpx
import structlog

from birdwalk.utils.logging import get_logger
from birdwalk.utils.name_normalizer import candidate_names

_DEFAULT_ENDPOINT = "/api/v1/wikipedia/image"


def cache_key(species_name: str, scientific_name: str | None = None) -> str:
    """Return the composite ``"scientific|common"`` key for a bird."""
    return f"{scientific_name or ''}|{species_name}"


class ImageRequest:
    """A consumer's cancellable interest in one bird image.

    Cancelling only detaches the consumer: the callback is not invoked when
    the answer arrives.  The shared request underneath keeps running so
    other consumers (and the cache) still get the answer.
    """

    def __init__(self, on_result: Callable[[str | None], None]) -> None:
        self._on_result = on_result
        self._cancelled = False
        self._task: asyncio.Task[None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def _deliver(self, image_url: str | None) -> None:
        if not self._cancelled:
            self._on_result(image_url)

    async def wait(self) -> None:
        """Wait until the answer has been delivered (or discarded)."""
        if self._task is not None:
            await self._task


class BirdImageClient:
    """Deduplicating, caching client for the species image endpoint.

    Parameters
    ----------
    http_client:
        Async client used to call the endpoint.  Its ``base_url`` should
        point at the birdwalk server.
    endpoint:
        Path (or absolute URL) of the image endpoint.
    """

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str = _DEFAULT_ENDPOINT) -> None:
        self._client = http_client
        self._endpoint = endpoint
        self._resolved: dict[str, str | None] = {}
        self._in_flight: dict[str, asyncio.Task[str | None]] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    async def get_image(self, species_name: str, scientific_name: str | None = None) -> str | None:
        """Return the image URL for a bird, or ``None`` if it has none.

        Never raises for network or server failures; those resolve to
        ``None``.  Cancelling the awaiting caller does not cancel the
        shared request.
        """
        key = cache_key(species_name, scientific_name)

        if key in self._resolved:
            return self._resolved[key]

        task = self._in_flight.get(key)
        if task is None:
            names = candidate_names(species_name, scientific_name)
            task = asyncio.ensure_future(self._fetch(key, names))
            self._in_flight[key] = task
        else:
            self._logger.debug("image_request_coalesced", key=key)

        return await asyncio.shield(task)

    def request_image(
        self,
        species_name: str,
        scientific_name: str | None,
        on_result: Callable[[str | None], None],
    ) -> ImageRequest:
        """Start resolving an image and deliver it to *on_result* unless cancelled.

        Must be called from a running event loop.  Returns the handle the
        consumer calls :meth:`ImageRequest.cancel` on when it goes away.
        """
        request = ImageRequest(on_result)

        async def _run() -> None:
            image_url = await self.get_image(species_name, scientific_name)
            request._deliver(image_url)

        request._task = asyncio.ensure_future(_run())
        return request

    def is_cached(self, species_name: str, scientific_name: str | None = None) -> bool:
        return cache_key(species_name, scientific_name) in self._resolved

    def pending_count(self) -> int:
        """Number of requests currently outstanding."""
        return len(self._in_flight)

    # -- Internals ------------------------------------------------------------

    async def _fetch(self, key: str, names: list[str]) -> str | None:
        try:
            image_url = await self._query_endpoint(names)
        except Exception as exc:
            self._logger.warning(
                "image_endpoint_failed",
                names=names,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            image_url = None
        finally:
            self._in_flight.pop(key, None)

        self._resolved[key] = image_url
        return image_url

    async def _query_endpoint(self, names: list[str]) -> str | None:
        try:
            response = await self._client.get(
                self._endpoint,
                params=[("name", name) for name in names],
            )
            if not response.is_success:
                self._logger.warning(
                    "image_endpoint_error",
                    status=response.status_code,
                    names=names,
                )
                return None
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            self._logger.warning("image_endpoint_failed", names=names, error=str(exc))
            return None

        if not isinstance(data, dict):
            return None
        image_url = data.get("imageUrl")
        if isinstance(image_url, str) and image_url:
            return image_url
        return None
