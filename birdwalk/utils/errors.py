"""Custom exception hierarchy for birdwalk.

All application exceptions inherit from :class:`BirdWalkError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "wikipedia", "ebird") caused the failure.

    BirdWalkError  (base -- catch-all for any birdwalk error)
    +-- ImageLookupError         (species image resolution)
    +-- TaxonomyError            (eBird taxonomy fetch / parse)
    +-- ProviderUnavailableError (external service down / unreachable)
    +-- ConfigurationError       (startup / missing config)

Image lookups never let these escape past the provider: a failed lookup
is an answer ("no image"), not an error.  Taxonomy and configuration errors
do reach the API layer, which turns them into HTTP 500 responses.
"""


class BirdWalkError(Exception):
    """Base exception for all birdwalk errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets,
    e.g. ``[ebird] Taxonomy request failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ImageLookupError(BirdWalkError):
    """Raised when a species image lookup fails (Wikipedia request or parse)."""

    def __init__(
        self,
        message: str = "Species image lookup failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TaxonomyError(BirdWalkError):
    """Raised when the species taxonomy cannot be fetched or parsed."""

    def __init__(
        self,
        message: str = "Species taxonomy request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(BirdWalkError):
    """Raised when an external service or provider is unreachable."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(BirdWalkError):
    """Raised when configuration is invalid or missing (e.g. no eBird API key)."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
