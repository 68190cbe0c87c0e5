"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# This class uses pydantic-settings to automatically read configuration
# from TWO sources (in priority order):
#
#   1. **Environment variables** - e.g., EBIRD_API_KEY=abc123
#      (highest priority - always wins)
#   2. **.env file** - key=value lines in the project root .env file
#      (lower priority - used for local development)
#
# The mapping is automatic: field name `ebird_api_key` maps to env var
# `EBIRD_API_KEY` (pydantic-settings uppercases and matches).
#
# Default values are used when neither an env var nor .env entry exists
# for that field.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """birdwalk application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === eBird taxonomy (species search) ===
    # Empty string = "not configured" → the search endpoint answers 500.
    ebird_api_key: str = ""
    ebird_taxonomy_url: str = "https://api.ebird.org/v2/ref/taxonomy/ebird"
    ebird_taxonomy_ttl: int = 24 * 60 * 60

    # === Wikipedia (species images) ===
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    wikipedia_thumb_size: int = 400

    # === Image resolution cache ===
    # The TTL also drives the Cache-Control max-age on the image endpoint.
    image_cache_ttl: int = 24 * 60 * 60
    image_cache_max_size: int = 1000
    image_lookup_concurrency: int = 8

    # === HTTP client ===
    http_timeout: float = 10.0
    user_agent: str = "birdwalk/0.1 (personal bird journal)"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_providers(self) -> list[str]:
        """Return the external providers that are usable with the current config."""
        providers: list[str] = ["wikipedia"]
        if self.ebird_api_key:
            providers.append("ebird")
        return providers
