"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults checked into the repo
#   2. .env file           - Local developer overrides (not committed)
#   3. Environment vars    - Set at deploy time
#
# The _deep_merge helper does recursive dict merging:
#   base = {"images": {"thumb_size": 400}}
#   overrides = {"images": {"cache_ttl": 3600}}
#   result = {"images": {"thumb_size": 400, "cache_ttl": 3600}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from birdwalk.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "images": {
            "wikipedia_api_url": settings.wikipedia_api_url,
            "thumb_size": settings.wikipedia_thumb_size,
            "cache_ttl": settings.image_cache_ttl,
            "cache_max_size": settings.image_cache_max_size,
            "lookup_concurrency": settings.image_lookup_concurrency,
        },
        "ebird": {
            "taxonomy_url": settings.ebird_taxonomy_url,
            "configured": bool(settings.ebird_api_key),
        },
        "providers": settings.get_available_providers(),
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
