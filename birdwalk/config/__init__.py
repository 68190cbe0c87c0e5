"""Configuration module - exports Settings, load_config, and a module-level singleton."""

from birdwalk.config.loader import load_config
from birdwalk.config.settings import Settings

settings = Settings()

__all__ = ["Settings", "load_config", "settings"]
