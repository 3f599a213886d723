"""Configuration module — exports Settings and a module-level singleton."""

from coverscout.config.settings import Settings

settings = Settings()

__all__ = ["Settings", "settings"]
