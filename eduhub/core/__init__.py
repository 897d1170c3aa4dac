"""Core: config, exception handlers, lifespan and rate limiter."""

from eduhub.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
