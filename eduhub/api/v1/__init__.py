"""API v1: router, dependencies and endpoints."""

from eduhub.api.v1.router import api_router

__all__ = ["api_router"]
