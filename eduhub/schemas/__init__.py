"""Pydantic request/response schemas for the API."""

from eduhub.schemas.auth import LoginRequest, RefreshRequest, SignupRequest, TokenResponse
from eduhub.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "SignupRequest",
    "TokenResponse",
]
