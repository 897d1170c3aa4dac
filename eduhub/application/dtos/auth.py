"""Auth DTOs returned by AuthService."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AuthTokens:
    """An access/refresh token pair and the user it was issued for."""

    access_token: str
    refresh_token: str
    user: Any
    token_type: str = "bearer"
