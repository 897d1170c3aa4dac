"""JWT access tokens and opaque refresh tokens.

Access tokens are HS256 JWTs carrying the principal (sub, id, business_id,
role, email). Refresh tokens are random hex strings stored server-side so
they can be revoked.
"""

import secrets
from datetime import datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from eduhub.core.config import get_settings
from eduhub.domain.enums import UserRole
from eduhub.domain.value_objects import Principal
from eduhub.shared.utils.datetime import utc_now

REFRESH_TOKEN_BYTES = 64


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, id, business_id, role, email).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = utc_now() + ttl
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def access_token_claims(
    user_id: int, role: str, business_id: int | None, email: str
) -> dict[str, Any]:
    """Claims for a user's access token. sub is the user id as a string."""
    return {
        "sub": str(user_id),
        "id": user_id,
        "business_id": business_id,
        "role": role,
        "email": email,
    }


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from verified claims.

    Raises:
        ValueError: If id or role are missing or malformed.
    """
    try:
        user_id = int(payload.get("id", payload["sub"]))
        role = UserRole(payload["role"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed token claims: {e!s}") from e
    business_id = payload.get("business_id")
    return Principal(
        id=user_id,
        role=role,
        business_id=int(business_id) if business_id is not None else None,
        email=payload.get("email"),
    )


def generate_refresh_token() -> str:
    """Return a new opaque refresh token (hex of 64 random bytes)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def refresh_token_expiry(now: datetime | None = None) -> datetime:
    settings = get_settings()
    return (now or utc_now()) + timedelta(days=settings.refresh_token_expire_days)
