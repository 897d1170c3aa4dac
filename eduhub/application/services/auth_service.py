"""Authentication: signup, login, refresh-token rotation and logout."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from eduhub.application.dtos.auth import AuthTokens
from eduhub.domain.enums import UserRole, UserStatus
from eduhub.domain.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    ForbiddenException,
)
from eduhub.infrastructure.security.jwt import (
    access_token_claims,
    create_access_token,
    generate_refresh_token,
    refresh_token_expiry,
)
from eduhub.infrastructure.security.password import check_password, hash_password
from eduhub.shared.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Issues access tokens (JWT) and server-side refresh tokens.

    Refresh tokens are single use: refresh() revokes the presented token
    and issues a new pair.
    """

    def __init__(
        self,
        user_repo: Any,
        refresh_token_repo: Any,
        password_hasher: Callable[[str], Awaitable[str]] = hash_password,
        password_checker: Callable[[str, str | None], Awaitable[bool]] = check_password,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._users = user_repo
        self._tokens = refresh_token_repo
        self._hash = password_hasher
        self._check = password_checker
        self._clock = clock

    async def _issue(self, user: Any) -> AuthTokens:
        access = create_access_token(
            access_token_claims(user.id, user.role, user.business_id, user.email)
        )
        refresh = generate_refresh_token()
        await self._tokens.issue(user.id, refresh, refresh_token_expiry(self._clock()))
        return AuthTokens(access_token=access, refresh_token=refresh, user=user)

    async def signup(self, name: str, email: str, password: str, mobile: str | None = None) -> AuthTokens:
        """Register an ACTIVE user with role USER and no business."""
        email = email.strip().lower()
        if await self._users.get_by_email(email):
            raise AlreadyExistsException("User with this email already exists")
        if mobile and await self._users.get_by_mobile(mobile):
            raise AlreadyExistsException("User with this mobile already exists")
        user = await self._users.create(
            self._users.model(
                name=name,
                email=email,
                mobile=mobile,
                password_hash=await self._hash(password),
                role=UserRole.USER.value,
                status=UserStatus.ACTIVE.value,
            )
        )
        logger.info("User signed up: id=%s", user.id)
        return await self._issue(user)

    async def login(self, email: str, password: str) -> AuthTokens:
        """Verify credentials and issue a token pair.

        Raises:
            AuthenticationException: unknown email or wrong password.
            ForbiddenException: account is not ACTIVE.
        """
        user = await self._users.get_by_email(email.strip().lower())
        password_ok = await self._check(password, user.password_hash if user else None)
        if user is None or not password_ok:
            logger.warning("Login failed for %s", email)
            raise AuthenticationException(_INVALID_CREDENTIALS)
        if user.status != UserStatus.ACTIVE.value:
            logger.warning("Login rejected for inactive user %s", user.id)
            raise ForbiddenException("User account is inactive", reason="user_inactive")
        logger.info("User logged in: id=%s", user.id)
        return await self._issue(user)

    async def refresh(self, token: str) -> AuthTokens:
        """Rotate a refresh token: revoke it and issue a new pair."""
        stored = await self._tokens.get_by_token(token)
        if stored is None:
            logger.warning("Refresh with unknown token")
            raise AuthenticationException("Invalid refresh token")
        if stored.is_revoked:
            logger.warning("Refresh with revoked token for user %s", stored.user_id)
            raise AuthenticationException("Refresh token has been revoked")
        if ensure_utc(stored.expires_at) <= self._clock():
            raise AuthenticationException("Refresh token has expired")
        user = await self._users.get_by_id(stored.user_id)
        if user is None:
            raise AuthenticationException("Invalid refresh token")
        if user.status != UserStatus.ACTIVE.value:
            raise ForbiddenException("User account is inactive", reason="user_inactive")
        await self._tokens.revoke(token)
        return await self._issue(user)

    async def logout(self, token: str) -> None:
        """Revoke one refresh token. Database errors are logged, not raised."""
        try:
            await self._tokens.revoke(token)
        except SQLAlchemyError:
            logger.warning("Logout failed to revoke refresh token", exc_info=True)

    async def logout_all(self, user_id: int) -> int:
        revoked = await self._tokens.revoke_all_for_user(user_id)
        logger.info("Revoked %s refresh tokens for user %s", revoked, user_id)
        return revoked
