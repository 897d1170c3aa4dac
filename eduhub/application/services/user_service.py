"""User application service: business users, profile updates, soft delete."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eduhub.domain.enums import UserRole, UserStatus
from eduhub.domain.exceptions import (
    AlreadyExistsException,
    ForbiddenException,
    ResourceNotFoundException,
)
from eduhub.domain.value_objects import Principal, QueryOptions

logger = logging.getLogger(__name__)


class UserService:
    """Users managed by business admins. Passwords are hashed by the injected hasher."""

    def __init__(
        self,
        user_repo: Any,
        business_repo: Any,
        refresh_token_repo: Any,
        password_hasher: Any,
    ) -> None:
        self._users = user_repo
        self._businesses = business_repo
        self._tokens = refresh_token_repo
        self._hash = password_hasher

    async def _ensure_unique(self, email: str | None, mobile: str | None, exclude_id: int | None = None) -> None:
        if email:
            existing = await self._users.get_by_email(email)
            if existing is not None and existing.id != exclude_id:
                raise AlreadyExistsException("User with this email already exists")
        if mobile:
            existing = await self._users.get_by_mobile(mobile)
            if existing is not None and existing.id != exclude_id:
                raise AlreadyExistsException("User with this mobile already exists")

    @staticmethod
    def _check_role_grant(principal: Principal, role: Any) -> None:
        """Only a super admin may hand out the SUPERADMIN role."""
        if role is None or principal.is_super_admin:
            return
        if UserRole(role) is UserRole.SUPERADMIN:
            raise ForbiddenException(
                "Only a super admin can assign the SUPERADMIN role", reason="role"
            )

    async def create_for_business(
        self, principal: Principal, business_id: int, data: Mapping[str, Any]
    ) -> Any:
        """Create an ACTIVE user attached to business_id."""
        self._check_role_grant(principal, data.get("role"))
        if await self._businesses.get_by_id(business_id) is None:
            raise ResourceNotFoundException("Business", business_id)
        email = data["email"].strip().lower()
        await self._ensure_unique(email, data.get("mobile"))
        role = data.get("role") or UserRole.USER
        user = await self._users.create(
            self._users.model(
                name=data["name"],
                email=email,
                mobile=data.get("mobile"),
                password_hash=await self._hash(data["password"]),
                role=UserRole(role).value,
                status=UserStatus.ACTIVE.value,
                business_id=business_id,
            )
        )
        logger.info("User created: id=%s business=%s role=%s", user.id, business_id, user.role)
        return user

    async def list_for_business(
        self, business_id: int, options: QueryOptions, role: UserRole | None = None
    ) -> list[Any]:
        if await self._businesses.get_by_id(business_id) is None:
            raise ResourceNotFoundException("Business", business_id)
        return await self._users.list_for_business(
            business_id, options, role.value if role else None
        )

    async def get(self, user_id: int, options: QueryOptions | None = None) -> Any:
        user = await self._users.find_one((options or QueryOptions()).with_where(id=user_id))
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user

    async def get_me(self, principal: Principal) -> Any:
        return await self.get(principal.id)

    async def update(self, principal: Principal, user_id: int, data: Mapping[str, Any]) -> Any:
        self._check_role_grant(principal, data.get("role"))
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        await self._ensure_unique(None, data.get("mobile"), exclude_id=user_id)
        changes = dict(data)
        for key in ("role", "status"):
            if changes.get(key) is not None:
                changes[key] = str(getattr(changes[key], "value", changes[key]))
        updated = await self._users.update(user, **changes)
        logger.info("User updated: id=%s", user_id)
        return updated

    async def soft_delete(self, user_id: int) -> None:
        """Mark the user INACTIVE and revoke all of their refresh tokens."""
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        await self._users.update(user, status=UserStatus.INACTIVE.value)
        revoked = await self._tokens.revoke_all_for_user(user_id)
        logger.info("User deactivated: id=%s (%s refresh tokens revoked)", user_id, revoked)
