"""Per-user permission codes: definitions, grants and revocations."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from eduhub.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

# Codes inserted by scripts/seed_permissions.py (code -> description).
SEEDED_PERMISSIONS: dict[str, str] = {
    "CONTENT_CREATE": "Upload content to a batch",
    "CONTENT_EDIT": "Edit content metadata",
    "CONTENT_DELETE": "Delete content",
    "CONTENT_VIEW": "View and download content",
    "ANNOUNCEMENT_CREATE": "Create announcements",
    "ANNOUNCEMENT_VIEW": "View announcements",
}


class PermissionService:
    """Grants are (user, permission) pairs; codes must exist in the permission table."""

    def __init__(self, permission_repo: Any, user_repo: Any) -> None:
        self._permissions = permission_repo
        self._users = user_repo

    async def list_definitions(self) -> list[Any]:
        return await self._permissions.list_all()

    async def _require_user(self, user_id: int) -> Any:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user

    async def _resolve_ids(self, codes: Sequence[str]) -> list[int]:
        if not codes:
            raise ValidationException("Permissions list must not be empty", field="permissions")
        wanted = set(codes)
        found = await self._permissions.get_by_codes(wanted)
        if len(found) != len(wanted):
            raise ValidationException("Some permissions are invalid", field="permissions")
        return [p.id for p in found]

    async def get_for_user(self, user_id: int) -> dict[str, Any]:
        """Return {user: {id, role}, permissions: [codes]}."""
        user = await self._require_user(user_id)
        codes = await self._permissions.get_user_codes(user_id)
        return {"user": {"id": user.id, "role": user.role}, "permissions": codes}

    async def assign(self, user_id: int, codes: Sequence[str]) -> int:
        """Grant codes; ones the user already holds are skipped. Returns the number added."""
        await self._require_user(user_id)
        ids = await self._resolve_ids(codes)
        added = await self._permissions.grant(user_id, ids)
        logger.info("Granted %s permissions to user %s", added, user_id)
        return added

    async def replace(self, user_id: int, codes: Sequence[str]) -> int:
        """Replace every grant of the user with codes (same transaction)."""
        await self._require_user(user_id)
        ids = await self._resolve_ids(codes)
        await self._permissions.revoke(user_id)
        added = await self._permissions.grant(user_id, ids)
        logger.info("Replaced permissions of user %s (%s granted)", user_id, added)
        return added

    async def remove(self, user_id: int, codes: Sequence[str] | None = None) -> int:
        """Revoke the given codes, or every grant when codes is None or empty."""
        await self._require_user(user_id)
        ids = await self._resolve_ids(codes) if codes else None
        removed = await self._permissions.revoke(user_id, ids)
        logger.info("Revoked %s permissions from user %s", removed, user_id)
        return removed
