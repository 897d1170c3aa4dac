"""Permission and UserPermission repository."""

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.infrastructure.persistence.models.permission import Permission, UserPermission
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class PermissionRepository(BaseRepository[Permission]):
    """Permission definitions plus per-user grants."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def list_all(self) -> list[Permission]:
        result = await self.db.execute(select(Permission).order_by(Permission.code))
        return list(result.scalars().all())

    async def get_by_codes(self, codes: Iterable[str]) -> list[Permission]:
        result = await self.db.execute(select(Permission).where(Permission.code.in_(list(codes))))
        return list(result.scalars().all())

    async def get_user_codes(self, user_id: int) -> list[str]:
        result = await self.db.execute(
            select(Permission.code)
            .join(UserPermission, UserPermission.permission_id == Permission.id)
            .where(UserPermission.user_id == user_id)
            .order_by(Permission.code)
        )
        return list(result.scalars().all())

    async def get_user_permission_ids(self, user_id: int) -> set[int]:
        result = await self.db.execute(
            select(UserPermission.permission_id).where(UserPermission.user_id == user_id)
        )
        return set(result.scalars().all())

    async def grant(self, user_id: int, permission_ids: Iterable[int]) -> int:
        """Insert grants, skipping ones the user already has. Returns the number added."""
        existing = await self.get_user_permission_ids(user_id)
        new_ids = [pid for pid in dict.fromkeys(permission_ids) if pid not in existing]
        self.db.add_all(UserPermission(user_id=user_id, permission_id=pid) for pid in new_ids)
        await self.db.flush()
        return len(new_ids)

    async def revoke(self, user_id: int, permission_ids: Iterable[int] | None = None) -> int:
        """Delete the given grants of a user, or all of them when permission_ids is None."""
        stmt = delete(UserPermission).where(UserPermission.user_id == user_id)
        if permission_ids is not None:
            stmt = stmt.where(UserPermission.permission_id.in_(list(permission_ids)))
        result = await self.db.execute(stmt)
        return result.rowcount or 0

    async def ensure_codes(self, definitions: dict[str, str]) -> int:
        """Insert missing permission codes (code -> description). Returns the number added."""
        result = await self.db.execute(select(Permission.code))
        existing = set(result.scalars().all())
        missing = [code for code in definitions if code not in existing]
        self.db.add_all(Permission(code=code, description=definitions[code]) for code in missing)
        await self.db.flush()
        return len(missing)
