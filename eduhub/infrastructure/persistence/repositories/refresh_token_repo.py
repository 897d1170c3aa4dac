"""Refresh token repository."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.infrastructure.persistence.models.refresh_token import RefreshToken
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, RefreshToken)

    async def get_by_token(self, token: str) -> RefreshToken | None:
        result = await self.db.execute(select(RefreshToken).where(RefreshToken.token == token))
        return result.scalar_one_or_none()

    async def issue(self, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
        return await self.create(
            RefreshToken(user_id=user_id, token=token, expires_at=expires_at, is_revoked=False)
        )

    async def revoke(self, token: str) -> int:
        """Revoke one token. Returns 1 when it existed and was active."""
        result = await self.db.execute(
            update(RefreshToken)
            .where(RefreshToken.token == token, RefreshToken.is_revoked.is_(False))
            .values(is_revoked=True)
        )
        return result.rowcount or 0

    async def revoke_all_for_user(self, user_id: int) -> int:
        result = await self.db.execute(
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.is_revoked.is_(False))
            .values(is_revoked=True)
        )
        return result.rowcount or 0
