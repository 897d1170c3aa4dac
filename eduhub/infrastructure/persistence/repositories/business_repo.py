"""Business repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.infrastructure.persistence.models.business import Business
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class BusinessRepository(BaseRepository[Business]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Business)

    async def get_by_slug(self, slug: str) -> Business | None:
        result = await self.db.execute(select(Business).where(Business.slug == slug))
        return result.scalar_one_or_none()
