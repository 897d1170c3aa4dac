"""Teacher profile repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.infrastructure.persistence.models.teacher import Teacher
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class TeacherRepository(BaseRepository[Teacher]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Teacher)

    async def get_by_user_id(self, user_id: int) -> Teacher | None:
        result = await self.db.execute(select(Teacher).where(Teacher.user_id == user_id))
        return result.scalar_one_or_none()
