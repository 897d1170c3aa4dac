"""Batch and BatchUser repositories."""

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from eduhub.infrastructure.persistence.models.batch import Batch, BatchUser
from eduhub.infrastructure.persistence.models.exam import Course, Exam
from eduhub.infrastructure.persistence.models.user import User
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


def active_member_clause(user_id: int) -> ColumnElement[bool]:
    """Batch has an active membership for user_id."""
    return Batch.batch_users.any(
        and_(BatchUser.user_id == user_id, BatchUser.is_active.is_(True))
    )


class BatchRepository(BaseRepository[Batch]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Batch)

    @staticmethod
    def with_active_member(user_id: int) -> ColumnElement[bool]:
        return active_member_clause(user_id)

    @staticmethod
    def in_business(business_id: int) -> ColumnElement[bool]:
        """Batch whose course belongs to an exam of business_id."""
        return Batch.course.has(Course.exam.has(Exam.business_id == business_id))

    async def get_by_code_name(self, code_name: str) -> Batch | None:
        result = await self.db.execute(select(Batch).where(Batch.code_name == code_name))
        return result.scalar_one_or_none()

    async def get_with_course(self, batch_id: int) -> Batch | None:
        """Batch with course and the course's exam loaded (to reach the business)."""
        result = await self.db.execute(
            select(Batch)
            .where(Batch.id == batch_id)
            .options(selectinload(Batch.course).selectinload(Course.exam))
        )
        return result.scalar_one_or_none()

    async def get_with_users(self, batch_id: int) -> Batch | None:
        result = await self.db.execute(
            select(Batch)
            .where(Batch.id == batch_id)
            .options(selectinload(Batch.batch_users).selectinload(BatchUser.user))
        )
        return result.scalar_one_or_none()


class BatchUserRepository(BaseRepository[BatchUser]):
    """Memberships. Listings are newest first."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, BatchUser)

    async def get_membership(self, user_id: int, batch_id: int) -> BatchUser | None:
        result = await self.db.execute(
            select(BatchUser).where(
                BatchUser.user_id == user_id, BatchUser.batch_id == batch_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[BatchUser]:
        result = await self.db.execute(
            select(BatchUser)
            .where(BatchUser.user_id == user_id)
            .options(selectinload(BatchUser.batch).selectinload(Batch.course))
            .order_by(BatchUser.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_batch(self, batch_id: int, role: str | None = None) -> list[BatchUser]:
        stmt = (
            select(BatchUser)
            .where(BatchUser.batch_id == batch_id)
            .options(selectinload(BatchUser.user))
            .order_by(BatchUser.created_at.desc())
        )
        if role:
            stmt = stmt.join(User, User.id == BatchUser.user_id).where(User.role == role)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
