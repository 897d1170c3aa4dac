"""Exam, Course and Subject repositories (name uniqueness lookups)."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from eduhub.domain.enums import RecordStatus
from eduhub.infrastructure.persistence.models.exam import Course, Exam, Subject
from eduhub.infrastructure.persistence.repositories.batch_repo import active_member_clause
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class ExamRepository(BaseRepository[Exam]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Exam)

    @staticmethod
    def taught_by(user_id: int) -> ColumnElement[bool]:
        """Exam with a course that has a batch where user_id is an active member."""
        return Exam.courses.any(Course.batches.any(active_member_clause(user_id)))

    async def find_active_by_name(
        self, business_id: int, name: str, exclude_id: int | None = None
    ) -> Exam | None:
        """Return an ACTIVE exam of the business with this name (case-insensitive)."""
        stmt = select(Exam).where(
            Exam.business_id == business_id,
            func.lower(Exam.name) == name.strip().lower(),
            Exam.status == RecordStatus.ACTIVE.value,
        )
        if exclude_id is not None:
            stmt = stmt.where(Exam.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalars().first()


class CourseRepository(BaseRepository[Course]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Course)

    @staticmethod
    def taught_by(user_id: int) -> ColumnElement[bool]:
        return Course.batches.any(active_member_clause(user_id))

    async def find_by_name(
        self, exam_id: int, name: str, exclude_id: int | None = None
    ) -> Course | None:
        stmt = select(Course).where(
            Course.exam_id == exam_id, func.lower(Course.name) == name.strip().lower()
        )
        if exclude_id is not None:
            stmt = stmt.where(Course.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalars().first()


class SubjectRepository(BaseRepository[Subject]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Subject)

    async def find_by_name(
        self, course_id: int, name: str, exclude_id: int | None = None
    ) -> Subject | None:
        stmt = select(Subject).where(
            Subject.course_id == course_id, func.lower(Subject.name) == name.strip().lower()
        )
        if exclude_id is not None:
            stmt = stmt.where(Subject.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalars().first()
