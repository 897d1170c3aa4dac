"""Resolves ownership references from the DB (implements IOwnershipLookup)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.application.dtos.access import OwnerRef
from eduhub.domain.enums import EntityKind
from eduhub.infrastructure.persistence.models import (
    Batch,
    BatchUser,
    Business,
    Content,
    Course,
    Exam,
    Subject,
    Teacher,
    User,
)

# kind -> (id column, parent reference column, owning-user column)
_REF_COLUMNS: dict[EntityKind, tuple[Any, Any, Any]] = {
    EntityKind.BUSINESS: (Business.id, None, None),
    EntityKind.EXAM: (Exam.id, Exam.business_id, None),
    EntityKind.COURSE: (Course.id, Course.exam_id, None),
    EntityKind.SUBJECT: (Subject.id, Subject.course_id, None),
    EntityKind.BATCH: (Batch.id, Batch.course_id, None),
    EntityKind.CONTENT: (Content.id, Content.batch_id, None),
    EntityKind.TEACHER: (Teacher.id, Teacher.business_id, Teacher.user_id),
    EntityKind.USER: (User.id, User.business_id, None),
}


class SqlOwnershipLookup:
    """One SELECT of (id, parent fk[, owner]) per hop; no ORM objects are loaded."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_ref(self, kind: EntityKind, entity_id: int) -> OwnerRef | None:
        id_col, parent_col, owner_col = _REF_COLUMNS[kind]
        columns = [id_col]
        if parent_col is not None:
            columns.append(parent_col)
        if owner_col is not None:
            columns.append(owner_col)
        result = await self.db.execute(select(*columns).where(id_col == entity_id))
        row = result.first()
        if row is None:
            return None
        return OwnerRef(
            id=row[0],
            parent_id=row[1] if parent_col is not None else None,
            owner_user_id=row[2] if owner_col is not None else None,
        )

    async def get_membership_status(self, user_id: int, batch_id: int) -> bool | None:
        result = await self.db.execute(
            select(BatchUser.is_active).where(
                BatchUser.user_id == user_id, BatchUser.batch_id == batch_id
            )
        )
        return result.scalar_one_or_none()
