"""Ownership lookups and repository queries against Postgres. Session is rolled back after each test."""

import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy import update

from eduhub.application.services.access_resolver import AccessResolver
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.exceptions import ForbiddenException
from eduhub.domain.value_objects import Principal, QueryOptions
from eduhub.infrastructure.persistence.models import (
    Batch,
    BatchUser,
    Business,
    Content,
    Course,
    Exam,
    User,
)
from eduhub.infrastructure.persistence.repositories import (
    BusinessRepository,
    ExamRepository,
    UserRepository,
)
from eduhub.infrastructure.services import SqlOwnershipLookup


async def _seed(db_session):
    """One business with exam -> course -> batch -> content and a teacher member."""
    suffix = uuid.uuid4().hex[:10]
    business = await BusinessRepository(db_session).create(
        Business(institute_name="Test Institute", slug=f"test-{suffix}")
    )
    teacher = await UserRepository(db_session).create(
        User(
            name="Teacher",
            email=f"teacher-{suffix}@example.com",
            password_hash="x",
            role=UserRole.TEACHER.value,
            status="ACTIVE",
            business_id=business.id,
        )
    )
    exam = Exam(business_id=business.id, name="JEE", status="ACTIVE")
    db_session.add(exam)
    await db_session.flush()
    course = Course(name="Physics", status="ACTIVE", exam_id=exam.id)
    db_session.add(course)
    await db_session.flush()
    batch = Batch(
        code_name=f"B-{suffix}",
        display_name="Morning",
        start_date=datetime(2026, 1, 1, tzinfo=UTC),
        end_date=datetime(2026, 12, 31, tzinfo=UTC),
        course_id=course.id,
    )
    db_session.add(batch)
    await db_session.flush()
    content = Content(
        batch_id=batch.id,
        title="Notes",
        type="PDF",
        file_path="batch/notes.pdf",
        file_size=10,
        status="ACTIVE",
    )
    db_session.add_all([content, BatchUser(user_id=teacher.id, batch_id=batch.id)])
    await db_session.flush()
    return business, teacher, exam, batch, content


@pytest.mark.requires_db
async def test_content_chain_resolves_to_business(db_session) -> None:
    business, teacher, _, batch, content = await _seed(db_session)
    resolver = AccessResolver(SqlOwnershipLookup(db_session))
    principal = Principal(id=teacher.id, role=UserRole.TEACHER, business_id=business.id)
    resolved = await resolver.authorize(EntityKind.CONTENT, content.id, principal)
    assert resolved.business_id == business.id
    assert resolved.batch_id == batch.id


@pytest.mark.requires_db
async def test_inactive_membership_denies_teacher(db_session) -> None:
    business, teacher, _, batch, _ = await _seed(db_session)
    lookup = SqlOwnershipLookup(db_session)
    assert await lookup.get_membership_status(teacher.id, batch.id) is True
    await db_session.execute(
        update(BatchUser)
        .where(BatchUser.user_id == teacher.id, BatchUser.batch_id == batch.id)
        .values(is_active=False)
    )
    assert await lookup.get_membership_status(teacher.id, batch.id) is False
    principal = Principal(id=teacher.id, role=UserRole.TEACHER, business_id=business.id)
    with pytest.raises(ForbiddenException):
        await AccessResolver(lookup).authorize(EntityKind.BATCH, batch.id, principal)


@pytest.mark.requires_db
async def test_find_many_scope_cannot_be_widened(db_session) -> None:
    business, _, exam, _, _ = await _seed(db_session)
    repo = ExamRepository(db_session)
    options = QueryOptions(where={"business_id": business.id + 1000})
    rows = await repo.find_many(options, Exam.business_id == business.id)
    assert rows == []
    rows = await repo.find_many(QueryOptions(), Exam.business_id == business.id)
    assert [r.id for r in rows] == [exam.id]
