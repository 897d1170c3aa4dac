"""TeacherService.create checks, in order, with mocked repos."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from eduhub.application.services.teacher_service import TeacherService
from eduhub.domain.enums import UserRole
from eduhub.domain.exceptions import (
    ForbiddenException,
    ResourceNotFoundException,
    ValidationException,
)
from eduhub.domain.value_objects import Principal

ADMIN = Principal(id=1, role=UserRole.ADMIN, business_id=1)
PROFESSIONAL = {
    "qualification": "M.Sc Physics",
    "experience_years": 4,
    "designation": "Senior Faculty",
    "languages": ["English", "Hindi"],
}


@pytest.fixture
def mocks():
    teachers = AsyncMock()
    teachers.get_by_user_id = AsyncMock(return_value=None)
    teachers.model = lambda **kw: SimpleNamespace(id=60, **kw)
    teachers.create = AsyncMock(side_effect=lambda obj: obj)
    users = AsyncMock()
    users.get_by_id = AsyncMock(return_value=SimpleNamespace(id=7, business_id=1))
    access = AsyncMock()
    return TeacherService(teachers, users, access), teachers, users, access


async def test_create_flattens_sections(mocks) -> None:
    service, _, _, _ = mocks
    teacher = await service.create(ADMIN, 7, 1, PROFESSIONAL, {"gender": "FEMALE"})
    assert teacher.user_id == 7
    assert teacher.business_id == 1
    assert teacher.qualification == "M.Sc Physics"
    assert teacher.gender == "FEMALE"
    assert teacher.created_by == 1


async def test_create_denied_before_any_lookup(mocks) -> None:
    service, _, users, access = mocks
    access.authorize_business.side_effect = ForbiddenException("no")
    with pytest.raises(ForbiddenException):
        await service.create(ADMIN, 7, 1, PROFESSIONAL)
    users.get_by_id.assert_not_awaited()


async def test_create_unknown_user(mocks) -> None:
    service, _, users, _ = mocks
    users.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.create(ADMIN, 7, 1, PROFESSIONAL)


async def test_create_user_of_other_business(mocks) -> None:
    service, _, users, _ = mocks
    users.get_by_id.return_value = SimpleNamespace(id=7, business_id=2)
    with pytest.raises(ValidationException) as exc_info:
        await service.create(ADMIN, 7, 1, PROFESSIONAL)
    assert exc_info.value.message == "User does not belong to this business"


async def test_create_duplicate_profile(mocks) -> None:
    service, teachers, _, _ = mocks
    teachers.get_by_user_id.return_value = SimpleNamespace(id=61)
    with pytest.raises(ValidationException) as exc_info:
        await service.create(ADMIN, 7, 1, PROFESSIONAL)
    assert exc_info.value.message == "Teacher profile already exists for this user"


async def test_create_negative_experience(mocks) -> None:
    service, teachers, _, _ = mocks
    with pytest.raises(ValidationException) as exc_info:
        await service.create(ADMIN, 7, 1, {**PROFESSIONAL, "experience_years": -1})
    assert exc_info.value.details == {"field": "experience_years"}
    teachers.create.assert_not_awaited()


async def test_get_missing_profile(mocks) -> None:
    service, teachers, _, _ = mocks
    teachers.find_one.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.get(60)
    assert exc_info.value.message == "Teacher profile not found"
