"""CourseService and SubjectService with mocked repos: exam/course path scoping."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from eduhub.application.services.course_service import CourseService, SubjectService
from eduhub.domain.enums import UserRole
from eduhub.domain.exceptions import ResourceNotFoundException, ValidationException
from eduhub.domain.value_objects import Principal, QueryOptions

ADMIN = Principal(id=1, role=UserRole.ADMIN, business_id=1)


@pytest.fixture
def courses() -> AsyncMock:
    repo = AsyncMock()
    repo.find_by_name = AsyncMock(return_value=None)
    repo.find_one = AsyncMock(return_value=SimpleNamespace(id=20, exam_id=10, name="Physics"))
    repo.model = lambda **kw: SimpleNamespace(id=20, **kw)
    repo.create = AsyncMock(side_effect=lambda obj: obj)
    repo.taught_by = MagicMock(return_value="taught-by-clause")
    return repo


@pytest.fixture
def subjects() -> AsyncMock:
    repo = AsyncMock()
    repo.find_by_name = AsyncMock(return_value=None)
    repo.model = lambda **kw: SimpleNamespace(id=50, **kw)
    repo.create = AsyncMock(side_effect=lambda obj: obj)
    return repo


async def test_course_created_under_path_exam(courses) -> None:
    course = await CourseService(courses).create(10, {"name": "Physics"})
    assert (course.exam_id, course.name) == (10, "Physics")


async def test_course_duplicate_name_in_exam(courses) -> None:
    courses.find_by_name.return_value = SimpleNamespace(id=21)
    with pytest.raises(ValidationException) as exc_info:
        await CourseService(courses).create(10, {"name": "Physics"})
    assert exc_info.value.message == "Course with this name already exists for this exam"


async def test_course_of_other_exam_is_not_found(courses) -> None:
    courses.find_one.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await CourseService(courses).get(11, 20)
    opts = courses.find_one.await_args.args[0]
    assert opts.where == {"id": 20, "exam_id": 11}


async def test_course_update_rechecks_name_excluding_itself(courses) -> None:
    await CourseService(courses).update(10, 20, {"name": "Chemistry"})
    courses.find_by_name.assert_awaited_once_with(10, "Chemistry", exclude_id=20)
    courses.update.assert_awaited_once()


async def test_course_list_for_teacher_uses_taught_by(courses) -> None:
    teacher = Principal(id=5, role=UserRole.TEACHER, business_id=1)
    await CourseService(courses).list_for_exam(teacher, 10, QueryOptions(), active_only=True)
    opts = courses.find_many.await_args.args[0]
    assert opts.where == {"exam_id": 10, "status": "ACTIVE", "taught_by": "taught-by-clause"}
    courses.taught_by.assert_called_once_with(5)


async def test_course_list_for_admin_is_unfiltered(courses) -> None:
    await CourseService(courses).list_for_exam(ADMIN, 10, QueryOptions())
    opts = courses.find_many.await_args.args[0]
    assert opts.where == {"exam_id": 10}


async def test_subject_needs_course_of_path_exam(courses, subjects) -> None:
    courses.find_one.return_value = None
    service = SubjectService(subjects, courses)
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.create(11, 20, {"name": "Optics"})
    assert exc_info.value.details["resource_type"] == "Course"
    subjects.create.assert_not_awaited()


async def test_subject_created_under_course(courses, subjects) -> None:
    subject = await SubjectService(subjects, courses).create(10, 20, {"name": "Optics"})
    assert (subject.course_id, subject.name) == (20, "Optics")
    opts = courses.find_one.await_args.args[0]
    assert opts.where == {"id": 20, "exam_id": 10}


async def test_subject_of_other_course_is_not_found(courses, subjects) -> None:
    subjects.find_one.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await SubjectService(subjects, courses).get(10, 20, 51)
    assert exc_info.value.details["resource_type"] == "Subject"
    opts = subjects.find_one.await_args.args[0]
    assert opts.where == {"id": 51, "course_id": 20}


async def test_subject_duplicate_name_in_course(courses, subjects) -> None:
    subjects.find_by_name.return_value = SimpleNamespace(id=52)
    with pytest.raises(ValidationException):
        await SubjectService(subjects, courses).create(10, 20, {"name": "Optics"})
