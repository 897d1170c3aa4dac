"""Course and Subject application services (nested under an exam)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eduhub.domain.enums import RecordStatus, UserRole
from eduhub.domain.exceptions import ResourceNotFoundException, ValidationException
from eduhub.domain.value_objects import Principal, QueryOptions

logger = logging.getLogger(__name__)


class CourseService:
    """Courses of one exam. Every lookup is scoped by exam_id from the path."""

    def __init__(self, course_repo: Any) -> None:
        self._courses = course_repo

    async def create(self, exam_id: int, data: Mapping[str, Any]) -> Any:
        if await self._courses.find_by_name(exam_id, data["name"]):
            raise ValidationException(
                "Course with this name already exists for this exam", field="name"
            )
        course = await self._courses.create(self._courses.model(**dict(data), exam_id=exam_id))
        logger.info("Course created: id=%s exam=%s", course.id, exam_id)
        return course

    async def list_for_exam(
        self,
        principal: Principal,
        exam_id: int,
        options: QueryOptions,
        active_only: bool = False,
    ) -> list[Any]:
        opts = options.with_where(exam_id=exam_id)
        if active_only:
            opts = opts.with_where(status=RecordStatus.ACTIVE.value)
        if principal.role is UserRole.TEACHER:
            opts = opts.with_where(taught_by=self._courses.taught_by(principal.id))
        return await self._courses.find_many(opts)

    async def get(self, exam_id: int, course_id: int, options: QueryOptions | None = None) -> Any:
        course = await self._courses.find_one(
            (options or QueryOptions()).with_where(id=course_id, exam_id=exam_id)
        )
        if course is None:
            raise ResourceNotFoundException("Course", course_id)
        return course

    async def update(self, exam_id: int, course_id: int, data: Mapping[str, Any]) -> Any:
        course = await self.get(exam_id, course_id)
        name = data.get("name")
        if name and await self._courses.find_by_name(exam_id, name, exclude_id=course_id):
            raise ValidationException(
                "Course with this name already exists for this exam", field="name"
            )
        updated = await self._courses.update(course, **dict(data))
        logger.info("Course updated: id=%s", course_id)
        return updated

    async def delete(self, exam_id: int, course_id: int) -> None:
        course = await self.get(exam_id, course_id)
        await self._courses.delete(course)
        logger.info("Course deleted: id=%s", course_id)


class SubjectService:
    """Subjects of one course; the course must belong to the exam in the path."""

    def __init__(self, subject_repo: Any, course_repo: Any) -> None:
        self._subjects = subject_repo
        self._courses = course_repo

    async def _require_course(self, exam_id: int, course_id: int) -> None:
        course = await self._courses.find_one(QueryOptions(where={"id": course_id, "exam_id": exam_id}))
        if course is None:
            raise ResourceNotFoundException("Course", course_id)

    async def create(self, exam_id: int, course_id: int, data: Mapping[str, Any]) -> Any:
        await self._require_course(exam_id, course_id)
        if await self._subjects.find_by_name(course_id, data["name"]):
            raise ValidationException(
                "Subject with this name already exists for this course", field="name"
            )
        subject = await self._subjects.create(
            self._subjects.model(**dict(data), course_id=course_id)
        )
        logger.info("Subject created: id=%s course=%s", subject.id, course_id)
        return subject

    async def list_for_course(
        self,
        exam_id: int,
        course_id: int,
        options: QueryOptions,
        active_only: bool = False,
    ) -> list[Any]:
        await self._require_course(exam_id, course_id)
        opts = options.with_where(course_id=course_id)
        if active_only:
            opts = opts.with_where(status=RecordStatus.ACTIVE.value)
        return await self._subjects.find_many(opts)

    async def get(
        self, exam_id: int, course_id: int, subject_id: int, options: QueryOptions | None = None
    ) -> Any:
        await self._require_course(exam_id, course_id)
        subject = await self._subjects.find_one(
            (options or QueryOptions()).with_where(id=subject_id, course_id=course_id)
        )
        if subject is None:
            raise ResourceNotFoundException("Subject", subject_id)
        return subject

    async def update(
        self, exam_id: int, course_id: int, subject_id: int, data: Mapping[str, Any]
    ) -> Any:
        subject = await self.get(exam_id, course_id, subject_id)
        name = data.get("name")
        if name and await self._subjects.find_by_name(course_id, name, exclude_id=subject_id):
            raise ValidationException(
                "Subject with this name already exists for this course", field="name"
            )
        return await self._subjects.update(subject, **dict(data))

    async def delete(self, exam_id: int, course_id: int, subject_id: int) -> None:
        subject = await self.get(exam_id, course_id, subject_id)
        await self._subjects.delete(subject)
        logger.info("Subject deleted: id=%s", subject_id)
