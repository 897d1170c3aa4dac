"""Course and subject API, nested under /exams/{exam_id}/courses.

Access is resolved on the exam in the path; the services then require the
course (and subject) to belong to that exam.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_course_query_service,
    get_course_service,
    get_query_options,
    get_subject_query_service,
    get_subject_service,
    require_access,
    require_roles,
)
from eduhub.application.services.course_service import CourseService, SubjectService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.query import serialize, serialize_many
from eduhub.schemas.exam import (
    CourseCreateRequest,
    CourseUpdateRequest,
    SubjectCreateRequest,
    SubjectUpdateRequest,
)

router = APIRouter()

ExamId = Annotated[int, Path(gt=0)]
CourseId = Annotated[int, Path(gt=0)]
SubjectId = Annotated[int, Path(gt=0)]
Options = Annotated[QueryOptions, Depends(get_query_options)]
Courses = Annotated[CourseService, Depends(get_course_service)]
CourseQueries = Annotated[CourseService, Depends(get_course_query_service)]
Subjects = Annotated[SubjectService, Depends(get_subject_service)]
SubjectQueries = Annotated[SubjectService, Depends(get_subject_query_service)]
_exam_access = Depends(require_access(EntityKind.EXAM, "exam_id"))
_admin = Depends(require_roles(UserRole.ADMIN))


@router.post("/{exam_id}/courses", status_code=201, dependencies=[_admin, _exam_access])
@limit_writes
async def create_course(
    request: Request, exam_id: ExamId, body: CourseCreateRequest, service: Courses
):
    return serialize(await service.create(exam_id, body.model_dump()))


@router.get("/{exam_id}/courses", dependencies=[_exam_access])
async def list_courses(
    exam_id: ExamId,
    principal: CurrentPrincipal,
    options: Options,
    service: CourseQueries,
    active: bool = False,
):
    """Courses of the exam; active=true keeps ACTIVE ones only."""
    courses = await service.list_for_exam(principal, exam_id, options, active_only=active)
    return serialize_many(courses, options)


@router.get("/{exam_id}/courses/{course_id}", dependencies=[_exam_access])
async def get_course(
    exam_id: ExamId, course_id: CourseId, options: Options, service: CourseQueries
):
    return serialize(await service.get(exam_id, course_id, options), options)


@router.put("/{exam_id}/courses/{course_id}", dependencies=[_admin, _exam_access])
@limit_writes
async def update_course(
    request: Request,
    exam_id: ExamId,
    course_id: CourseId,
    body: CourseUpdateRequest,
    service: Courses,
):
    updated = await service.update(exam_id, course_id, body.model_dump(exclude_unset=True))
    return serialize(updated)


@router.delete(
    "/{exam_id}/courses/{course_id}", status_code=204, dependencies=[_admin, _exam_access]
)
async def delete_course(exam_id: ExamId, course_id: CourseId, service: Courses) -> None:
    await service.delete(exam_id, course_id)


# ---- Subjects ----


@router.post(
    "/{exam_id}/courses/{course_id}/subjects",
    status_code=201,
    dependencies=[_admin, _exam_access],
)
@limit_writes
async def create_subject(
    request: Request,
    exam_id: ExamId,
    course_id: CourseId,
    body: SubjectCreateRequest,
    service: Subjects,
):
    return serialize(await service.create(exam_id, course_id, body.model_dump()))


@router.get("/{exam_id}/courses/{course_id}/subjects", dependencies=[_exam_access])
async def list_subjects(
    exam_id: ExamId,
    course_id: CourseId,
    options: Options,
    service: SubjectQueries,
    active: bool = False,
):
    subjects = await service.list_for_course(exam_id, course_id, options, active_only=active)
    return serialize_many(subjects, options)


@router.get(
    "/{exam_id}/courses/{course_id}/subjects/{subject_id}", dependencies=[_exam_access]
)
async def get_subject(
    exam_id: ExamId,
    course_id: CourseId,
    subject_id: SubjectId,
    options: Options,
    service: SubjectQueries,
):
    return serialize(await service.get(exam_id, course_id, subject_id, options), options)


@router.put(
    "/{exam_id}/courses/{course_id}/subjects/{subject_id}",
    dependencies=[_admin, _exam_access],
)
@limit_writes
async def update_subject(
    request: Request,
    exam_id: ExamId,
    course_id: CourseId,
    subject_id: SubjectId,
    body: SubjectUpdateRequest,
    service: Subjects,
):
    updated = await service.update(
        exam_id, course_id, subject_id, body.model_dump(exclude_unset=True)
    )
    return serialize(updated)


@router.delete(
    "/{exam_id}/courses/{course_id}/subjects/{subject_id}",
    status_code=204,
    dependencies=[_admin, _exam_access],
)
async def delete_subject(
    exam_id: ExamId, course_id: CourseId, subject_id: SubjectId, service: Subjects
) -> None:
    await service.delete(exam_id, course_id, subject_id)
