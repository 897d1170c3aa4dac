"""Exam API. Courses and subjects are nested under /exams/{exam_id}."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_exam_query_service,
    get_exam_service,
    get_query_options,
    require_access,
    require_roles,
)
from eduhub.application.services.exam_service import ExamService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.query import serialize, serialize_many
from eduhub.schemas.exam import ExamCreateRequest, ExamUpdateRequest

router = APIRouter()

ExamId = Annotated[int, Path(gt=0)]
Options = Annotated[QueryOptions, Depends(get_query_options)]
_exam_access = Depends(require_access(EntityKind.EXAM, "exam_id"))
_admin = Depends(require_roles(UserRole.ADMIN))


@router.post("", status_code=201, dependencies=[_admin])
@limit_writes
async def create_exam(
    request: Request,
    body: ExamCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[ExamService, Depends(get_exam_service)],
):
    """Create an exam in a business the caller has access to."""
    return serialize(await service.create(principal, body.model_dump()))


@router.get("", dependencies=[Depends(require_access(EntityKind.BUSINESS, "business_id"))])
async def list_exams(
    principal: CurrentPrincipal,
    options: Options,
    service: Annotated[ExamService, Depends(get_exam_query_service)],
    business_id: Annotated[int, Query(gt=0)],
):
    """ACTIVE exams of the business; teachers only see exams they teach in."""
    exams = await service.list_for_business(principal, business_id, options)
    return serialize_many(exams, options)


@router.get("/{exam_id}", dependencies=[_exam_access])
async def get_exam(
    exam_id: ExamId,
    options: Options,
    service: Annotated[ExamService, Depends(get_exam_query_service)],
):
    return serialize(await service.get(exam_id, options), options)


@router.put("/{exam_id}", dependencies=[_admin, _exam_access])
@limit_writes
async def update_exam(
    request: Request,
    exam_id: ExamId,
    body: ExamUpdateRequest,
    principal: CurrentPrincipal,
    service: Annotated[ExamService, Depends(get_exam_service)],
):
    updated = await service.update(principal, exam_id, body.model_dump(exclude_unset=True))
    return serialize(updated)


@router.delete("/{exam_id}", status_code=204, dependencies=[_admin, _exam_access])
async def delete_exam(
    exam_id: ExamId,
    principal: CurrentPrincipal,
    service: Annotated[ExamService, Depends(get_exam_service)],
) -> None:
    """Soft delete: the exam is marked INACTIVE."""
    await service.delete(principal, exam_id)
