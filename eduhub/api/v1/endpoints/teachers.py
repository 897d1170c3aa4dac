"""Teacher profile API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_query_options,
    get_teacher_query_service,
    get_teacher_service,
    require_access,
    require_roles,
)
from eduhub.application.services.teacher_service import TeacherService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.query import serialize
from eduhub.schemas.teacher import TeacherCreateRequest, TeacherUpdateRequest

router = APIRouter()

TeacherId = Annotated[int, Path(gt=0)]
_teacher_access = Depends(require_access(EntityKind.TEACHER, "teacher_id"))
_admin = Depends(require_roles(UserRole.ADMIN))


@router.post("/profile", status_code=201, dependencies=[_admin])
@limit_writes
async def create_teacher_profile(
    request: Request,
    body: TeacherCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[TeacherService, Depends(get_teacher_service)],
):
    """Create the teacher profile of a user in the caller's business."""
    teacher = await service.create(
        principal,
        body.user_id,
        body.business_id,
        body.professional.model_dump(),
        body.personal.model_dump() if body.personal else None,
    )
    return serialize(teacher)


@router.get("/{teacher_id}", dependencies=[_teacher_access])
async def get_teacher(
    teacher_id: TeacherId,
    options: Annotated[QueryOptions, Depends(get_query_options)],
    service: Annotated[TeacherService, Depends(get_teacher_query_service)],
):
    return serialize(await service.get(teacher_id, options), options)


@router.put("/{teacher_id}", dependencies=[_admin, _teacher_access])
@limit_writes
async def update_teacher(
    request: Request,
    teacher_id: TeacherId,
    body: TeacherUpdateRequest,
    principal: CurrentPrincipal,
    service: Annotated[TeacherService, Depends(get_teacher_service)],
):
    teacher = await service.update(
        principal,
        teacher_id,
        professional=body.professional.model_dump(exclude_unset=True) if body.professional else None,
        personal=body.personal.model_dump(exclude_unset=True) if body.personal else None,
        status=body.status,
    )
    return serialize(teacher)
