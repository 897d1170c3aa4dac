"""Batch API: batches of a course and their memberships."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_batch_query_service,
    get_batch_service,
    get_query_options,
    require_access,
    require_roles,
)
from eduhub.application.services.batch_service import BatchService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.query import serialize, serialize_many
from eduhub.schemas.auth import MessageResponse
from eduhub.schemas.batch import (
    BatchCreateRequest,
    BatchMemberRequest,
    BatchMemberUpdateRequest,
    BatchUpdateRequest,
)

router = APIRouter()

BatchId = Annotated[int, Path(gt=0)]
Options = Annotated[QueryOptions, Depends(get_query_options)]
Batches = Annotated[BatchService, Depends(get_batch_service)]
BatchQueries = Annotated[BatchService, Depends(get_batch_query_service)]
_batch_access = Depends(require_access(EntityKind.BATCH, "batch_id"))
_admin = Depends(require_roles(UserRole.ADMIN))


@router.post("", status_code=201, dependencies=[_admin])
@limit_writes
async def create_batch(
    request: Request, body: BatchCreateRequest, principal: CurrentPrincipal, service: Batches
):
    return serialize(await service.create(principal, body.model_dump()))


@router.get(
    "",
    dependencies=[
        Depends(
            require_roles(UserRole.ADMIN, UserRole.TEACHER, UserRole.STUDENT)
        )
    ],
)
async def list_batches(principal: CurrentPrincipal, options: Options, service: BatchQueries):
    """Active batches visible to the caller."""
    return serialize_many(await service.list_visible(principal, options), options)


@router.post("/add-user", status_code=201, dependencies=[_admin])
@limit_writes
async def add_user_to_batch(
    request: Request, body: BatchMemberRequest, principal: CurrentPrincipal, service: Batches
):
    """Enrol a teacher or student of the batch's business."""
    membership = await service.add_user(principal, body.user_id, body.batch_id)
    return serialize(membership)


@router.post("/remove-user", response_model=MessageResponse, dependencies=[_admin])
@limit_writes
async def remove_user_from_batch(
    request: Request, body: BatchMemberRequest, principal: CurrentPrincipal, service: Batches
):
    await service.remove_user(principal, body.user_id, body.batch_id)
    return MessageResponse(message="User removed from batch")


@router.get(
    "/course/{course_id}",
    dependencies=[Depends(require_access(EntityKind.COURSE, "course_id"))],
)
async def list_course_batches(
    course_id: Annotated[int, Path(gt=0)],
    principal: CurrentPrincipal,
    options: Options,
    service: BatchQueries,
    active: bool = False,
):
    batches = await service.list_for_course(principal, course_id, options, active_only=active)
    return serialize_many(batches, options)


@router.get(
    "/user/{user_id}", dependencies=[Depends(require_access(EntityKind.USER, "user_id"))]
)
async def list_user_batches(user_id: Annotated[int, Path(gt=0)], service: BatchQueries):
    """Memberships of the user, each with its batch and course."""
    return serialize_many(await service.list_for_user(user_id))


@router.get("/{batch_id}", dependencies=[_batch_access])
async def get_batch(batch_id: BatchId, options: Options, service: BatchQueries):
    return serialize(await service.get(batch_id, options), options)


@router.get("/{batch_id}/with-users", dependencies=[_batch_access])
async def get_batch_with_users(batch_id: BatchId, service: BatchQueries):
    return serialize(await service.get_with_users(batch_id))


@router.get("/{batch_id}/users", dependencies=[_batch_access])
async def list_batch_members(
    batch_id: BatchId, service: BatchQueries, role: UserRole | None = None
):
    """Memberships of the batch with their users, optionally filtered by role."""
    return serialize_many(await service.list_members(batch_id, role))


@router.put("/{batch_id}/users/{user_id}", dependencies=[_admin, _batch_access])
@limit_writes
async def update_batch_member(
    request: Request,
    batch_id: BatchId,
    user_id: Annotated[int, Path(gt=0)],
    body: BatchMemberUpdateRequest,
    service: Batches,
):
    return serialize(await service.update_member(batch_id, user_id, body.is_active))


@router.put("/{batch_id}", dependencies=[_admin, _batch_access])
@limit_writes
async def update_batch(
    request: Request, batch_id: BatchId, body: BatchUpdateRequest, service: Batches
):
    return serialize(await service.update(batch_id, body.model_dump(exclude_unset=True)))


@router.delete("/{batch_id}", status_code=204, dependencies=[_admin, _batch_access])
async def delete_batch(batch_id: BatchId, service: Batches) -> None:
    await service.delete(batch_id)
