"""Permission API: definitions and per-user grants."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_permission_query_service,
    get_permission_service,
    require_roles,
)
from eduhub.application.services.permission_service import PermissionService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import UserRole
from eduhub.infrastructure.persistence.query import serialize_many
from eduhub.schemas.permission import (
    PermissionAssignRequest,
    PermissionChangeResponse,
    PermissionRemoveRequest,
    UserPermissionsResponse,
)

router = APIRouter()

Permissions = Annotated[PermissionService, Depends(get_permission_service)]
PermissionQueries = Annotated[PermissionService, Depends(get_permission_query_service)]
_admin = Depends(require_roles(UserRole.ADMIN))


@router.get("/list")
async def list_permissions(principal: CurrentPrincipal, service: PermissionQueries):
    """All permission definitions."""
    return serialize_many(await service.list_definitions())


@router.get("", response_model=UserPermissionsResponse)
async def get_user_permissions(
    principal: CurrentPrincipal,
    service: PermissionQueries,
    user_id: Annotated[int | None, Query(gt=0)] = None,
):
    """Permission codes of user_id, or of the caller when omitted."""
    return await service.get_for_user(user_id or principal.id)


@router.post("", response_model=PermissionChangeResponse, status_code=201, dependencies=[_admin])
@limit_writes
async def assign_permissions(
    request: Request, body: PermissionAssignRequest, service: Permissions
):
    added = await service.assign(body.user_id, body.permissions)
    return PermissionChangeResponse(message="Permissions assigned", count=added)


@router.put("", response_model=PermissionChangeResponse, dependencies=[_admin])
@limit_writes
async def replace_permissions(
    request: Request, body: PermissionAssignRequest, service: Permissions
):
    added = await service.replace(body.user_id, body.permissions)
    return PermissionChangeResponse(message="Permissions updated", count=added)


@router.delete("", response_model=PermissionChangeResponse, dependencies=[_admin])
@limit_writes
async def remove_permissions(
    request: Request, body: PermissionRemoveRequest, service: Permissions
):
    removed = await service.remove(body.user_id, body.permissions)
    return PermissionChangeResponse(message="Permissions removed", count=removed)
