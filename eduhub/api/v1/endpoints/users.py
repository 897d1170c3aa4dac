"""User API: update and deactivate users. Creation lives under /business/{id}/users."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_user_service,
    require_access,
    require_roles,
)
from eduhub.application.services.user_service import UserService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.infrastructure.persistence.query import serialize
from eduhub.schemas.user import UserUpdateRequest

router = APIRouter()

UserId = Annotated[int, Path(gt=0)]
_user_access = Depends(require_access(EntityKind.USER, "user_id"))
_admin = Depends(require_roles(UserRole.ADMIN))


@router.put("/{user_id}", dependencies=[_admin, _user_access])
@limit_writes
async def update_user(
    request: Request,
    user_id: UserId,
    body: UserUpdateRequest,
    principal: CurrentPrincipal,
    service: Annotated[UserService, Depends(get_user_service)],
):
    updated = await service.update(principal, user_id, body.model_dump(exclude_unset=True))
    return serialize(updated)


@router.delete("/{user_id}", status_code=204, dependencies=[_admin, _user_access])
async def delete_user(
    user_id: UserId, service: Annotated[UserService, Depends(get_user_service)]
) -> None:
    """Soft delete: status INACTIVE and every refresh token revoked."""
    await service.soft_delete(user_id)
