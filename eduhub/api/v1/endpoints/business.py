"""Business API plus the users of a business."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_business_query_service,
    get_business_service,
    get_query_options,
    get_user_query_service,
    get_user_service,
    require_access,
    require_roles,
)
from eduhub.application.services.business_service import BusinessService
from eduhub.application.services.user_service import UserService
from eduhub.core.limiter import limit_writes
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.query import serialize, serialize_many
from eduhub.schemas.business import BusinessCreateRequest, BusinessUpdateRequest
from eduhub.schemas.user import UserCreateRequest

router = APIRouter()

BusinessId = Annotated[int, Path(gt=0)]
Options = Annotated[QueryOptions, Depends(get_query_options)]
_access = Depends(require_access(EntityKind.BUSINESS, "business_id"))
_admin = Depends(require_roles(UserRole.ADMIN))


@router.post("", status_code=201)
@limit_writes
async def create_business(
    request: Request,
    body: BusinessCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[BusinessService, Depends(get_business_service)],
):
    """Create a business; the caller becomes attached to it."""
    return serialize(await service.create(principal, body.model_dump()))


@router.get("/slug/{slug}")
async def get_business_by_slug(
    slug: str,
    principal: CurrentPrincipal,
    options: Options,
    service: Annotated[BusinessService, Depends(get_business_query_service)],
):
    return serialize(await service.get_by_slug(slug, options), options)


@router.get("/{business_id}", dependencies=[_access])
async def get_business(
    business_id: BusinessId,
    options: Options,
    service: Annotated[BusinessService, Depends(get_business_query_service)],
):
    return serialize(await service.get(business_id, options), options)


@router.put("/{business_id}", dependencies=[_admin, _access])
@limit_writes
async def update_business(
    request: Request,
    business_id: BusinessId,
    body: BusinessUpdateRequest,
    service: Annotated[BusinessService, Depends(get_business_service)],
):
    return serialize(await service.update(business_id, body.model_dump(exclude_unset=True)))


@router.delete(
    "/{business_id}",
    status_code=204,
    dependencies=[Depends(require_roles(UserRole.SUPERADMIN))],
)
async def delete_business(
    business_id: BusinessId,
    service: Annotated[BusinessService, Depends(get_business_service)],
) -> None:
    await service.delete(business_id)


@router.post("/{business_id}/users", status_code=201, dependencies=[_admin, _access])
@limit_writes
async def create_business_user(
    request: Request,
    business_id: BusinessId,
    body: UserCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Create a user (ADMIN, TEACHER, STUDENT or USER) inside the business."""
    return serialize(await service.create_for_business(principal, business_id, body.model_dump()))


@router.get("/{business_id}/users", dependencies=[_access])
async def list_business_users(
    business_id: BusinessId,
    options: Options,
    service: Annotated[UserService, Depends(get_user_query_service)],
    role: UserRole | None = None,
):
    users = await service.list_for_business(business_id, options, role)
    return serialize_many(users, options)
