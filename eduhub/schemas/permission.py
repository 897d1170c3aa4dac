"""Permission API schemas."""

from pydantic import BaseModel, Field


class PermissionAssignRequest(BaseModel):
    """Body for POST and PUT /permission."""

    user_id: int = Field(..., gt=0)
    permissions: list[str] = Field(..., min_length=1)


class PermissionRemoveRequest(BaseModel):
    """Body for DELETE /permission; omit permissions to revoke everything."""

    user_id: int = Field(..., gt=0)
    permissions: list[str] | None = None


class UserPermissionsResponse(BaseModel):
    user: dict[str, int | str]
    permissions: list[str]


class PermissionChangeResponse(BaseModel):
    message: str
    count: int
