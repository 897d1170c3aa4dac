"""User API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from eduhub.domain.enums import UserRole, UserStatus


class UserCreateRequest(BaseModel):
    """Request body for creating a user in a business."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.STUDENT
    mobile: str | None = Field(default=None, max_length=32)


class UserUpdateRequest(BaseModel):
    """Partial update (no email or password changes here)."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    mobile: str | None = Field(default=None, max_length=32)
    role: UserRole | None = None
    status: UserStatus | None = None
