"""Auth API schemas."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Request body for public signup. New users get role USER and no business."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    mobile: str | None = Field(default=None, max_length=32)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    """Body for /auth/refresh and /auth/logout."""

    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access/refresh token pair plus the authenticated user."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: dict[str, Any]


class MessageResponse(BaseModel):
    message: str
