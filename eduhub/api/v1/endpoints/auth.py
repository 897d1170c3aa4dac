"""Auth API: signup, login, refresh-token rotation, logout and current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_auth_service,
    get_user_query_service,
)
from eduhub.application.dtos.auth import AuthTokens
from eduhub.application.services.auth_service import AuthService
from eduhub.application.services.user_service import UserService
from eduhub.core.limiter import limit_auth, limit_signup
from eduhub.infrastructure.persistence.query import serialize
from eduhub.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
)

router = APIRouter()

AuthSvc = Annotated[AuthService, Depends(get_auth_service)]


def _token_response(tokens: AuthTokens) -> TokenResponse:
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        user=serialize(tokens.user),
    )


@router.post("/signup", response_model=TokenResponse, status_code=201)
@limit_signup
async def signup(request: Request, body: SignupRequest, auth: AuthSvc):
    """Register a user (role USER, no business) and log them in."""
    tokens = await auth.signup(body.name, body.email, body.password, body.mobile)
    return _token_response(tokens)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(request: Request, body: LoginRequest, auth: AuthSvc):
    """Authenticate with email and password; return access and refresh tokens."""
    return _token_response(await auth.login(body.email, body.password))


@router.post("/refresh", response_model=TokenResponse)
@limit_auth
async def refresh(request: Request, body: RefreshRequest, auth: AuthSvc):
    """Exchange a refresh token for a new pair. The old token is revoked."""
    return _token_response(await auth.refresh(body.refresh_token))


@router.post("/logout", response_model=MessageResponse)
async def logout(body: RefreshRequest, auth: AuthSvc):
    await auth.logout(body.refresh_token)
    return MessageResponse(message="Logged out successfully")


@router.post("/logout-all", response_model=MessageResponse)
async def logout_all(principal: CurrentPrincipal, auth: AuthSvc):
    """Revoke every refresh token of the caller (all devices)."""
    await auth.logout_all(principal.id)
    return MessageResponse(message="Logged out from all devices")


@router.get("/me")
async def get_me(
    principal: CurrentPrincipal,
    users: Annotated[UserService, Depends(get_user_query_service)],
):
    """Return the currently authenticated user. Requires Authorization: Bearer <token>."""
    return serialize(await users.get_me(principal))
