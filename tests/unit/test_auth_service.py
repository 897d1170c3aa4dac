"""AuthService unit tests: signup, login and refresh-token rotation with mocked repos."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from eduhub.application.services.auth_service import AuthService
from eduhub.domain.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    ForbiddenException,
)
from eduhub.infrastructure.security.jwt import principal_from_claims, verify_token

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _user(status: str = "ACTIVE", role: str = "ADMIN") -> SimpleNamespace:
    return SimpleNamespace(
        id=7,
        name="Asha",
        email="asha@example.com",
        password_hash="hashed",
        role=role,
        status=status,
        business_id=3,
    )


async def _hash(password: str) -> str:
    return f"hashed:{password}"


@pytest.fixture
def users() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=_user())
    repo.get_by_mobile = AsyncMock(return_value=None)
    repo.get_by_id = AsyncMock(return_value=_user())
    repo.model = lambda **kw: SimpleNamespace(id=8, business_id=None, **kw)
    repo.create = AsyncMock(side_effect=lambda obj: obj)
    return repo


@pytest.fixture
def tokens() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_token = AsyncMock(
        return_value=SimpleNamespace(
            user_id=7, is_revoked=False, expires_at=NOW + timedelta(days=1)
        )
    )
    return repo


def _service(users, tokens, password_ok: bool = True) -> AuthService:
    return AuthService(
        users,
        tokens,
        password_hasher=_hash,
        password_checker=AsyncMock(return_value=password_ok),
        clock=lambda: NOW,
    )


async def test_login_issues_token_pair(users, tokens) -> None:
    result = await _service(users, tokens).login("Asha@Example.com ", "secret")
    users.get_by_email.assert_awaited_once_with("asha@example.com")
    principal = principal_from_claims(verify_token(result.access_token))
    assert (principal.id, principal.role.value, principal.business_id) == (7, "ADMIN", 3)
    assert len(result.refresh_token) == 128
    tokens.issue.assert_awaited_once()
    user_id, token, expires_at = tokens.issue.await_args.args
    assert user_id == 7
    assert token == result.refresh_token
    assert expires_at > NOW


async def test_login_wrong_password(users, tokens) -> None:
    with pytest.raises(AuthenticationException) as exc_info:
        await _service(users, tokens, password_ok=False).login("asha@example.com", "x")
    assert exc_info.value.message == "Invalid email or password"
    tokens.issue.assert_not_awaited()


async def test_login_unknown_email(users, tokens) -> None:
    users.get_by_email.return_value = None
    with pytest.raises(AuthenticationException):
        await _service(users, tokens).login("nobody@example.com", "x")


async def test_login_inactive_user(users, tokens) -> None:
    users.get_by_email.return_value = _user(status="INACTIVE")
    with pytest.raises(ForbiddenException) as exc_info:
        await _service(users, tokens).login("asha@example.com", "secret")
    assert exc_info.value.details == {"reason": "user_inactive"}


async def test_signup_creates_plain_user(users, tokens) -> None:
    users.get_by_email.return_value = None
    result = await _service(users, tokens).signup("New", " New@Example.com", "pw123456")
    created = users.create.await_args.args[0]
    assert created.email == "new@example.com"
    assert created.role == "USER"
    assert created.status == "ACTIVE"
    assert created.password_hash == "hashed:pw123456"
    assert result.user is created


async def test_signup_duplicate_email(users, tokens) -> None:
    with pytest.raises(AlreadyExistsException):
        await _service(users, tokens).signup("Dup", "asha@example.com", "pw123456")
    users.create.assert_not_awaited()


async def test_signup_duplicate_mobile(users, tokens) -> None:
    users.get_by_email.return_value = None
    users.get_by_mobile.return_value = _user()
    with pytest.raises(AlreadyExistsException) as exc_info:
        await _service(users, tokens).signup("Dup", "x@example.com", "pw123456", "9999")
    assert "mobile" in exc_info.value.message


async def test_refresh_rotates_token(users, tokens) -> None:
    result = await _service(users, tokens).refresh("old-token")
    tokens.revoke.assert_awaited_once_with("old-token")
    tokens.issue.assert_awaited_once()
    assert result.refresh_token != "old-token"


async def test_refresh_unknown_token(users, tokens) -> None:
    tokens.get_by_token.return_value = None
    with pytest.raises(AuthenticationException) as exc_info:
        await _service(users, tokens).refresh("nope")
    assert exc_info.value.message == "Invalid refresh token"


async def test_refresh_revoked_token(users, tokens) -> None:
    tokens.get_by_token.return_value = SimpleNamespace(
        user_id=7, is_revoked=True, expires_at=NOW + timedelta(days=1)
    )
    with pytest.raises(AuthenticationException) as exc_info:
        await _service(users, tokens).refresh("old")
    assert exc_info.value.message == "Refresh token has been revoked"


async def test_refresh_expired_token_naive_timestamp(users, tokens) -> None:
    tokens.get_by_token.return_value = SimpleNamespace(
        user_id=7, is_revoked=False, expires_at=datetime(2026, 2, 1, 12, 0)
    )
    with pytest.raises(AuthenticationException) as exc_info:
        await _service(users, tokens).refresh("old")
    assert exc_info.value.message == "Refresh token has expired"
    tokens.revoke.assert_not_awaited()


async def test_refresh_inactive_user(users, tokens) -> None:
    users.get_by_id.return_value = _user(status="INACTIVE")
    with pytest.raises(ForbiddenException):
        await _service(users, tokens).refresh("old")


async def test_logout_swallows_database_errors(users, tokens) -> None:
    tokens.revoke.side_effect = OperationalError("UPDATE", {}, Exception("down"))
    await _service(users, tokens).logout("old")


async def test_logout_all_returns_count(users, tokens) -> None:
    tokens.revoke_all_for_user.return_value = 3
    assert await _service(users, tokens).logout_all(7) == 3
