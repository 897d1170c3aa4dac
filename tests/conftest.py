"""Pytest configuration and fixtures for eduhub.

Uses eduhub.main:app for HTTP tests and eduhub.infrastructure.persistence.database
for DB-dependent fixtures. SECRET_KEY is set before the app is imported because
settings are validated when the app is built.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.domain.enums import UserRole
from eduhub.infrastructure.persistence import database
from eduhub.infrastructure.security.jwt import access_token_claims, create_access_token
from eduhub.main import app


def bearer(
    role: UserRole,
    user_id: int = 1,
    business_id: int | None = 1,
    email: str = "user@example.com",
) -> dict[str, str]:
    """Authorization header with a freshly signed access token."""
    token = create_access_token(access_token_claims(user_id, role.value, business_id, email))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def no_database(monkeypatch: pytest.MonkeyPatch) -> None:
    """Behave as if DATABASE_URL were empty, whatever the environment says."""
    monkeypatch.setattr(database, "_ensure_engine", lambda: None)
    monkeypatch.setattr(database, "AsyncSessionLocal", None)


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL pointing at a migrated Postgres. Skips when it is
    not configured. Mark such tests with @pytest.mark.requires_db; run
    without a DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def auth_headers():
    """Factory fixture: auth_headers(UserRole.ADMIN, user_id=..., business_id=...)."""
    return bearer
