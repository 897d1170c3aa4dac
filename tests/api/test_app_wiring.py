"""HTTP wiring: health, request id, bearer auth, role gates and the no-database path.

None of these need Postgres: the database is switched off with the
no_database fixture and services are replaced via dependency_overrides.
"""

import pytest
from httpx import AsyncClient

from eduhub.api.v1.dependencies import get_audit_service, get_auth_service
from eduhub.application.dtos.auth import AuthTokens
from eduhub.domain.enums import UserRole
from eduhub.domain.exceptions import AuthenticationException
from eduhub.infrastructure.persistence.models import User
from eduhub.main import app

pytestmark = pytest.mark.usefixtures("no_database")


class FakeAuditService:
    def __init__(self) -> None:
        self.enabled = True

    async def is_auditing_enabled(self) -> bool:
        return self.enabled

    async def set_auditing_enabled(self, enabled: bool) -> bool:
        self.enabled = enabled
        return enabled


class FakeAuthService:
    async def login(self, email: str, password: str) -> AuthTokens:
        if password != "right-password":
            raise AuthenticationException("Invalid email or password")
        user = User(
            id=7,
            name="Asha",
            email=email,
            password_hash="never-rendered",
            role="ADMIN",
            status="ACTIVE",
            business_id=1,
        )
        return AuthTokens(access_token="access", refresh_token="refresh", user=user)


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-42"})
    assert response.headers["X-Request-ID"] == "trace-42"


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id!"})
    request_id = response.headers["X-Request-ID"]
    assert request_id != "bad id!"
    assert len(request_id) == 36


async def test_missing_token_is_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/exams", params={"business_id": 1})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["message"] == "Not authenticated"


async def test_invalid_token_is_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


async def test_student_cannot_create_exam(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/exams",
        headers=auth_headers(UserRole.STUDENT),
        json={"business_id": 1, "name": "JEE Main"},
    )
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "FORBIDDEN"
    assert body["details"] == {"reason": "role"}


async def test_audit_routes_are_superadmin_only(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/audit/status", headers=auth_headers(UserRole.ADMIN))
    assert response.status_code == 403


async def test_superadmin_toggles_audit(client: AsyncClient, auth_headers) -> None:
    fake = FakeAuditService()
    app.dependency_overrides[get_audit_service] = lambda: fake
    headers = auth_headers(UserRole.SUPERADMIN, business_id=None)

    response = await client.put("/api/v1/audit/status", headers=headers, json={"enabled": False})
    assert response.status_code == 200
    assert response.json() == {"enabled": False}

    response = await client.get("/api/v1/audit/status", headers=headers)
    assert response.json() == {"enabled": False}


async def test_database_endpoints_answer_503_without_database(
    client: AsyncClient, auth_headers
) -> None:
    response = await client.get(
        "/api/v1/exams", params={"business_id": 1}, headers=auth_headers(UserRole.ADMIN)
    )
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_login_success_hides_password_hash(client: AsyncClient) -> None:
    app.dependency_overrides[get_auth_service] = FakeAuthService
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "asha@example.com", "password": "right-password"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == 7
    assert "password_hash" not in data["user"]


async def test_login_failure_envelope(client: AsyncClient) -> None:
    app.dependency_overrides[get_auth_service] = FakeAuthService
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "asha@example.com", "password": "wrong"},
    )
    assert response.status_code == 401
    assert response.json() == {
        "error": "AUTHENTICATION_ERROR",
        "message": "Invalid email or password",
        "details": {},
    }


async def test_login_body_validation_is_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"
