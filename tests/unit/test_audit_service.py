"""AuditService: cached AUDIT_ENABLED flag, writes and retention cleanup."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from eduhub.application.dtos.audit import ApiAuditEntry
from eduhub.infrastructure.cache import InMemoryCache
from eduhub.infrastructure.services import audit_service as audit_module
from eduhub.infrastructure.services.audit_service import AuditService, _parse_flag


@pytest.fixture
def repos(monkeypatch: pytest.MonkeyPatch) -> tuple[AsyncMock, AsyncMock]:
    """Replace both repositories the service builds with AsyncMocks."""
    config_repo = AsyncMock()
    log_repo = AsyncMock()
    monkeypatch.setattr(audit_module, "SystemConfigRepository", MagicMock(return_value=config_repo))
    monkeypatch.setattr(audit_module, "ApiAuditLogRepository", MagicMock(return_value=log_repo))
    return config_repo, log_repo


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, True), ("true", True), ("TRUE", True), ("false", False), (" off ", False), ("0", False)],
)
def test_parse_flag(raw: str | None, expected: bool) -> None:
    assert _parse_flag(raw) is expected


async def test_flag_defaults_to_enabled_when_unset(repos) -> None:
    config_repo, _ = repos
    config_repo.get_value.return_value = None
    svc = AuditService(AsyncMock(), InMemoryCache())
    assert await svc.is_auditing_enabled() is True


async def test_flag_is_read_once_then_cached(repos) -> None:
    config_repo, _ = repos
    config_repo.get_value.return_value = "false"
    svc = AuditService(AsyncMock(), InMemoryCache(), cache_ttl=60)
    assert await svc.is_auditing_enabled() is False
    assert await svc.is_auditing_enabled() is False
    config_repo.get_value.assert_awaited_once_with("AUDIT_ENABLED")


async def test_flag_read_error_keeps_auditing_on(repos) -> None:
    config_repo, _ = repos
    config_repo.get_value.side_effect = OperationalError("SELECT", {}, Exception("down"))
    svc = AuditService(AsyncMock(), InMemoryCache())
    assert await svc.is_auditing_enabled() is True


async def test_set_flag_updates_store_and_cache(repos) -> None:
    config_repo, _ = repos
    cache = InMemoryCache()
    svc = AuditService(AsyncMock(), cache)
    assert await svc.set_auditing_enabled(False) is False
    config_repo.upsert.assert_awaited_once_with("AUDIT_ENABLED", "false")
    assert await svc.is_auditing_enabled() is False
    config_repo.get_value.assert_not_awaited()


async def test_cleanup_deletes_older_than_retention(repos) -> None:
    _, log_repo = repos
    log_repo.delete_older_than.return_value = 12
    svc = AuditService(AsyncMock(), InMemoryCache())
    assert await svc.cleanup_old_audits(7) == 12
    log_repo.delete_older_than.assert_awaited_once()


async def test_record_appends_entry(repos) -> None:
    _, log_repo = repos
    entry = ApiAuditEntry(
        http_method="GET",
        request_url="http://test/api/v1/health",
        request_path="/api/v1/health",
        response_status=200,
        response_time_ms=3,
    )
    await AuditService(AsyncMock(), InMemoryCache()).record(entry)
    log_repo.add.assert_awaited_once_with(entry)
