"""API audit service: runtime on/off flag, log writes and retention cleanup."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.application.dtos.audit import ApiAuditEntry
from eduhub.application.interfaces.services import ICacheService
from eduhub.infrastructure.cache.keys import AUDIT_ENABLED_KEY, system_config_key
from eduhub.infrastructure.persistence.repositories.api_audit_log_repo import (
    ApiAuditLogRepository,
)
from eduhub.infrastructure.persistence.repositories.system_config_repo import (
    SystemConfigRepository,
)
from eduhub.shared.utils.datetime import days_ago

logger = logging.getLogger(__name__)


def _parse_flag(value: str | None) -> bool:
    if value is None:
        return True
    return value.strip().lower() not in ("false", "0", "off", "no")


class AuditService:
    """Reads and writes the AUDIT_ENABLED flag and the api_audit_log table.

    The flag is read through flag_cache for cache_ttl seconds so the
    middleware does not query system_config on every request.
    """

    def __init__(self, db: AsyncSession, flag_cache: ICacheService, cache_ttl: int = 60) -> None:
        self._config = SystemConfigRepository(db)
        self._logs = ApiAuditLogRepository(db)
        self._cache = flag_cache
        self._ttl = cache_ttl

    async def is_auditing_enabled(self) -> bool:
        """Return the flag; True when unset or when it cannot be read."""
        cache_key = system_config_key(AUDIT_ENABLED_KEY)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return bool(cached)
        try:
            enabled = _parse_flag(await self._config.get_value(AUDIT_ENABLED_KEY))
        except SQLAlchemyError:
            logger.warning("Could not read %s, auditing stays on", AUDIT_ENABLED_KEY, exc_info=True)
            return True
        await self._cache.set(cache_key, enabled, ttl=self._ttl)
        return enabled

    async def set_auditing_enabled(self, enabled: bool) -> bool:
        await self._config.upsert(AUDIT_ENABLED_KEY, "true" if enabled else "false")
        await self._cache.set(system_config_key(AUDIT_ENABLED_KEY), enabled, ttl=self._ttl)
        logger.info("API auditing %s", "enabled" if enabled else "disabled")
        return enabled

    async def cleanup_old_audits(self, retention_days: int) -> int:
        """Delete audit rows older than retention_days. Returns the number deleted."""
        deleted = await self._logs.delete_older_than(days_ago(retention_days))
        logger.info("Deleted %s audit log rows older than %s days", deleted, retention_days)
        return deleted

    async def record(self, entry: ApiAuditEntry) -> None:
        await self._logs.add(entry)
