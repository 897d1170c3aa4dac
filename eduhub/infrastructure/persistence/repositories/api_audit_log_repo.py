"""API audit log repository. Insert-only apart from retention cleanup."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.application.dtos.audit import ApiAuditEntry
from eduhub.infrastructure.persistence.models.api_audit_log import ApiAuditLog


class ApiAuditLogRepository:
    """Append-only API audit log repository; rows are removed only by delete_older_than."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, entry: ApiAuditEntry) -> None:
        """Append one entry (flushed, not refreshed: callers do not read it back)."""
        self.db.add(
            ApiAuditLog(
                user_id=entry.user_id,
                role=entry.role,
                http_method=entry.http_method,
                request_url=entry.request_url,
                request_path=entry.request_path,
                query_params=entry.query_params,
                request_body=entry.request_body,
                response_status=entry.response_status,
                response_time_ms=entry.response_time_ms,
                response_body=entry.response_body,
                error_code=entry.error_code,
                error_message=entry.error_message,
                request_id=entry.request_id,
            )
        )
        await self.db.flush()

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete entries created before cutoff. Returns the number of rows removed."""
        result = await self.db.execute(delete(ApiAuditLog).where(ApiAuditLog.created_at < cutoff))
        return result.rowcount or 0
