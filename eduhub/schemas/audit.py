"""Audit control API schemas."""

from pydantic import BaseModel


class AuditStatus(BaseModel):
    enabled: bool


class AuditCleanupResponse(BaseModel):
    deleted: int
    retention_days: int
