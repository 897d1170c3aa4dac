"""Audit control API (SUPERADMIN): runtime on/off switch and retention cleanup."""

from typing import Annotated

from fastapi import APIRouter, Depends

from eduhub.api.v1.dependencies import get_audit_service, require_roles
from eduhub.core.config import get_settings
from eduhub.domain.enums import UserRole
from eduhub.infrastructure.services import AuditService
from eduhub.schemas.audit import AuditCleanupResponse, AuditStatus

router = APIRouter(dependencies=[Depends(require_roles(UserRole.SUPERADMIN))])

Audit = Annotated[AuditService, Depends(get_audit_service)]


@router.get("/status", response_model=AuditStatus)
async def get_audit_status(service: Audit):
    return AuditStatus(enabled=await service.is_auditing_enabled())


@router.put("/status", response_model=AuditStatus)
async def set_audit_status(body: AuditStatus, service: Audit):
    """Switch API auditing on or off; other workers pick it up within the flag TTL."""
    return AuditStatus(enabled=await service.set_auditing_enabled(body.enabled))


@router.post("/cleanup", response_model=AuditCleanupResponse)
async def cleanup_audit_logs(service: Audit):
    retention_days = get_settings().audit_retention_days
    deleted = await service.cleanup_old_audits(retention_days)
    return AuditCleanupResponse(deleted=deleted, retention_days=retention_days)
