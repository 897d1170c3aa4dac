"""Infrastructure implementations of application service interfaces."""

from eduhub.infrastructure.services.audit_service import AuditService
from eduhub.infrastructure.services.ownership_lookup import SqlOwnershipLookup

__all__ = ["AuditService", "SqlOwnershipLookup"]
