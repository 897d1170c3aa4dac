"""Frozen dataclasses crossing the application service boundary."""

from eduhub.application.dtos.access import OwnerRef, ResolvedOwnership
from eduhub.application.dtos.audit import ApiAuditEntry
from eduhub.application.dtos.auth import AuthTokens

__all__ = ["ApiAuditEntry", "AuthTokens", "OwnerRef", "ResolvedOwnership"]
