"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (Alembic
env.py relies on that).
"""

from eduhub.infrastructure.persistence.models.api_audit_log import ApiAuditLog
from eduhub.infrastructure.persistence.models.batch import Batch, BatchUser
from eduhub.infrastructure.persistence.models.business import Business
from eduhub.infrastructure.persistence.models.content import Content
from eduhub.infrastructure.persistence.models.exam import Course, Exam, Subject
from eduhub.infrastructure.persistence.models.mixins import (
    BusinessMixin,
    IntIdMixin,
    TimestampMixin,
    UserAuditMixin,
)
from eduhub.infrastructure.persistence.models.permission import Permission, UserPermission
from eduhub.infrastructure.persistence.models.refresh_token import RefreshToken
from eduhub.infrastructure.persistence.models.system_config import SystemConfig
from eduhub.infrastructure.persistence.models.teacher import Teacher
from eduhub.infrastructure.persistence.models.user import User

__all__ = [
    "ApiAuditLog",
    "Batch",
    "BatchUser",
    "Business",
    "BusinessMixin",
    "Content",
    "Course",
    "Exam",
    "IntIdMixin",
    "Permission",
    "RefreshToken",
    "Subject",
    "SystemConfig",
    "Teacher",
    "TimestampMixin",
    "User",
    "UserAuditMixin",
    "UserPermission",
]
