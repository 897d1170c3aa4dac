"""Repositories: one per aggregate, built on BaseRepository."""

from eduhub.infrastructure.persistence.repositories.api_audit_log_repo import (
    ApiAuditLogRepository,
)
from eduhub.infrastructure.persistence.repositories.base import BaseRepository
from eduhub.infrastructure.persistence.repositories.batch_repo import (
    BatchRepository,
    BatchUserRepository,
)
from eduhub.infrastructure.persistence.repositories.business_repo import BusinessRepository
from eduhub.infrastructure.persistence.repositories.content_repo import ContentRepository
from eduhub.infrastructure.persistence.repositories.exam_repo import (
    CourseRepository,
    ExamRepository,
    SubjectRepository,
)
from eduhub.infrastructure.persistence.repositories.permission_repo import PermissionRepository
from eduhub.infrastructure.persistence.repositories.refresh_token_repo import (
    RefreshTokenRepository,
)
from eduhub.infrastructure.persistence.repositories.system_config_repo import (
    SystemConfigRepository,
)
from eduhub.infrastructure.persistence.repositories.teacher_repo import TeacherRepository
from eduhub.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ApiAuditLogRepository",
    "BaseRepository",
    "BatchRepository",
    "BatchUserRepository",
    "BusinessRepository",
    "ContentRepository",
    "CourseRepository",
    "ExamRepository",
    "PermissionRepository",
    "RefreshTokenRepository",
    "SubjectRepository",
    "SystemConfigRepository",
    "TeacherRepository",
    "UserRepository",
]
