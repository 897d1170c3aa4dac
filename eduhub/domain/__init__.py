"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from eduhub.domain.enums import (
    ContentType,
    EntityKind,
    Gender,
    RecordStatus,
    UserRole,
    UserStatus,
)
from eduhub.domain.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    EduHubException,
    ForbiddenException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)
from eduhub.domain.value_objects import Principal, QueryOptions

__all__ = [
    # Enums
    "ContentType",
    "EntityKind",
    "Gender",
    "RecordStatus",
    "UserRole",
    "UserStatus",
    # Exceptions
    "AlreadyExistsException",
    "AuthenticationException",
    "EduHubException",
    "ForbiddenException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    # Value objects
    "Principal",
    "QueryOptions",
]
