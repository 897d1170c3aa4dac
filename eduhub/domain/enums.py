"""Domain enumerations for the eduhub application.

Enums represent fixed sets of domain values (roles, record status,
content type). Stored as their string values in the database.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Platform roles. SUPERADMIN is the super-role that bypasses tenant scoping."""

    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    USER = "USER"


class UserStatus(_ValuesMixin, str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RecordStatus(_ValuesMixin, str, Enum):
    """Lifecycle status shared by exams, courses, subjects, teachers and contents."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class ContentType(_ValuesMixin, str, Enum):
    PDF = "PDF"
    IMAGE = "IMAGE"


class Gender(_ValuesMixin, str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class EntityKind(_ValuesMixin, str, Enum):
    """Entity types the access resolver knows how to walk up to a business."""

    BUSINESS = "business"
    EXAM = "exam"
    COURSE = "course"
    SUBJECT = "subject"
    BATCH = "batch"
    CONTENT = "content"
    TEACHER = "teacher"
    USER = "user"

    @property
    def label(self) -> str:
        """Human name used in error messages (e.g. 'Batch')."""
        return self.value.capitalize()
