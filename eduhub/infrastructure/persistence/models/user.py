"""User ORM model for authentication and roles."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.domain.enums import UserRole, UserStatus
from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import (
    IntIdMixin,
    TimestampMixin,
    status_check,
)

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.batch import BatchUser
    from eduhub.infrastructure.persistence.models.business import Business
    from eduhub.infrastructure.persistence.models.permission import UserPermission
    from eduhub.infrastructure.persistence.models.teacher import Teacher


class User(IntIdMixin, TimestampMixin, Base):
    """User model. Table: app_user. email is stored lower-case and unique."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    mobile: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=UserRole.USER.value, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=UserStatus.ACTIVE.value
    )
    business_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("business.id", ondelete="SET NULL"), nullable=True, index=True
    )

    business: Mapped["Business | None"] = relationship(back_populates="users")
    batch_users: Mapped[list["BatchUser"]] = relationship(back_populates="user")
    teacher_profile: Mapped["Teacher | None"] = relationship(
        back_populates="user", uselist=False, foreign_keys="Teacher.user_id"
    )
    user_permissions: Mapped[list["UserPermission"]] = relationship(back_populates="user")

    __table_args__ = (
        status_check("role", UserRole, "app_user_role_check"),
        status_check("status", UserStatus, "app_user_status_check"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value
