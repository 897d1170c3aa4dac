"""Permission and UserPermission ORM models (per-user permission codes)."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.user import User


class Permission(IntIdMixin, TimestampMixin, Base):
    """Permission definition. Table: permission. code is unique (e.g. CONTENT_CREATE)."""

    __tablename__ = "permission"

    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class UserPermission(IntIdMixin, Base):
    """Many-to-many user-permission. Table: user_permission."""

    __tablename__ = "user_permission"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("permission.id", ondelete="CASCADE"), nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="user_permissions")
    permission: Mapped["Permission"] = relationship()

    __table_args__ = (
        UniqueConstraint("user_id", "permission_id", name="uq_user_permission"),
    )
