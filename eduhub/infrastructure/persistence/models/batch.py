"""Batch and BatchUser ORM models."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.content import Content
    from eduhub.infrastructure.persistence.models.exam import Course
    from eduhub.infrastructure.persistence.models.user import User


class Batch(IntIdMixin, TimestampMixin, Base):
    """A cohort of a course. Table: batch. code_name is globally unique."""

    __tablename__ = "batch"

    code_name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )
    course_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("course.id", ondelete="SET NULL"), nullable=True, index=True
    )

    course: Mapped["Course | None"] = relationship(back_populates="batches")
    batch_users: Mapped[list["BatchUser"]] = relationship(
        back_populates="batch", cascade="all, delete-orphan", passive_deletes=True
    )
    contents: Mapped[list["Content"]] = relationship(
        back_populates="batch", cascade="all, delete-orphan", passive_deletes=True
    )


class BatchUser(IntIdMixin, TimestampMixin, Base):
    """Membership of a user in a batch. Table: batch_user. Unique (user_id, batch_id)."""

    __tablename__ = "batch_user"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    batch_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("batch.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )

    user: Mapped["User"] = relationship(back_populates="batch_users")
    batch: Mapped["Batch"] = relationship(back_populates="batch_users")

    __table_args__ = (UniqueConstraint("user_id", "batch_id", name="uq_batch_user"),)
