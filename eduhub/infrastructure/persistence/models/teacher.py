"""Teacher profile ORM model (one per user)."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.domain.enums import Gender, RecordStatus
from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import (
    BusinessMixin,
    IntIdMixin,
    UserAuditMixin,
    status_check,
)

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.business import Business
    from eduhub.infrastructure.persistence.models.user import User


class Teacher(IntIdMixin, BusinessMixin, UserAuditMixin, Base):
    """Professional and personal details of a teaching user. Table: teacher."""

    __tablename__ = "teacher"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    qualification: Mapped[str] = mapped_column(String(255), nullable=False)
    experience_years: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    designation: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    languages: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    gender: Mapped[str | None] = mapped_column(String(16), nullable=True)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RecordStatus.ACTIVE.value
    )

    user: Mapped["User"] = relationship(back_populates="teacher_profile", foreign_keys=[user_id])
    business: Mapped["Business"] = relationship()

    __table_args__ = (
        status_check("status", RecordStatus, "teacher_status_check"),
        status_check("gender", Gender, "teacher_gender_check"),
    )
