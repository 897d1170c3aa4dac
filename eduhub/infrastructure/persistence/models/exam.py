"""Exam, Course and Subject ORM models (the academic catalogue of a business)."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.domain.enums import RecordStatus
from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import (
    BusinessMixin,
    IntIdMixin,
    TimestampMixin,
    UserAuditMixin,
    status_check,
)

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.batch import Batch
    from eduhub.infrastructure.persistence.models.business import Business


class Exam(IntIdMixin, BusinessMixin, UserAuditMixin, Base):
    """Exam offered by a business. Table: exam. Soft deleted via status."""

    __tablename__ = "exam"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RecordStatus.ACTIVE.value, index=True
    )
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    business: Mapped["Business"] = relationship(back_populates="exams")
    courses: Mapped[list["Course"]] = relationship(back_populates="exam")

    __table_args__ = (status_check("status", RecordStatus, "exam_status_check"),)


class Course(IntIdMixin, TimestampMixin, Base):
    """Course within an exam. Table: course. exam_id is cleared when the exam is deleted."""

    __tablename__ = "course"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RecordStatus.ACTIVE.value
    )
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    exam_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("exam.id", ondelete="SET NULL"), nullable=True, index=True
    )

    exam: Mapped["Exam | None"] = relationship(back_populates="courses")
    subjects: Mapped[list["Subject"]] = relationship(
        back_populates="course", cascade="all, delete-orphan", passive_deletes=True
    )
    batches: Mapped[list["Batch"]] = relationship(back_populates="course")

    __table_args__ = (status_check("status", RecordStatus, "course_status_check"),)


class Subject(IntIdMixin, TimestampMixin, Base):
    """Subject taught in a course. Table: subject. Unique (course_id, name)."""

    __tablename__ = "subject"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RecordStatus.ACTIVE.value
    )
    course_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("course.id", ondelete="CASCADE"), nullable=False, index=True
    )

    course: Mapped["Course"] = relationship(back_populates="subjects")

    __table_args__ = (
        UniqueConstraint("course_id", "name", name="uq_subject_course_name"),
        status_check("status", RecordStatus, "subject_status_check"),
    )
