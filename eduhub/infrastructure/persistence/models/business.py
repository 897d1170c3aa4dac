"""Business ORM model. Root of the tenant hierarchy."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.exam import Exam
    from eduhub.infrastructure.persistence.models.user import User


class Business(IntIdMixin, TimestampMixin, Base):
    """An institute. Table: business. slug is unique and used in public URLs."""

    __tablename__ = "business"

    institute_name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    logo_url: Mapped[str | None] = mapped_column(String, nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tagline: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    website_url: Mapped[str | None] = mapped_column(String, nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(String, nullable=True)
    instagram_url: Mapped[str | None] = mapped_column(String, nullable=True)
    youtube_url: Mapped[str | None] = mapped_column(String, nullable=True)

    users: Mapped[list["User"]] = relationship(back_populates="business")
    exams: Mapped[list["Exam"]] = relationship(
        back_populates="business", cascade="all, delete-orphan", passive_deletes=True
    )
