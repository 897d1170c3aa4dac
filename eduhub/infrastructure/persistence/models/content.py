"""Content ORM model (uploaded PDFs and images of a batch)."""

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduhub.domain.enums import ContentType, RecordStatus
from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import (
    IntIdMixin,
    TimestampMixin,
    status_check,
)

if TYPE_CHECKING:
    from eduhub.infrastructure.persistence.models.batch import Batch
    from eduhub.infrastructure.persistence.models.user import User


class Content(IntIdMixin, TimestampMixin, Base):
    """Uploaded file metadata. Table: content. file_path points into UPLOAD_DIR."""

    __tablename__ = "content"

    batch_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("batch.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    file_path: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RecordStatus.ACTIVE.value
    )
    uploaded_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    updated_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    batch: Mapped["Batch"] = relationship(back_populates="contents")
    uploader: Mapped["User | None"] = relationship(foreign_keys=[uploaded_by])

    __table_args__ = (
        status_check("type", ContentType, "content_type_check"),
        status_check("status", RecordStatus, "content_status_check"),
    )
