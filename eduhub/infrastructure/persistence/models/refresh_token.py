"""Refresh token ORM model (server-side, revocable)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import IntIdMixin, TimestampMixin


class RefreshToken(IntIdMixin, TimestampMixin, Base):
    """Issued refresh token. Table: refresh_token. Revoked on use (rotation) or logout."""

    __tablename__ = "refresh_token"

    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_revoked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false"), default=False
    )
