"""System configuration key/value ORM model (runtime flags such as AUDIT_ENABLED)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.models.mixins import IntIdMixin, TimestampMixin


class SystemConfig(IntIdMixin, TimestampMixin, Base):
    """Runtime setting. Table: system_config. Values are stored as text ('true'/'false')."""

    __tablename__ = "system_config"

    key: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
