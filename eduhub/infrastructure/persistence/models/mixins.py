"""SQLAlchemy mixins for common model patterns (DRY).

Provides: IntIdMixin, BusinessMixin, TimestampMixin, UserAuditMixin and the
status_check() helper for string-valued enum columns.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


class IntIdMixin:
    """Mixin for models using an autoincrement integer primary key."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class BusinessMixin:
    """Mixin for business-owned models. business_id FK with CASCADE delete."""

    @declared_attr
    def business_id(cls) -> Mapped[int]:
        return mapped_column(
            Integer,
            ForeignKey("business.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class UserAuditMixin(TimestampMixin):
    """Mixin for user audit: created_by, updated_by (FK to app_user.id)."""

    @declared_attr
    def created_by(cls) -> Mapped[int | None]:
        return mapped_column(
            Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
        )

    @declared_attr
    def updated_by(cls) -> Mapped[int | None]:
        return mapped_column(
            Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
        )


def status_check(column: str, enum_cls: type[Enum], name: str) -> CheckConstraint:
    """CHECK constraint restricting column to the values of a str Enum."""
    values = ", ".join(
        "'{}'".format(str(member.value).replace("'", "''")) for member in enum_cls
    )
    return CheckConstraint(f"{column} IN ({values})", name=name)
