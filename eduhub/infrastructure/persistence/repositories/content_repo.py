"""Content repository."""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from eduhub.infrastructure.persistence.models.content import Content
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class ContentRepository(BaseRepository[Content]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Content)

    @staticmethod
    def title_contains(text: str) -> ColumnElement[bool]:
        """Case-insensitive substring match on title (LIKE wildcards escaped)."""
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return Content.title.ilike(f"%{escaped}%", escape="\\")
