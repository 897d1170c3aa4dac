"""Base repository: generic CRUD, QueryOptions-aware finders and lifecycle hooks."""

from dataclasses import replace
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.database import Base
from eduhub.infrastructure.persistence.query import apply_query_options

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, find_many/find_one, create, update, delete and hooks.

    find_many/find_one take QueryOptions plus positional scope filters. Scope
    filters come from the service (e.g. Course.exam_id == exam_id) and are
    ANDed with options.where, so client filters can only narrow them.
    Subclasses override _on_after_create, _on_after_update, _on_before_delete.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def find_many(
        self, options: QueryOptions | None = None, *scope: ColumnElement[bool]
    ) -> list[ModelType]:
        """Return records matching scope and options (projection, includes, order, page)."""
        stmt = apply_query_options(select(self.model), self.model, options or QueryOptions())
        if scope:
            stmt = stmt.where(*scope)
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    async def find_one(
        self, options: QueryOptions | None = None, *scope: ColumnElement[bool]
    ) -> ModelType | None:
        """Return the first record matching scope and options; paging is ignored."""
        opts = replace(options or QueryOptions(), skip=None, take=None, order_by=None)
        stmt = apply_query_options(select(self.model), self.model, opts).limit(1)
        if scope:
            stmt = stmt.where(*scope)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def count(self, *scope: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model)
        if scope:
            stmt = stmt.where(*scope)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and run _on_after_create hook."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def update(self, obj: ModelType, **changes: Any) -> ModelType:
        """Apply changes (attribute=value) to an attached record, flush and refresh.

        None values are skipped so partial updates can pass optional fields
        straight through.
        """
        for name, value in changes.items():
            if value is not None:
                setattr(obj, name, value)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_update(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""
