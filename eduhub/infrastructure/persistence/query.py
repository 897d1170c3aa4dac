"""Translate QueryOptions into SQLAlchemy statements and shape ORM rows into dicts.

apply_query_options() is the single place where client-controlled options
touch SQL. Names are checked against the model's mapper: unknown columns
and relationships are ignored, so a query string can never reference
anything that is not mapped.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, asc, desc
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import load_only, selectinload
from sqlalchemy.sql.elements import ColumnElement

from eduhub.domain.value_objects import IncludeTree, QueryOptions

logger = logging.getLogger(__name__)

# Columns never rendered by serialize(), whatever the options say.
SECRET_COLUMNS: frozenset[str] = frozenset({"password_hash", "token"})


def _include_loaders(model: type, tree: IncludeTree) -> list[Any]:
    """Nested selectinload options for an include tree (unknown names skipped)."""
    relationships = sa_inspect(model).relationships
    loaders: list[Any] = []
    for name, node in tree.items():
        if not node or name not in relationships:
            continue
        loader = selectinload(getattr(model, name))
        if isinstance(node, dict):
            nested = _include_loaders(relationships[name].mapper.class_, node.get("include") or {})
            if nested:
                loader = loader.options(*nested)
        loaders.append(loader)
    return loaders


def _select_loaders(model: type, select_map: dict[str, bool]) -> list[Any]:
    mapper = sa_inspect(model)
    column_names = {attr.key for attr in mapper.column_attrs}
    columns = [
        getattr(model, name)
        for name, wanted in select_map.items()
        if wanted and name in column_names
    ]
    loaders: list[Any] = [load_only(*columns)] if columns else []
    loaders.extend(
        selectinload(getattr(model, name))
        for name, wanted in select_map.items()
        if wanted and name in mapper.relationships
    )
    return loaders


def apply_query_options(stmt: Select[Any], model: type, options: QueryOptions) -> Select[Any]:
    """Apply where, select/include, order_by and skip/take to a SELECT on model.

    where values that are SQL expressions are added as-is (the key is only a
    label); plain values become column equality. Repository scope filters
    are added by the caller with stmt.where(), so where can only narrow them.
    """
    mapper = sa_inspect(model)
    column_names = {attr.key for attr in mapper.column_attrs}

    for name, value in options.where.items():
        if isinstance(value, ColumnElement):
            stmt = stmt.where(value)
        elif name in column_names:
            stmt = stmt.where(getattr(model, name) == value)
        else:
            logger.debug("Ignoring filter on unknown field %s.%s", model.__name__, name)

    if options.select is not None:
        stmt = stmt.options(*_select_loaders(model, options.select))
    elif options.include:
        stmt = stmt.options(*_include_loaders(model, options.include))

    if options.order_by:
        for name, direction in options.order_by.items():
            if name not in column_names:
                continue
            column = getattr(model, name)
            stmt = stmt.order_by(desc(column) if direction == "desc" else asc(column))

    if options.skip is not None:
        stmt = stmt.offset(options.skip)
    if options.take is not None:
        stmt = stmt.limit(options.take)
    return stmt


def _columns(obj: Any, names: list[str] | None = None) -> dict[str, Any]:
    state = sa_inspect(obj)
    unloaded = state.unloaded
    keys = [attr.key for attr in state.mapper.column_attrs]
    if names is not None:
        keys = [k for k in names if k in keys]
    return {
        key: getattr(obj, key)
        for key in keys
        if key not in SECRET_COLUMNS and key not in unloaded
    }


def _render(obj: Any, include: IncludeTree | None, path: frozenset[int]) -> dict[str, Any]:
    """Columns plus every loaded relationship, recursively; cycles are cut."""
    data = _columns(obj)
    state = sa_inspect(obj)
    path = path | {id(obj)}
    for rel in state.mapper.relationships:
        if rel.key in state.unloaded:
            continue
        node = (include or {}).get(rel.key)
        nested = node.get("include") if isinstance(node, dict) else None
        value = getattr(obj, rel.key)
        if value is None:
            data[rel.key] = None
        elif isinstance(value, list):
            data[rel.key] = [_render(v, nested, path) for v in value if id(v) not in path]
        elif id(value) not in path:
            data[rel.key] = _render(value, nested, path)
    return data


def serialize(obj: Any, options: QueryOptions | None = None) -> dict[str, Any]:
    """Render an ORM row to a JSON-ready dict honouring select/include.

    With select: only the selected columns and relationships. Otherwise:
    every non-secret column plus each relationship that is already loaded.
    Never triggers lazy loads.
    """
    if options is not None and options.select is not None:
        wanted = [name for name, flag in options.select.items() if flag]
        data = _columns(obj, wanted)
        state = sa_inspect(obj)
        for name in wanted:
            if name in state.mapper.relationships and name not in state.unloaded:
                value = getattr(obj, name)
                if isinstance(value, list):
                    data[name] = [_render(v, None, frozenset({id(obj)})) for v in value]
                else:
                    data[name] = None if value is None else _render(value, None, frozenset({id(obj)}))
        return data
    return _render(obj, options.include if options is not None else None, frozenset())


def serialize_many(rows: list[Any], options: QueryOptions | None = None) -> list[dict[str, Any]]:
    return [serialize(row, options) for row in rows]
