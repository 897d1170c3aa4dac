"""Query-string parsing into QueryOptions.

Recognized keys: fields, include, page, limit, sort. Everything else is
ignored. Parsing is lenient: anything that cannot be parsed is dropped
instead of rejected, so this module never raises.
"""

from collections.abc import Mapping
from typing import Any

from eduhub.domain.value_objects import IncludeTree, QueryOptions, SortDirection

_SORT_DIRECTIONS: frozenset[str] = frozenset({"asc", "desc"})


def _first(query: Mapping[str, Any], key: str) -> str | None:
    """Return the raw value for key as a string (first item for list values)."""
    value = query.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def _parse_select(raw: str) -> dict[str, bool]:
    return {name.strip(): True for name in raw.split(",")}


def _parse_include(raw: str) -> IncludeTree:
    """Build the nested include tree from 'a,b.c,b.d'.

    Tokens are applied in order; a later token that reaches an existing key
    replaces it (a plain True becomes a wrapper, a wrapper becomes True).
    """
    tree: IncludeTree = {}
    for token in raw.split(","):
        parts = token.strip().split(".")
        current = tree
        for depth, part in enumerate(parts):
            if depth == len(parts) - 1:
                current[part] = True
                break
            node = current.get(part)
            if not isinstance(node, dict):
                node = {"include": {}}
                current[part] = node
            current = node["include"]
    return tree


def _parse_positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 1 else None


def _parse_pagination(page_raw: str | None, limit_raw: str | None) -> tuple[int | None, int | None]:
    """Return (skip, take); (None, None) unless page and limit are both positive ints."""
    page = _parse_positive_int(page_raw)
    limit = _parse_positive_int(limit_raw)
    if page is None or limit is None:
        return None, None
    return (page - 1) * limit, limit


def _parse_sort(raw: str | None) -> dict[str, SortDirection] | None:
    """Parse 'field:asc' / 'field:desc' (case-sensitive); anything else gives None."""
    if not raw:
        return None
    parts = raw.split(":")
    if len(parts) < 2:
        return None
    name, direction = parts[0], parts[1]
    if not name or direction not in _SORT_DIRECTIONS:
        return None
    return {name: direction}  # type: ignore[dict-item]


def parse_query_options(query: Mapping[str, Any]) -> QueryOptions:
    """Translate query-string parameters into QueryOptions.

    - fields=a,b      -> select={'a': True, 'b': True}; include is then ignored
    - include=a.b,c   -> include={'a': {'include': {'b': True}}, 'c': True}
    - page=2&limit=10 -> skip=10, take=10 (both required, both >= 1)
    - sort=name:desc  -> order_by={'name': 'desc'}

    Args:
        query: Flat mapping of query parameters (e.g. request.query_params).

    Returns:
        A new QueryOptions; where is always empty here.
    """
    select: dict[str, bool] | None = None
    include: IncludeTree | None = None

    fields = _first(query, "fields")
    if fields is not None:
        select = _parse_select(fields)
    else:
        raw_include = _first(query, "include")
        if raw_include:
            include = _parse_include(raw_include)

    skip, take = _parse_pagination(_first(query, "page"), _first(query, "limit"))
    return QueryOptions(
        select=select,
        include=include,
        order_by=_parse_sort(_first(query, "sort")),
        skip=skip,
        take=take,
    )
