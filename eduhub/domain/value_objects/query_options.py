"""QueryOptions value object: projection, eager loading, filters, order and paging.

Built per request from the query string (see
eduhub.application.services.query_builder) and handed to repositories,
which translate it into a SQLAlchemy statement.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Literal

SortDirection = Literal["asc", "desc"]

# Nested relation tree: name -> True (load relation) or {"include": {...}} (load and descend).
IncludeTree = dict[str, Any]


@dataclass(frozen=True)
class QueryOptions:
    """Structured query options for list/get operations.

    select and include are mutually exclusive. where is a flat mapping of
    filter predicates; values are either plain values (column equality) or
    SQL expressions supplied by services. Treat instances as immutable:
    use with_where() to derive a filtered copy.
    """

    select: dict[str, bool] | None = None
    include: IncludeTree | None = None
    where: dict[str, Any] = field(default_factory=dict)
    order_by: dict[str, SortDirection] | None = None
    skip: int | None = None
    take: int | None = None

    def __post_init__(self) -> None:
        if self.select is not None and self.include is not None:
            raise ValueError("QueryOptions.select and QueryOptions.include are mutually exclusive")

    def with_where(self, **filters: Any) -> "QueryOptions":
        """Return a copy whose where is {**self.where, **filters} (new keys win)."""
        return replace(self, where={**self.where, **filters})

    @property
    def is_paginated(self) -> bool:
        return self.take is not None
