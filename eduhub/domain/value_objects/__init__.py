"""Domain value objects (immutable, no identity)."""

from eduhub.domain.value_objects.principal import Principal
from eduhub.domain.value_objects.query_options import (
    IncludeTree,
    QueryOptions,
    SortDirection,
)

__all__ = ["IncludeTree", "Principal", "QueryOptions", "SortDirection"]
