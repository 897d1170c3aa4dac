"""Application services: query options builder, access resolver, per-entity services."""

from eduhub.application.services.access_resolver import CHAIN_RESOLVERS, AccessResolver
from eduhub.application.services.query_builder import parse_query_options

__all__ = ["CHAIN_RESOLVERS", "AccessResolver", "parse_query_options"]
