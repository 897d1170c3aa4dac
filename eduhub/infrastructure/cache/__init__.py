"""Cache: in-process TTL cache and cache key utilities."""

from eduhub.infrastructure.cache.keys import AUDIT_ENABLED_KEY, system_config_key
from eduhub.infrastructure.cache.memory_cache import CachedValue, InMemoryCache

__all__ = ["AUDIT_ENABLED_KEY", "CachedValue", "InMemoryCache", "system_config_key"]
