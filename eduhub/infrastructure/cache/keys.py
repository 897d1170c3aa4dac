"""Cache key format (one place for all keys)."""

AUDIT_ENABLED_KEY = "AUDIT_ENABLED"


def system_config_key(key: str) -> str:
    """Return cache key for a system_config entry."""
    return f"system_config:{key}"
