"""Infrastructure layer: persistence, security, cache, storage, SQL-backed lookups."""
