"""Persistence layer: engine/session, ORM models, repositories, query translation."""
