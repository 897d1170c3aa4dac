"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure the application layer needs
(ownership lookups, cache, file storage) without importing it (DIP).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from eduhub.application.dtos.access import OwnerRef
    from eduhub.domain.enums import EntityKind


class IOwnershipLookup(Protocol):
    """Read-only lookups used by the access resolver (one query per call)."""

    async def get_ref(self, kind: EntityKind, entity_id: int) -> OwnerRef | None:
        """Return the entity's id and parent reference, or None if it does not exist."""

    async def get_membership_status(self, user_id: int, batch_id: int) -> bool | None:
        """Return is_active of the (user, batch) membership, or None if there is no row."""


class ICacheService(Protocol):
    """Minimal async cache protocol (get/set with TTL)."""

    def is_available(self) -> bool:
        """Return True if the cache is usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True if it existed."""


class IFileStorage(Protocol):
    """File storage for uploaded content (local filesystem in production)."""

    async def save(self, data: bytes, relative_name: str) -> str:
        """Write data and return the stored path."""

    async def delete(self, stored_path: str) -> bool:
        """Delete a stored file. Returns False if it did not exist."""

    async def exists(self, stored_path: str) -> bool:
        """Return True if the stored file exists."""

    def stream(self, stored_path: str) -> AsyncIterator[bytes]:
        """Yield the stored file in chunks."""
