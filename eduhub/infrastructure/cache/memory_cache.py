"""In-process cache with per-entry expiry.

Used for small, hot values read on every request (e.g. the API audit flag).
Each entry stores its own expires_at so a stale value is never served; the
clock is injectable for tests.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedValue:
    """A cached value and the monotonic time after which it is stale."""

    value: Any
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class InMemoryCache:
    """Async TTL cache implementing ICacheService in the current process.

    One instance is created at startup and shared through app.state.
    Multiple workers each hold their own copy, so a change made in one
    worker is seen by the others at most one TTL later.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CachedValue] = {}
        self._lock = asyncio.Lock()

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any:
        """Return the cached value or None when missing or expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(self._clock()):
                del self._entries[key]
                logger.debug("Cache EXPIRED: %s", key)
                return None
            return entry.value

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value for ttl seconds. A non-positive ttl removes the key instead."""
        async with self._lock:
            if ttl <= 0:
                self._entries.pop(key, None)
                return False
            self._entries[key] = CachedValue(value=value, expires_at=self._clock() + ttl)
            return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
