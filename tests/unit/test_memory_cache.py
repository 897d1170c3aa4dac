"""InMemoryCache: TTL expiry with an injected clock."""

from eduhub.infrastructure.cache import AUDIT_ENABLED_KEY, InMemoryCache, system_config_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_get_returns_value_until_ttl_elapses() -> None:
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    assert await cache.set("k", "v", ttl=60) is True
    clock.now += 59
    assert await cache.get("k") == "v"
    clock.now += 1
    assert await cache.get("k") is None


async def test_falsy_values_are_cached() -> None:
    cache = InMemoryCache(clock=FakeClock())
    await cache.set("flag", False, ttl=10)
    assert await cache.get("flag") is False


async def test_non_positive_ttl_removes_key() -> None:
    cache = InMemoryCache(clock=FakeClock())
    await cache.set("k", 1, ttl=10)
    assert await cache.set("k", 2, ttl=0) is False
    assert await cache.get("k") is None


async def test_delete_and_clear() -> None:
    cache = InMemoryCache(clock=FakeClock())
    await cache.set("a", 1)
    await cache.set("b", 2)
    assert await cache.delete("a") is True
    assert await cache.delete("a") is False
    await cache.clear()
    assert await cache.get("b") is None
    assert cache.is_available()


def test_system_config_key() -> None:
    assert system_config_key(AUDIT_ENABLED_KEY).endswith(AUDIT_ENABLED_KEY)
