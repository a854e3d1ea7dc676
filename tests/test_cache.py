"""Тесты кэша: без Redis приложение работает, кэш становится no-op."""
import redis.asyncio as redis

from app.config import settings
from app.core.cache import CacheService, get_cache_key_products, get_cache_pattern_products


class FakeRedis:
    """Минимальный клиент Redis в памяти."""

    def __init__(self, values=None, ping_error=None):
        self.values = values or {}
        self.ping_error = ping_error
        self.closed = False

    async def ping(self):
        if self.ping_error:
            raise self.ping_error
        return True

    async def get(self, key):
        return self.values.get(key)

    async def aclose(self):
        self.closed = True


async def test_disabled_cache_is_noop():
    cache = CacheService(enabled=False)

    assert await cache.set("key", {"a": 1}) is False
    assert await cache.get("key") is None
    assert await cache.delete("key") is False
    assert await cache.delete_pattern("products:*") == 0


async def test_unavailable_redis_degrades_to_noop(monkeypatch):
    monkeypatch.setattr(settings, "redis_url", "redis://127.0.0.1:1/0")
    cache = CacheService(enabled=True)

    assert await cache.get("key") is None
    assert await cache.set("key", [1, 2]) is False


async def test_failed_ping_closes_client(monkeypatch):
    fake = FakeRedis(ping_error=redis.ConnectionError("refused"))
    monkeypatch.setattr(redis, "from_url", lambda *args, **kwargs: fake)
    cache = CacheService(enabled=True)

    await cache.connect()

    assert fake.closed is True
    assert cache._redis is None


async def test_broken_cached_value_treated_as_miss():
    cache = CacheService(enabled=True)
    cache._redis = FakeRedis(values={"categories:demo-shop": "{not json"})

    assert await cache.get("categories:demo-shop") is None


def test_product_cache_keys_match_invalidation_pattern():
    key = get_cache_key_products("demo-shop", "cat-id", page=2, limit=10)

    assert key == "products:demo-shop:cat:cat-id:page:2:limit:10"
    assert key.startswith(get_cache_pattern_products("demo-shop")[:-1])
