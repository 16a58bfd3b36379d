"""
Inline Editable - Redis Cache Backend Tests

Test suite for the Redis shared cache backend.
Requires Redis server running on localhost:6379 (or TEST_REDIS_URL env var);
tests that need a live server are skipped otherwise.
"""

import socket
from collections.abc import AsyncGenerator

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from inline_editable.cache.backends.redis import RedisCacheBackend
from inline_editable.errors import (
    CacheConnectionError,
    CacheOperationError,
    ErrorCode,
    InvalidCacheKeyError,
    extract_error_code,
)

# Check if Redis is available
try:
    with socket.create_connection(("localhost", 6379), timeout=1):
        redis_available = True
except OSError:
    redis_available = False

BLOCK_KEY = "__inline_prefix_ui.en"


class TestRedisCacheBackendOffline:
    """Behaviour that does not need a live server."""

    def test_requires_url(self) -> None:
        with pytest.raises(ValueError):
            RedisCacheBackend(redis_url="")

    def test_ttl_normalization(self) -> None:
        cache = RedisCacheBackend(redis_url="redis://localhost:6379/15", default_ttl=60)

        assert cache._ttl_seconds(None) == 60
        assert cache._ttl_seconds(0) is None
        assert cache._ttl_seconds(-5) is None
        assert cache._ttl_seconds(10) == 10

    def test_json_round_trip_of_block(self) -> None:
        payload = RedisCacheBackend._to_json({"save": "Enregistrer", "title": "Café"})

        assert RedisCacheBackend._from_json(payload) == {"save": "Enregistrer", "title": "Café"}

    def test_corrupt_payload_is_a_miss(self) -> None:
        assert RedisCacheBackend._from_json("{not json") is None

    async def test_invalid_key_raises_before_network(self) -> None:
        cache = RedisCacheBackend(redis_url="redis://localhost:6379/15")

        with pytest.raises(InvalidCacheKeyError):
            await cache.get("")

    async def test_read_failure_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cache = RedisCacheBackend(redis_url="redis://localhost:6379/15")

        async def broken(*args: object, **kwargs: object) -> None:
            raise RedisConnectionError("connection refused")

        monkeypatch.setattr(cache._client, "get", broken)
        monkeypatch.setattr(cache._client, "delete", broken)
        monkeypatch.setattr(cache._client, "set", broken)

        with pytest.raises(CacheOperationError):
            await cache.get(BLOCK_KEY)
        with pytest.raises(CacheOperationError):
            await cache.delete(BLOCK_KEY)
        assert await cache.set(BLOCK_KEY, {}) is False

    async def test_unreachable_server_raises_connection_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cache = RedisCacheBackend(redis_url="redis://localhost:6379/15")

        async def refused(*args: object, **kwargs: object) -> None:
            raise RedisConnectionError("connection refused")

        async def timed_out(*args: object, **kwargs: object) -> None:
            raise RedisTimeoutError("timed out")

        monkeypatch.setattr(cache._client, "get", refused)
        monkeypatch.setattr(cache._client, "exists", timed_out)

        with pytest.raises(CacheConnectionError) as exc_info:
            await cache.get(BLOCK_KEY)
        assert exc_info.value.details["operation"] == "get"
        assert extract_error_code(exc_info.value) is ErrorCode.CACHE_UNAVAILABLE

        with pytest.raises(CacheOperationError) as other:
            await cache.exists(BLOCK_KEY)
        assert not isinstance(other.value, CacheConnectionError)


@pytest.mark.skipif(not redis_available, reason="Redis server not available")
class TestRedisCacheBackend:
    """Test suite for RedisCacheBackend against a live server."""

    @pytest.fixture
    async def cache(self, test_redis_url: str) -> AsyncGenerator[RedisCacheBackend, None]:
        """Create a fresh Redis cache instance for each test."""
        cache = RedisCacheBackend(
            redis_url=test_redis_url,
            namespace="test",
            default_ttl=3600,
            max_connections=5,
            socket_timeout=2,
        )
        await cache.clear()
        yield cache
        await cache.clear()
        await cache.close()

    async def test_set_and_get_block(self, cache: RedisCacheBackend) -> None:
        assert await cache.set(BLOCK_KEY, {"save": "Save"}) is True
        assert await cache.get(BLOCK_KEY) == {"save": "Save"}

    async def test_empty_block_is_a_hit(self, cache: RedisCacheBackend) -> None:
        await cache.set(BLOCK_KEY, {})
        assert await cache.get(BLOCK_KEY) == {}

    async def test_delete(self, cache: RedisCacheBackend) -> None:
        await cache.set(BLOCK_KEY, {"save": "Save"})

        assert await cache.delete(BLOCK_KEY) is True
        assert await cache.get(BLOCK_KEY) is None
        assert await cache.delete(BLOCK_KEY) is False

    async def test_namespace_isolation(self, cache: RedisCacheBackend, test_redis_url: str) -> None:
        other = RedisCacheBackend(redis_url=test_redis_url, namespace="other")
        try:
            await cache.set(BLOCK_KEY, {"save": "Save"})
            assert await other.get(BLOCK_KEY) is None
        finally:
            await other.close()

    async def test_stats(self, cache: RedisCacheBackend) -> None:
        await cache.set(BLOCK_KEY, {})
        await cache.get(BLOCK_KEY)
        await cache.get("missing")

        stats = await cache.get_stats()
        assert stats["backend"] == "redis"
        assert stats["connected"] is True
        assert stats["hits"] == 1
        assert stats["misses"] == 1
