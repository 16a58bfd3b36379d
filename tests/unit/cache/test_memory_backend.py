"""
Inline Editable - Memory Cache Backend Tests

Test suite for the in-memory shared cache backend.
Tests LRU eviction, TTL support, key validation, and all interface methods.
"""

import asyncio

import pytest

from inline_editable.cache.backends.memory import MemoryCacheBackend
from inline_editable.errors import InvalidCacheKeyError

BLOCK_KEY = "__inline_prefix_ui.en"


class TestMemoryCacheBackend:
    """Test suite for MemoryCacheBackend."""

    @pytest.fixture
    def cache(self) -> MemoryCacheBackend:
        """Create a fresh memory cache instance for each test."""
        return MemoryCacheBackend(
            max_size=100,
            default_ttl=3600,
            namespace="test",
        )

    async def test_initialization(self) -> None:
        """Test cache initialization with custom parameters."""
        cache = MemoryCacheBackend(
            max_size=100,
            default_ttl=1800,
            namespace="custom",
        )
        assert cache.max_size == 100
        assert cache.default_ttl == 1800
        assert cache.namespace == "custom"

        stats = await cache.get_stats()
        assert stats["hits"] == 0
        assert stats["misses"] == 0
        assert stats["size"] == 0

    async def test_set_and_get_block(self, cache: MemoryCacheBackend) -> None:
        """Test storing and reading back a namespace block."""
        result = await cache.set(BLOCK_KEY, {"save": "Save", "cancel": "Cancel"})
        assert result is True

        value = await cache.get(BLOCK_KEY)
        assert value == {"save": "Save", "cancel": "Cancel"}

        stats = await cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 0
        assert stats["sets"] == 1

    async def test_empty_block_is_a_hit(self, cache: MemoryCacheBackend) -> None:
        """An empty block is a cached value, not a miss."""
        await cache.set(BLOCK_KEY, {})

        assert await cache.get(BLOCK_KEY) == {}
        assert (await cache.get_stats())["hits"] == 1

    async def test_get_nonexistent_key(self, cache: MemoryCacheBackend) -> None:
        """Test getting a key that doesn't exist."""
        value = await cache.get("nonexistent")
        assert value is None

        stats = await cache.get_stats()
        assert stats["misses"] == 1
        assert stats["hits"] == 0

    async def test_delete(self, cache: MemoryCacheBackend) -> None:
        """Test deleting keys."""
        await cache.set(BLOCK_KEY, {"save": "Save"})
        assert await cache.exists(BLOCK_KEY) is True

        result = await cache.delete(BLOCK_KEY)
        assert result is True

        assert await cache.exists(BLOCK_KEY) is False
        assert await cache.get(BLOCK_KEY) is None

        # Deleting again reports nothing removed
        result = await cache.delete(BLOCK_KEY)
        assert result is False

    async def test_clear(self, cache: MemoryCacheBackend) -> None:
        """Test clearing all cache entries."""
        for locale in ("en", "fr", "de"):
            await cache.set(f"__inline_prefix_ui.{locale}", {})

        stats = await cache.get_stats()
        assert stats["size"] == 3

        result = await cache.clear()
        assert result is True

        stats = await cache.get_stats()
        assert stats["size"] == 0

    async def test_ttl_expiration(self, cache: MemoryCacheBackend) -> None:
        """Test that entries expire after TTL."""
        await cache.set(BLOCK_KEY, {"save": "Save"}, ttl=1)

        assert await cache.get(BLOCK_KEY) == {"save": "Save"}

        # Wait for expiration (1.5s to ensure TTL=1s is fully expired)
        await asyncio.sleep(1.5)

        assert await cache.exists(BLOCK_KEY) is False
        assert await cache.get(BLOCK_KEY) is None

    async def test_ttl_zero_no_expiry(self, cache: MemoryCacheBackend) -> None:
        """Test that TTL=0 means no expiration."""
        await cache.set(BLOCK_KEY, {"save": "Save"}, ttl=0)

        await asyncio.sleep(0.1)
        assert await cache.get(BLOCK_KEY) == {"save": "Save"}

    async def test_lru_eviction(self) -> None:
        """Test LRU eviction when max_size is reached."""
        cache = MemoryCacheBackend(max_size=10, default_ttl=3600, namespace="test")

        for i in range(10):
            await cache.set(f"key{i}", {})

        # Access key0 to make it recently used
        await cache.get("key0")

        # Should evict key1, the least recently used
        await cache.set("key10", {})

        stats = await cache.get_stats()
        assert stats["size"] == 10
        assert stats["evictions"] == 1

        assert await cache.exists("key1") is False
        assert await cache.exists("key0") is True
        assert await cache.exists("key10") is True

    async def test_namespaces_are_isolated(self) -> None:
        """Two backends with different namespaces don't share entries."""
        first = MemoryCacheBackend(namespace="one")
        second = MemoryCacheBackend(namespace="two")

        await first.set(BLOCK_KEY, {"save": "Save"})

        assert await second.get(BLOCK_KEY) is None

    @pytest.mark.parametrize("key", ["", "has space", "x" * 251])
    async def test_invalid_keys_raise(self, cache: MemoryCacheBackend, key: str) -> None:
        """Malformed keys are rejected rather than silently missed."""
        with pytest.raises(InvalidCacheKeyError):
            await cache.get(key)
        with pytest.raises(InvalidCacheKeyError):
            await cache.set(key, {})
        with pytest.raises(InvalidCacheKeyError):
            await cache.delete(key)

    async def test_concurrent_sets(self, cache: MemoryCacheBackend) -> None:
        """Test concurrent writes from many tasks."""
        await asyncio.gather(*(cache.set(f"__inline_prefix_ns{i}.en", {"n": str(i)}) for i in range(50)))

        stats = await cache.get_stats()
        assert stats["size"] == 50
        assert await cache.get("__inline_prefix_ns7.en") == {"n": "7"}
