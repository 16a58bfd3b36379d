"""
Inline Editable - Redis Cache Backend

Asynchronous Redis shared cache with:
- JSON serialization for values
- Per-key TTL support
- Namespace prefixing so several deployments can share one Redis database

Reads and deletes that fail raise CacheOperationError (CacheConnectionError when
the server cannot be reached): a swallowed delete would leave a stale namespace
block behind after a write. Writes are best-effort and
report failure as False.

Requires: redis>=5.0 with asyncio support

Example:
    cache = RedisCacheBackend(redis_url="redis://localhost:6379", namespace="inline", default_ttl=3600)
    await cache.set("__inline_prefix_ui.en", {"save": "Save"}, ttl=60)
    block = await cache.get("__inline_prefix_ui.en")
"""

from __future__ import annotations

import json
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from ...errors import CacheConnectionError, CacheOperationError
from ..interface import CacheInterface, validate_key

logger = logging.getLogger(__name__)


class RedisCacheBackend(CacheInterface):
    """
    Redis cache backend with JSON serialization and TTL.

    Notes:
    - Keys are prefixed with the configured namespace to avoid collisions.
    - Values are stored as UTF-8 JSON strings.
    - TTL is applied via Redis EX seconds (None -> default_ttl, 0 -> no expiry).
    """

    def __init__(
        self,
        redis_url: str,
        namespace: str = "inline",
        default_ttl: int = 3600,
        max_connections: int = 10,
        socket_timeout: int = 5,
    ) -> None:
        """
        Initialize Redis cache backend.

        Args:
            redis_url: Connection URL, e.g., redis://localhost:6379/0 or rediss:// for TLS
            namespace: Prefix for all keys (e.g., "inline")
            default_ttl: Default TTL in seconds (0 => no expiry)
            max_connections: Connection pool size
            socket_timeout: Socket timeout in seconds
        """
        if not redis_url:
            raise ValueError("redis_url is required")

        self.namespace = namespace.strip() or "inline"
        self.default_ttl = max(0, int(default_ttl))
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0

        # Lazy connection; connects on first command
        self._client = Redis.from_url(  # type: ignore[call-overload]
            url=redis_url,
            decode_responses=True,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
        )

    # ------------ Helpers ------------

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        return f"{self.namespace}:{validate_key(key)}"

    @staticmethod
    def _to_json(value: Any) -> str:
        """Serialize value to JSON string."""
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _from_json(data: str | bytes | None) -> Any | None:
        """Deserialize JSON string to Python object. Returns None if data is None."""
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            return json.loads(data)
        except ValueError as e:
            # A corrupt entry is treated as a miss so the block is reloaded
            logger.warning(
                "Failed to decode JSON from cache, treating entry as a miss: %s",
                e,
                extra={"data_preview": data[:100], "error": str(e)},
            )
            return None

    def _ttl_seconds(self, ttl: int | None) -> int | None:
        """
        Normalize TTL:
        - None -> default_ttl
        - 0 or negative -> no expiry (return None)
        - positive -> provided ttl
        """
        if ttl is None:
            ttl = self.default_ttl
        ttl = int(ttl)
        return ttl if ttl > 0 else None

    @staticmethod
    def _operation_error(operation: str, key: str, error: RedisError) -> CacheOperationError:
        """Map a redis-py failure onto the cache error hierarchy."""
        details = {"key": key, "operation": operation, "error": str(error)}
        if isinstance(error, RedisConnectionError):
            return CacheConnectionError("redis", details=details)
        return CacheOperationError(f"Redis {operation} failed for key '{key}': {error}", details=details)

    # ------------ Core Interface ------------

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        ns_key = self._make_key(key)
        try:
            data = await self._client.get(ns_key)
        except RedisError as e:
            logger.error(
                "Failed to get key '%s' from Redis: %s",
                key,
                e,
                extra={"key": key, "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            raise self._operation_error("get", key, e) from e

        value = self._from_json(data)
        if value is None:
            self._misses += 1
            return None

        self._hits += 1
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value with optional TTL."""
        ns_key = self._make_key(key)
        try:
            payload = self._to_json(value)
            res = await self._client.set(name=ns_key, value=payload, ex=self._ttl_seconds(ttl))
        except (TypeError, ValueError) as e:
            logger.error(
                "Failed to serialize value for key '%s': %s",
                key,
                e,
                extra={"key": key, "value_type": type(value).__name__, "error": str(e)},
            )
            return False
        except RedisError as e:
            logger.error(
                "Failed to set key '%s' in Redis: %s",
                key,
                e,
                extra={"key": key, "namespace": self.namespace, "ttl": ttl, "error": str(e)},
                exc_info=True,
            )
            return False

        success = bool(res)
        if success:
            self._sets += 1
        return success

    async def delete(self, key: str) -> bool:
        """Delete a single key."""
        ns_key = self._make_key(key)
        try:
            deleted = await self._client.delete(ns_key)
        except RedisError as e:
            logger.error(
                "Failed to delete key '%s' from Redis: %s",
                key,
                e,
                extra={"key": key, "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            raise self._operation_error("delete", key, e) from e

        if deleted:
            self._deletes += 1
        return bool(deleted)

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        ns_key = self._make_key(key)
        try:
            return bool(await self._client.exists(ns_key))
        except RedisError as e:
            raise self._operation_error("exists", key, e) from e

    async def clear(self) -> bool:
        """
        Clear all entries under the namespace.

        Implementation: SCAN match "<namespace>:*" and DEL in batches.
        """
        try:
            pattern = f"{self.namespace}:*"
            cursor = 0
            total_deleted = 0
            batch_size = 1000

            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=batch_size)
                if keys:
                    total_deleted += await self._client.delete(*keys)
                if cursor == 0:
                    break

            self._deletes += total_deleted
            logger.info("Cleared %d keys from namespace '%s'", total_deleted, self.namespace)
            return True
        except RedisError as e:
            logger.error(
                "Failed to clear cache for namespace '%s': %s",
                self.namespace,
                e,
                extra={"namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            return False

    async def get_stats(self) -> dict[str, Any]:
        """Return cache statistics and connectivity."""
        total_requests = self._hits + self._misses
        stats: dict[str, Any] = {
            "backend": "redis",
            "namespace": self.namespace,
            "default_ttl": self.default_ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round((self._hits / total_requests) * 100, 2) if total_requests else 0.0,
            "sets": self._sets,
            "deletes": self._deletes,
            "connected": False,
        }

        try:
            stats["connected"] = bool(await self._client.ping())
            info = await self._client.info(section="server")
            stats["redis_version"] = info.get("redis_version")
        except RedisError as e:
            logger.warning("Failed to get Redis INFO (restricted or unavailable): %s", e, extra={"error": str(e)})

        return stats

    async def close(self) -> None:
        """Close the Redis client and release resources."""
        try:
            await self._client.aclose()
            logger.info("Closed Redis cache backend for namespace '%s'", self.namespace)
        except RedisError as e:
            logger.error(
                "Error closing Redis client: %s",
                e,
                extra={"namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
