"""
Inline Editable - Cache Interface

Defines the abstract interface that all shared cache backends must implement.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..errors import InvalidCacheKeyError

MAX_KEY_LENGTH = 250

_FORBIDDEN_KEY_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


def validate_key(key: str) -> str:
    """
    Check a key against the syntax rules shared by every backend.

    Keys must be non-empty strings of at most MAX_KEY_LENGTH characters
    without whitespace or control characters.

    Raises:
        InvalidCacheKeyError: If the key violates any rule
    """
    if not isinstance(key, str):
        raise InvalidCacheKeyError(repr(key), "key must be a string")
    if not key:
        raise InvalidCacheKeyError(key, "key must not be empty")
    if len(key) > MAX_KEY_LENGTH:
        raise InvalidCacheKeyError(key, f"key longer than {MAX_KEY_LENGTH} characters")
    if _FORBIDDEN_KEY_CHARS.search(key):
        raise InvalidCacheKeyError(key, "key contains whitespace or control characters")
    return key


class CacheInterface(ABC):
    """
    Abstract base class for shared cache backends.

    All cache implementations must implement this interface to ensure
    consistent behavior across different backends (memory, Redis, etc.).
    A ``None`` result from ``get`` is a miss; any other value, including
    an empty mapping, is a hit.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Retrieve a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value if found and not expired, None otherwise

        Raises:
            InvalidCacheKeyError: If the key is malformed
        """
        pass

    @abstractmethod
    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
    ) -> bool:
        """
        Store a value in the cache.

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time-to-live in seconds (None = use default, 0 = no expiry)

        Returns:
            True if stored successfully, False otherwise

        Raises:
            InvalidCacheKeyError: If the key is malformed
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key from the cache.

        Args:
            key: Cache key to delete

        Returns:
            True if key was deleted, False if key didn't exist

        Raises:
            InvalidCacheKeyError: If the key is malformed
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a key exists in the cache.

        Args:
            key: Cache key to check

        Returns:
            True if key exists and is not expired, False otherwise
        """
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """
        Clear all entries from the cache.

        Returns:
            True if cache was cleared successfully
        """
        pass

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache statistics (hits, misses, size, etc.)
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Close the cache backend and release resources.

        Should be called during graceful shutdown.
        """
        pass
