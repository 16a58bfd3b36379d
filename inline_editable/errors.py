"""
Inline Editable - Core Error Types

Defines the exception hierarchy for the content cache runtime.
All exceptions inherit from InlineEditableError for consistent error handling.

Missing content is deliberately absent from this module: a value that cannot be
found at any tier resolves to an empty string, not an exception.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standard error codes attached to error details."""

    INVALID_CACHE_KEY = "INVALID_CACHE_KEY"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Cache errors
    CACHE_FAILURE = "CACHE_FAILURE"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"

    # Persistence errors
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    UNSUPPORTED_BACKEND = "UNSUPPORTED_BACKEND"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class InlineEditableError(Exception):
    """Base exception for all inline content errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured logs."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(InlineEditableError):
    """Raised when configuration is invalid or missing."""

    pass


class CacheError(InlineEditableError):
    """Base exception for cache-related errors."""

    pass


class InvalidCacheKeyError(CacheError):
    """Raised when a cache store rejects a key as malformed."""

    def __init__(self, key: str, reason: str):
        message = f"Invalid cache key {key!r}: {reason}"
        super().__init__(message, {"key": key, "reason": reason, "error_code": ErrorCode.INVALID_CACHE_KEY})
        self.key = key
        self.reason = reason


class CacheOperationError(CacheError):
    """Raised when a cache operation fails."""

    pass


class CacheConnectionError(CacheOperationError):
    """Raised when an operation fails because the cache backend is unreachable."""

    def __init__(self, backend: str, details: dict[str, Any] | None = None):
        message = f"Failed to connect to cache backend: {backend}"
        super().__init__(message, details)
        self.backend = backend


class PersistenceError(InlineEditableError):
    """Raised when the persistence layer fails to read or write content."""

    pass


class UnsupportedBackendError(PersistenceError):
    """Raised when a database engine cannot express an idempotent upsert."""

    def __init__(self, backend: str, supported: list[str] | None = None):
        message = f"Unsupported persistence backend: {backend!r}"
        details: dict[str, Any] = {
            "backend": backend,
            "error_code": ErrorCode.UNSUPPORTED_BACKEND,
        }
        if supported:
            details["supported"] = supported
        super().__init__(message, details)
        self.backend = backend


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, InvalidCacheKeyError):
        return ErrorCode.INVALID_CACHE_KEY

    if isinstance(error, CacheConnectionError):
        return ErrorCode.CACHE_UNAVAILABLE

    if isinstance(error, CacheError):
        return ErrorCode.CACHE_FAILURE

    if isinstance(error, UnsupportedBackendError):
        return ErrorCode.UNSUPPORTED_BACKEND

    if isinstance(error, PersistenceError):
        return ErrorCode.PERSISTENCE_FAILURE

    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    return ErrorCode.INTERNAL_ERROR
