"""
Inline Editable - Locale-Scoped Content Cache

Three-tier read-through cache for small editable strings identified by
namespace, locale and name: process-local blocks, a shared cache, and a
durable SQL store.
"""

__version__ = "1.0.0"

from .content import ContentProvider, create_content_provider
from .errors import (
    CacheError,
    ConfigurationError,
    InlineEditableError,
    InvalidCacheKeyError,
    PersistenceError,
    UnsupportedBackendError,
)

__all__ = [
    "ContentProvider",
    "create_content_provider",
    "InlineEditableError",
    "ConfigurationError",
    "CacheError",
    "InvalidCacheKeyError",
    "PersistenceError",
    "UnsupportedBackendError",
]
