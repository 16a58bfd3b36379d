"""
Inline Editable - Cache Module

Shared cache (L2) with pluggable backends.

- factory.py: creation and registry of cache instances
- interface.py: abstract interface all backends implement, key validation
- keys.py: derivation of namespace block keys
- backends/: memory and Redis implementations

Usage:
    from inline_editable.cache import create_cache, namespace_key

    cache = create_cache()
    await cache.set(namespace_key("ui", "en"), {"save": "Save"}, ttl=3600)
"""

from .factory import (
    close_all_caches,
    create_cache,
    get_cache,
    list_cache_instances,
    reset_cache_factory,
)
from .interface import MAX_KEY_LENGTH, CacheInterface, validate_key
from .keys import NAMESPACE_KEY_PREFIX, namespace_key

__all__ = [
    # Factory functions
    "create_cache",
    "get_cache",
    "close_all_caches",
    "list_cache_instances",
    "reset_cache_factory",
    # Interface
    "CacheInterface",
    "MAX_KEY_LENGTH",
    "validate_key",
    # Keys
    "NAMESPACE_KEY_PREFIX",
    "namespace_key",
]
