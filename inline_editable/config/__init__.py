"""
Inline Editable - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    CacheBackend,
    CacheConfig,
    ContentConfig,
    Environment,
    InlineEditableConfig,
    LogLevel,
    PersistenceConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "InlineEditableConfig",
    # Enums
    "Environment",
    "CacheBackend",
    "LogLevel",
    # Config sections
    "CacheConfig",
    "ContentConfig",
    "PersistenceConfig",
]
