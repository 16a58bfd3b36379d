"""
Inline Editable - Content Provider Factory

Wires a ContentProvider from configuration: the shared cache comes from the
cache factory, the durable store from the SQL persistence layer.

Examples:
    from inline_editable.content import create_content_provider

    provider = create_content_provider()
    await provider.persistence.initialize()
    title = await provider.get_content("ui", "fr", "save")
"""

from __future__ import annotations

import logging

from ..cache.factory import create_cache
from ..cache.interface import CacheInterface
from ..config import InlineEditableConfig, get_config
from ..persistence.interface import PersistenceLayer
from ..persistence.sql import create_persistence_layer
from .provider import ContentProvider

logger = logging.getLogger(__name__)


def create_content_provider(
    config: InlineEditableConfig | None = None,
    cache: CacheInterface | None = None,
    persistence: PersistenceLayer | None = None,
    cache_name: str = "content",
) -> ContentProvider:
    """
    Create a content provider.

    Args:
        config: Root configuration (uses global config if not provided)
        cache: Shared cache to use instead of one built from config.cache
        persistence: Durable store to use instead of one built from config.persistence
        cache_name: Registry name of the shared cache instance

    Returns:
        Configured ContentProvider

    Raises:
        ConfigurationError: If the cache configuration is invalid
        UnsupportedBackendError: If the database engine cannot express an upsert
    """
    if config is None:
        config = get_config()

    if cache is None:
        cache = create_cache(config.cache, name=cache_name)
    if persistence is None:
        persistence = create_persistence_layer(config.persistence)

    provider = ContentProvider(
        cache=cache,
        persistence=persistence,
        fallback=config.content.fallback,
        local_ttl_seconds=config.content.local_ttl_seconds,
        cache_ttl=config.cache.ttl_seconds,
    )
    logger.info(
        "Created content provider",
        extra={
            "fallback_locale": config.content.fallback,
            "local_ttl_seconds": config.content.local_ttl_seconds,
            "cache_backend": str(config.cache.backend),
        },
    )
    return provider
