"""
Inline Editable - Content Provider

Answers "what is the content for (namespace, locale, name)?" from the fastest
tier that has it, and keeps the tiers coherent on writes.

Caching levels:
    L1 - process-local blocks (LocalBlockStore, owned by the provider)
    L2 - shared cache (CacheInterface)
    L3 - persistent storage (PersistenceLayer)

A block is the whole name -> content mapping of one (namespace, locale) pair.
Blocks are always loaded, cached and invalidated whole; a write never patches a
cached block, it drops it so the next read pulls a fresh one through.
"""

import logging
from collections import Counter
from typing import Any

from ..cache.interface import CacheInterface
from ..cache.keys import namespace_key
from ..errors import CacheOperationError, PersistenceError
from ..persistence.interface import PersistenceLayer
from .local_store import LocalBlockStore

logger = logging.getLogger(__name__)


class ContentProvider:
    """
    Three-tier read-through cache for locale-scoped content strings.

    Missing content is not an error: after the requested locale and the
    fallback locale have both been tried, the result is an empty string.
    Cache and persistence failures propagate unchanged.
    """

    def __init__(
        self,
        cache: CacheInterface,
        persistence: PersistenceLayer,
        fallback: str = "",
        local_ttl_seconds: int = 0,
        cache_ttl: int | None = None,
    ):
        """
        Args:
            cache: Shared cache (L2)
            persistence: Durable store (L3)
            fallback: Locale tried when the requested locale has no value
            local_ttl_seconds: Lifetime of L1 blocks (0 = until invalidated)
            cache_ttl: TTL for blocks written to L2 (None = backend default)
        """
        self.cache = cache
        self.persistence = persistence
        self.fallback_locale = fallback
        self.cache_ttl = cache_ttl
        self._local = LocalBlockStore(ttl_seconds=local_ttl_seconds)
        self._stats: Counter[str] = Counter()

    @staticmethod
    def cache_key(namespace: str, locale: str) -> str:
        """Key of the (namespace, locale) block in L1 and L2."""
        return namespace_key(namespace, locale)

    def _locale_chain(self, locale: str) -> tuple[str, ...]:
        if locale == self.fallback_locale:
            return (locale,)
        return (locale, self.fallback_locale)

    async def get_content(self, namespace: str, locale: str, name: str) -> str:
        """
        Resolve one content string.

        Tries ``locale`` and then the fallback locale, each through a full
        L1 -> L2 -> L3 lookup. A block already held in L1 is not reloaded
        just because it lacks ``name``.

        Returns:
            The content, or "" if neither locale has a value

        Raises:
            InvalidCacheKeyError: If the shared cache rejects the derived key
            CacheOperationError: If the shared cache cannot be read
            PersistenceError: If the durable store cannot be read
        """
        for attempt in self._locale_chain(locale):
            if attempt != locale:
                self._stats["fallbacks"] += 1
                logger.debug(
                    "Falling back from %s to %s for %s/%s",
                    locale,
                    attempt,
                    namespace,
                    name,
                    extra={"namespace": namespace, "locale": locale, "fallback": attempt, "content_name": name},
                )

            key = self.cache_key(namespace, attempt)
            block = self._local.get(key)
            if block is not None:
                content = block.get(name)
                if isinstance(content, str):
                    self._stats["l1_hits"] += 1
                    return content
            self._stats["l1_misses"] += 1

            if block is None:
                block = await self._populate(namespace, attempt, key)

            content = block.get(name)
            if isinstance(content, str):
                return content

        return ""

    async def get_namespace_content(self, namespace: str, locale: str) -> dict[str, str]:
        """
        Return a copy of the whole block for one (namespace, locale).

        No fallback is merged in.
        """
        key = self.cache_key(namespace, locale)
        block = self._local.get(key)
        if block is None:
            self._stats["l1_misses"] += 1
            block = await self._populate(namespace, locale, key)
        else:
            self._stats["l1_hits"] += 1
        return dict(block)

    async def save_content(self, namespace: str, locale: str, name: str, content: str) -> None:
        """
        Write one content string and invalidate its block in every cache tier.

        The caches are cleared before the durable write, so a failed write
        leaves them cold rather than holding a value that was never stored.
        They are cleared again once the write is done, dropping any block a
        concurrent reader loaded from the store in between.

        Raises:
            InvalidCacheKeyError: If the shared cache rejects the derived key
            CacheOperationError: If the shared cache cannot be cleared. When the
                clear after the durable write fails, the content is already
                stored and counted; only the shared cache may still hold the
                old block.
            PersistenceError: If the durable store does not confirm the write
        """
        key = self.cache_key(namespace, locale)

        await self._invalidate_key(key)

        saved = await self.persistence.save_content(namespace, name, locale, content)
        if not saved:
            raise PersistenceError(
                f"Persistence layer did not confirm saving '{name}' in namespace '{namespace}' for locale '{locale}'",
                details={"namespace": namespace, "name": name, "locale": locale},
            )

        self._stats["saves"] += 1
        await self._invalidate_key(key)
        logger.info(
            "Saved content %s/%s (%s)",
            namespace,
            name,
            locale,
            extra={"namespace": namespace, "locale": locale, "content_name": name, "cache_key": key},
        )

    async def load_namespace_from_cache(self, namespace: str, locale: str) -> dict[str, str]:
        """
        Load one block from L2, or from L3 on an L2 miss.

        Whichever tier answers is returned whole; L2 and L3 data are never
        merged. A block read from L3 is written back to L2 on a best-effort
        basis: a failed write is logged and the block is still returned. The
        write-back is skipped if this provider invalidated the key while the
        block was being read.

        The caller gets its own copy: mutating it never patches a cached block.
        """
        key = self.cache_key(namespace, locale)
        generation = self._local.generation(key)

        cached = await self.cache.get(key)
        if isinstance(cached, dict):
            self._stats["l2_hits"] += 1
            logger.debug("L2 hit for %s", key, extra={"cache_key": key})
            return dict(cached)
        if cached is not None:
            logger.warning(
                "Ignoring malformed block in shared cache for %s",
                key,
                extra={"cache_key": key, "value_type": type(cached).__name__},
            )
        self._stats["l2_misses"] += 1

        block = await self.persistence.get_namespace_content(namespace, locale)
        self._stats["l3_loads"] += 1
        logger.debug(
            "Loaded %d entries for %s from persistence",
            len(block),
            key,
            extra={"cache_key": key, "namespace": namespace, "locale": locale, "size": len(block)},
        )

        if generation != self._local.generation(key):
            logger.debug("Skipping shared cache write for %s invalidated during load", key, extra={"cache_key": key})
            return dict(block)

        try:
            stored = await self.cache.set(key, block, ttl=self.cache_ttl)
        except CacheOperationError as e:
            logger.warning("Failed to write %s to shared cache: %s", key, e, extra={"cache_key": key})
        else:
            if not stored:
                logger.warning("Shared cache refused block %s", key, extra={"cache_key": key})

        return dict(block)

    async def invalidate(self, namespace: str, locale: str) -> None:
        """Drop the block for one (namespace, locale) from L1 and L2 without writing."""
        await self._invalidate_key(self.cache_key(namespace, locale))
        self._stats["invalidations"] += 1

    def clear_local(self) -> None:
        """Drop every L1 block held by this provider."""
        count = len(self._local)
        self._local.clear()
        logger.info("Cleared %d local block(s)", count)

    def get_stats(self) -> dict[str, Any]:
        """Tier counters and configuration of this provider."""
        stats: dict[str, Any] = {
            counter: self._stats[counter]
            for counter in (
                "l1_hits",
                "l1_misses",
                "l2_hits",
                "l2_misses",
                "l3_loads",
                "fallbacks",
                "saves",
                "invalidations",
            )
        }
        stats["local_blocks"] = len(self._local)
        stats["fallback_locale"] = self.fallback_locale
        stats["local_ttl_seconds"] = self._local.ttl_seconds
        return stats

    async def close(self) -> None:
        """Close the shared cache and the durable store."""
        await self.cache.close()
        await self.persistence.close()

    async def _populate(self, namespace: str, locale: str, key: str) -> dict[str, str]:
        async with self._local.lock(key):
            # Another task may have loaded the block while this one waited
            block = self._local.get(key)
            if block is not None:
                return block

            generation = self._local.generation(key)
            block = await self.load_namespace_from_cache(namespace, locale)
            if not self._local.put(key, block, generation):
                logger.debug(
                    "Discarded block for %s invalidated during load",
                    key,
                    extra={"cache_key": key},
                )
            return block

    async def _invalidate_key(self, key: str) -> None:
        self._local.discard(key)
        await self.cache.delete(key)
