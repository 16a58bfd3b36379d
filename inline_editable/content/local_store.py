"""
Inline Editable - Process-Local Block Store

The L1 tier: namespace blocks held in process memory by one provider.

Every key carries a generation token. Discarding a key (or clearing the store)
moves its token on, and put() only installs a block loaded under the current
token, so a load that was in flight while a write invalidated the key cannot
re-install a pre-write block.

Tokens never move backwards. A key without a recorded token reads the store-wide
floor, and a recorded token is folded into the floor once its block is installed,
so the bookkeeping stays proportional to the keys invalidated but not yet reloaded.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

Generation = int


@dataclass
class _Entry:
    block: dict[str, str]
    expires_at: float | None


class LocalBlockStore:
    """Namespace blocks keyed by cache key, with optional expiry."""

    def __init__(self, ttl_seconds: int = 0, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            ttl_seconds: Block lifetime in seconds (0 = until discarded)
            clock: Monotonic time source in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._generations: dict[str, Generation] = {}
        self._counter: Generation = 0
        self._floor: Generation = 0
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, key: str) -> dict[str, str] | None:
        """Return the live block for a key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.block

    def put(self, key: str, block: dict[str, str], generation: Generation) -> bool:
        """
        Install a block loaded under ``generation``.

        Returns:
            False if the key was discarded since the load began (block dropped)
        """
        if generation != self.generation(key):
            return False
        expires_at = self._clock() + self.ttl_seconds if self.ttl_seconds > 0 else None
        self._entries[key] = _Entry(block=block, expires_at=expires_at)
        # Raising the floor may turn other keys' in-flight loads stale; that only costs a reload
        self._floor = max(self._floor, self._generations.pop(key, self._floor))
        return True

    def generation(self, key: str) -> Generation:
        return self._generations.get(key, self._floor)

    def discard(self, key: str) -> None:
        """Drop the block for a key and invalidate any load in flight for it."""
        self._entries.pop(key, None)
        self._counter += 1
        self._generations[key] = self._counter
        self._release_lock(key)

    def clear(self) -> None:
        """Drop every block and invalidate every load in flight."""
        self._entries.clear()
        self._generations.clear()
        self._counter += 1
        self._floor = self._counter
        for key in list(self._locks):
            self._release_lock(key)

    def lock(self, key: str) -> asyncio.Lock:
        """Per-key lock serializing population of one block."""
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def _release_lock(self, key: str) -> None:
        # A held lock stays registered so waiters keep serializing on it
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
