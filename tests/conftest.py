"""
Inline Editable - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest

from inline_editable.cache.backends.memory import MemoryCacheBackend
from inline_editable.content import ContentProvider
from inline_editable.errors import PersistenceError
from inline_editable.persistence import ContentDatabase, PersistenceLayer, SqlPersistenceLayer

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


class RecordingPersistenceLayer(PersistenceLayer):
    """In-memory durable store that records every call made to it."""

    def __init__(self, rows: dict[tuple[str, str, str], str] | None = None):
        # (namespace, locale, name) -> content
        self.rows: dict[tuple[str, str, str], str] = dict(rows or {})
        self.reads: list[tuple[str, str]] = []
        self.writes: list[tuple[str, str, str, str]] = []
        self.fail_writes = False
        self.confirm_writes = True

    async def get_namespace_content(self, namespace: str, locale: str) -> dict[str, str]:
        self.reads.append((namespace, locale))
        return {name: content for (ns, loc, name), content in self.rows.items() if ns == namespace and loc == locale}

    async def save_content(self, namespace: str, name: str, locale: str, content: str) -> bool:
        self.writes.append((namespace, name, locale, content))
        if self.fail_writes:
            raise PersistenceError("simulated write failure")
        if not self.confirm_writes:
            return False
        self.rows[(namespace, locale, name)] = content
        return True


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def mock_env_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for memory cache backend."""
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setenv("CACHE_BACKEND", "memory")
    monkeypatch.setenv("CACHE_MAX_SIZE", "100")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "3600")
    monkeypatch.setenv("CACHE_NAMESPACE", "test")


@pytest.fixture
def store() -> RecordingPersistenceLayer:
    """Durable store seeded with the ui/en and ui/fr blocks."""
    return RecordingPersistenceLayer(
        {
            ("ui", "en", "save"): "Save",
            ("ui", "en", "cancel"): "Cancel",
            ("ui", "fr", "cancel"): "Annuler",
        }
    )


@pytest.fixture
def memory_cache() -> MemoryCacheBackend:
    return MemoryCacheBackend(max_size=100, default_ttl=3600, namespace="test")


@pytest.fixture
def provider(memory_cache: MemoryCacheBackend, store: RecordingPersistenceLayer) -> ContentProvider:
    """Provider with fallback locale 'en' over the seeded store."""
    return ContentProvider(cache=memory_cache, persistence=store, fallback="en")


@pytest.fixture
async def sqlite_store(tmp_path: Path) -> AsyncGenerator[SqlPersistenceLayer, None]:
    """SQL persistence layer on a temporary SQLite file."""
    database = ContentDatabase(database_url=f"sqlite+aiosqlite:///{tmp_path / 'content.db'}")
    layer = SqlPersistenceLayer(database, table_name="inline_content")
    await layer.initialize()
    yield layer
    await layer.close()


@pytest.fixture(autouse=True)
def reset_factories() -> Generator[None, None, None]:
    """Reset cache registry and loaded config after each test to prevent state leakage."""
    yield
    from inline_editable.cache.factory import reset_cache_factory
    from inline_editable.config import loader

    reset_cache_factory()
    loader._config_instance = None
