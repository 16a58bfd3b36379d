"""
Inline Editable - Content Database Manager

Handles database connection, table creation, and async session management.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class ContentDatabase:
    """
    Async database manager for content storage.

    Provides:
    - Table creation on first use
    - Async session management
    - Connection pooling
    - Graceful shutdown
    """

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./data/content.db", echo: bool = False):
        """
        Initialize content database.

        Args:
            database_url: SQLAlchemy async URL (sqlite+aiosqlite, postgresql+asyncpg, mysql+aiomysql, ...)
            echo: Log every SQL statement
        """
        self.url = make_url(database_url)
        self._sqlite_path: Path | None = None

        engine_kwargs: dict[str, Any] = {"echo": echo}
        if self.url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool
            else:
                self._sqlite_path = Path(self.url.database).resolve()

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        self._metadata: list[MetaData] = []
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    @property
    def dialect_name(self) -> str:
        """SQLAlchemy dialect name of the engine, e.g. ``sqlite`` or ``postgresql``."""
        return self.engine.dialect.name

    def register(self, metadata: MetaData) -> None:
        """Register metadata whose tables are created by initialize()."""
        if metadata not in self._metadata:
            self._metadata.append(metadata)
            self._initialized = False

    async def initialize(self) -> None:
        """
        Create registered tables if they don't exist.

        Safe to call multiple times (idempotent).
        """
        async with self._initialization_lock:
            if self._initialized:
                return

            if self._sqlite_path is not None:
                self._sqlite_path.parent.mkdir(parents=True, exist_ok=True)

            async with self.engine.begin() as conn:
                for metadata in self._metadata:
                    await conn.run_sync(metadata.create_all)

            self._initialized = True
            logger.info(
                "Content database initialized",
                extra={"dialect": self.dialect_name, "tables": [t for m in self._metadata for t in m.tables]},
            )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get async database session (context manager).

        Usage:
            async with db.get_session() as session:
                await session.execute(...)
                await session.commit()
        """
        if not self._initialized:
            await self.initialize()

        async with self.session_factory() as session:
            yield session

    async def close(self) -> None:
        """Close database connections gracefully."""
        await self.engine.dispose()
        self._initialized = False
