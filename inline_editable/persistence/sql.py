"""
Inline Editable - SQL Persistence Layer

Reference durable store on SQLAlchemy's async engine. Reads a whole namespace
block with one SELECT and writes single rows with the dialect's upsert.
"""

import logging

from sqlalchemy import MetaData, select
from sqlalchemy.exc import SQLAlchemyError

from ..config import PersistenceConfig, get_config
from ..errors import PersistenceError, UnsupportedBackendError
from .database import ContentDatabase
from .dialects import Dialect
from .interface import PersistenceLayer
from .models import build_content_table

logger = logging.getLogger(__name__)


class SqlPersistenceLayer(PersistenceLayer):
    """
    Content store backed by a SQL table.

    The upsert dialect is resolved from the engine when the layer is built,
    so an engine without upsert support fails here rather than on first write.
    """

    def __init__(self, database: ContentDatabase, table_name: str = "inline_content"):
        """
        Args:
            database: Database manager owning the engine and sessions
            table_name: Name of the content table

        Raises:
            UnsupportedBackendError: If the engine cannot express an upsert
        """
        self.database = database
        self.dialect = Dialect.from_engine_name(database.dialect_name)

        self.metadata = MetaData()
        self.table = build_content_table(table_name, self.metadata)
        database.register(self.metadata)

    async def initialize(self) -> None:
        """Create the content table if it doesn't exist."""
        await self.database.initialize()

    async def get_namespace_content(self, namespace: str, locale: str) -> dict[str, str]:
        """Read every (name, content) pair for a namespace and locale."""
        stmt = select(self.table.c.name, self.table.c.content).where(
            self.table.c.namespace == namespace,
            self.table.c.locale == locale,
        )

        try:
            async with self.database.get_session() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to read namespace '%s' (%s): %s",
                namespace,
                locale,
                e,
                extra={"namespace": namespace, "locale": locale, "table": self.table.name, "error": str(e)},
                exc_info=True,
            )
            raise PersistenceError(
                f"Failed to read content for namespace '{namespace}' and locale '{locale}'",
                details={"namespace": namespace, "locale": locale, "error": str(e)},
            ) from e

        return {row.name: row.content for row in rows}

    async def save_content(self, namespace: str, name: str, locale: str, content: str) -> bool:
        """Insert or overwrite one content row."""
        stmt = self.dialect.upsert(self.table, namespace, name, locale, content)

        try:
            async with self.database.get_session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to save content %s/%s (%s): %s",
                namespace,
                name,
                locale,
                e,
                extra={
                    "namespace": namespace,
                    "content_name": name,
                    "locale": locale,
                    "dialect": self.dialect.value,
                    "error": str(e),
                },
                exc_info=True,
            )
            raise PersistenceError(
                f"Failed to save content '{name}' in namespace '{namespace}' for locale '{locale}'",
                details={"namespace": namespace, "name": name, "locale": locale, "error": str(e)},
            ) from e

        logger.debug(
            "Saved content %s/%s (%s)",
            namespace,
            name,
            locale,
            extra={"namespace": namespace, "content_name": name, "locale": locale},
        )
        return True

    async def close(self) -> None:
        await self.database.close()


def create_persistence_layer(config: PersistenceConfig | None = None) -> SqlPersistenceLayer:
    """
    Build the SQL persistence layer from configuration.

    Args:
        config: Persistence configuration (uses global config if not provided)

    Raises:
        UnsupportedBackendError: If the configured engine cannot express an upsert
    """
    if config is None:
        config = get_config().persistence

    database = ContentDatabase(database_url=config.database_url, echo=config.echo)
    try:
        layer = SqlPersistenceLayer(database, table_name=config.table_name)
    except UnsupportedBackendError:
        # Nothing has connected yet, so the pool can be released without awaiting
        database.engine.sync_engine.dispose()
        raise
    logger.info(
        "Created SQL persistence layer",
        extra={"dialect": layer.dialect.value, "table": config.table_name},
    )
    return layer
