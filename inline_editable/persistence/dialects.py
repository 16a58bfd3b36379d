"""
Inline Editable - Upsert Dialects

Each supported database engine expresses "insert or overwrite" with its own
conflict clause. The dialect is resolved once when a driver is constructed;
engines outside this set are rejected up front with UnsupportedBackendError.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.sql.dml import Insert

from ..errors import UnsupportedBackendError
from .models import CONTENT_KEY_COLUMNS


def _mysql_upsert(table: Table, values: dict[str, Any]) -> Insert:
    stmt = mysql.insert(table).values(**values)
    return stmt.on_duplicate_key_update(content=stmt.inserted.content)


def _postgresql_upsert(table: Table, values: dict[str, Any]) -> Insert:
    stmt = postgresql.insert(table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=list(CONTENT_KEY_COLUMNS),
        set_={"content": stmt.excluded.content},
    )


def _sqlite_upsert(table: Table, values: dict[str, Any]) -> Insert:
    stmt = sqlite.insert(table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=list(CONTENT_KEY_COLUMNS),
        set_={"content": stmt.excluded.content},
    )


class Dialect(str, Enum):
    """Database engines able to express an idempotent upsert."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_engine_name(cls, engine_name: str) -> "Dialect":
        """
        Resolve a SQLAlchemy dialect name (``engine.dialect.name``).

        Raises:
            UnsupportedBackendError: If the engine has no upsert variant
        """
        name = engine_name.lower()
        if name in ("mysql", "mariadb"):
            return cls.MYSQL
        if name in ("postgresql", "postgres"):
            return cls.POSTGRESQL
        if name == "sqlite":
            return cls.SQLITE
        raise UnsupportedBackendError(engine_name, supported=[d.value for d in cls])

    def upsert(self, table: Table, namespace: str, name: str, locale: str, content: str) -> Insert:
        """Build the insert-or-overwrite statement for one content row."""
        values = {"namespace": namespace, "name": name, "locale": locale, "content": content}
        return _UPSERT_BUILDERS[self](table, values)


_UPSERT_BUILDERS: dict[Dialect, Callable[[Table, dict[str, Any]], Insert]] = {
    Dialect.MYSQL: _mysql_upsert,
    Dialect.POSTGRESQL: _postgresql_upsert,
    Dialect.SQLITE: _sqlite_upsert,
}
