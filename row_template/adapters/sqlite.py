"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_template.core.connection import ConnectionConfig
from row_template.core.exceptions import ConnectionError, PoolError  # noqa: A004
from row_template.core.statement import ColumnMetadata
from row_template.core.types import SqlType

# SQLite has no declared column types in cursor.description, so the type
# is taken from the storage class of the value itself.
_STORAGE_CLASSES: tuple[tuple[type, SqlType], ...] = (
    (int, SqlType.INTEGER),
    (float, SqlType.DOUBLE),
    (str, SqlType.VARCHAR),
    (bytes, SqlType.BLOB),
)


class SqliteAdapter:
    """SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    @property
    def backslash_escapes(self) -> bool:
        return False

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            try:
                conn = sqlite3.connect(
                    config.database,
                    timeout=config.pool_timeout,
                    check_same_thread=False,
                )
            except sqlite3.Error as e:
                raise ConnectionError(
                    f"Cannot open SQLite database '{config.database}': {e}"
                ) from e
            conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        try:
            return pool.pop()
        except IndexError:
            raise PoolError("No connections available in pool") from None

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, params)

    def column_type(self, column: ColumnMetadata, value: Any) -> SqlType:
        """Derive the column type from the value's storage class."""
        if value is None:
            return SqlType.NULL
        for python_type, sql_type in _STORAGE_CLASSES:
            if isinstance(value, python_type):
                return sql_type
        return SqlType.OTHER
