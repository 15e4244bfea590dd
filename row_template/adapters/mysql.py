"""MySQL adapter using mysql-connector-python."""

from __future__ import annotations

from typing import Any

from row_template.core.connection import ConnectionConfig
from row_template.core.exceptions import ConnectionError, PoolError  # noqa: A004
from row_template.core.statement import ColumnMetadata
from row_template.core.types import SqlType

# mysql.connector.constants.FieldType codes.
_FIELD_TYPES: dict[int, SqlType] = {
    0: SqlType.DECIMAL,
    1: SqlType.TINYINT,
    2: SqlType.SMALLINT,
    3: SqlType.INTEGER,
    4: SqlType.REAL,
    5: SqlType.DOUBLE,
    6: SqlType.NULL,
    7: SqlType.TIMESTAMP,
    8: SqlType.BIGINT,
    9: SqlType.INTEGER,
    10: SqlType.DATE,
    12: SqlType.TIMESTAMP,
    13: SqlType.SMALLINT,
    15: SqlType.VARCHAR,
    16: SqlType.BIT,
    246: SqlType.DECIMAL,
    249: SqlType.BLOB,
    250: SqlType.BLOB,
    251: SqlType.BLOB,
    252: SqlType.BLOB,
    253: SqlType.VARCHAR,
    254: SqlType.CHAR,
}


class MysqlAdapter:
    """MySQL adapter using mysql-connector-python."""

    @property
    def paramstyle(self) -> str:
        return "format"

    @property
    def backslash_escapes(self) -> bool:
        # Default sql_mode; NO_BACKSLASH_ESCAPES turns this off server-side.
        return True

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        """Create a pool (list of connections) for MySQL."""
        import mysql.connector

        pool: list[Any] = []
        for _ in range(config.pool_size):
            try:
                conn = mysql.connector.connect(
                    host=config.host,
                    port=config.port,
                    user=config.user,
                    password=config.password,
                    database=config.database,
                    connection_timeout=config.pool_timeout,
                    **config.extra,
                )
            except mysql.connector.Error as e:
                raise ConnectionError(f"Cannot connect to MySQL: {e}") from e
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[Any]) -> Any:
        """Acquire a connection from the pool."""
        try:
            return pool.pop()
        except IndexError:
            raise PoolError("No connections available in pool") from None

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: tuple[Any, ...] = (),
    ) -> Any:
        """Execute SQL and return a buffered tuple cursor."""
        cursor = connection.cursor(buffered=True)
        cursor.execute(sql, params)
        return cursor

    def column_type(self, column: ColumnMetadata, value: Any) -> SqlType:
        """Map a FieldType code; TEXT columns share the BLOB codes and hold str values."""
        sql_type = _FIELD_TYPES.get(column.type_code, SqlType.OTHER)
        if sql_type is SqlType.BLOB and isinstance(value, str):
            return SqlType.LONGVARCHAR
        return sql_type
