"""Oracle adapter using oracledb."""

from __future__ import annotations

from typing import Any

from row_template.core.connection import ConnectionConfig
from row_template.core.exceptions import ConnectionError, PoolError  # noqa: A004
from row_template.core.statement import ColumnMetadata
from row_template.core.types import SqlType

# oracledb DbType names; matched by name so the module imports without the driver.
_DB_TYPES: dict[str, SqlType] = {
    "DB_TYPE_BOOLEAN": SqlType.BOOLEAN,
    "DB_TYPE_BINARY_INTEGER": SqlType.INTEGER,
    "DB_TYPE_BINARY_FLOAT": SqlType.REAL,
    "DB_TYPE_BINARY_DOUBLE": SqlType.DOUBLE,
    "DB_TYPE_CHAR": SqlType.CHAR,
    "DB_TYPE_NCHAR": SqlType.CHAR,
    "DB_TYPE_VARCHAR": SqlType.VARCHAR,
    "DB_TYPE_NVARCHAR": SqlType.VARCHAR,
    "DB_TYPE_LONG": SqlType.LONGVARCHAR,
    "DB_TYPE_CLOB": SqlType.CLOB,
    "DB_TYPE_NCLOB": SqlType.CLOB,
    "DB_TYPE_DATE": SqlType.TIMESTAMP,
    "DB_TYPE_TIMESTAMP": SqlType.TIMESTAMP,
    "DB_TYPE_TIMESTAMP_TZ": SqlType.TIMESTAMP,
    "DB_TYPE_TIMESTAMP_LTZ": SqlType.TIMESTAMP,
    "DB_TYPE_RAW": SqlType.VARBINARY,
    "DB_TYPE_LONG_RAW": SqlType.VARBINARY,
    "DB_TYPE_BLOB": SqlType.BLOB,
}


def _build_dsn(config: ConnectionConfig) -> str:
    """Build an Oracle DSN string from config fields (host:port/database)."""
    return f"{config.host}:{config.port}/{config.database}"


class OracleAdapter:
    """Oracle adapter using oracledb."""

    @property
    def paramstyle(self) -> str:
        return "numeric"

    @property
    def backslash_escapes(self) -> bool:
        return False

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        """Create a 'pool' (list of connections) for Oracle."""
        import oracledb

        dsn = _build_dsn(config)
        pool: list[Any] = []
        for _ in range(config.pool_size):
            try:
                conn = oracledb.connect(
                    user=config.user, password=config.password, dsn=dsn, **config.extra
                )
            except oracledb.Error as e:
                raise ConnectionError(f"Cannot connect to Oracle: {e}") from e
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
        """Execute SQL and return a cursor."""
        cursor = connection.cursor()
        cursor.execute(sql, params)
        return cursor

    def column_type(self, column: ColumnMetadata, value: Any) -> SqlType:
        """Map a DbType; NUMBER columns are typed by the fetched value."""
        name = getattr(column.type_code, "name", None)
        if name == "DB_TYPE_NUMBER":
            if isinstance(value, int) or (value is None and column.scale == 0):
                return SqlType.BIGINT
            if isinstance(value, float):
                return SqlType.DOUBLE
            return SqlType.NUMERIC
        return _DB_TYPES.get(name, SqlType.OTHER)
