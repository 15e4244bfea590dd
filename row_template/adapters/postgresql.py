"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from row_template.core.connection import ConnectionConfig
from row_template.core.exceptions import ConnectionError, PoolError  # noqa: A004
from row_template.core.statement import ColumnMetadata
from row_template.core.types import SqlType

# Built-in type OIDs from pg_type.
_OID_TYPES: dict[int, SqlType] = {
    16: SqlType.BOOLEAN,
    17: SqlType.VARBINARY,
    18: SqlType.CHAR,
    19: SqlType.VARCHAR,
    20: SqlType.BIGINT,
    21: SqlType.SMALLINT,
    23: SqlType.INTEGER,
    25: SqlType.LONGVARCHAR,
    700: SqlType.REAL,
    701: SqlType.DOUBLE,
    1042: SqlType.CHAR,
    1043: SqlType.VARCHAR,
    1082: SqlType.DATE,
    1083: SqlType.TIME,
    1114: SqlType.TIMESTAMP,
    1184: SqlType.TIMESTAMP,
    1700: SqlType.NUMERIC,
}


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    parts.append(f"connect_timeout={config.pool_timeout}")
    return " ".join(parts)


class PostgresqlAdapter:
    """PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "format"

    @property
    def backslash_escapes(self) -> bool:
        return False

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        import psycopg

        conninfo = _build_conninfo(config)
        pool: list[Any] = []
        for _ in range(config.pool_size):
            try:
                conn = psycopg.connect(conninfo, **config.extra)
            except psycopg.OperationalError as e:
                raise ConnectionError(f"Cannot connect to PostgreSQL: {e}") from e
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[Any]) -> Any:
        try:
            return pool.pop()
        except IndexError:
            raise PoolError("No connections available in pool") from None

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        pool.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: tuple[Any, ...] = (),
    ) -> Any:
        # No params means no placeholder parsing, so literal % stays intact.
        return connection.execute(sql, params or None)

    def column_type(self, column: ColumnMetadata, value: Any) -> SqlType:
        return _OID_TYPES.get(column.type_code, SqlType.OTHER)
