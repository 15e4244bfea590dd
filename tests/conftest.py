"""Shared test fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from row_template.core.connection import ConnectionConfig, ConnectionManager
from row_template.core.executor import StatementExecutor
from row_template.core.statement import ColumnMetadata
from row_template.core.types import SqlType


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config with a single shared connection."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def executor(sqlite_config: ConnectionConfig):
    """Executor over an in-memory SQLite database holding a `people` table."""
    eng = StatementExecutor.from_config(sqlite_config)
    eng.update("CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER)")
    yield eng
    eng.close()


class FakeAdapter:
    """Adapter whose connections and cursors are mocks.

    ``rows`` and ``description`` configure what every executed cursor
    returns; ``cursors`` records each cursor handed out.
    """

    paramstyle = "qmark"
    backslash_escapes = False

    def __init__(
        self,
        rows: list[tuple[Any, ...]] | None = None,
        description: list[tuple[Any, ...]] | None = None,
        rowcount: int = 0,
        execute_error: Exception | None = None,
    ) -> None:
        self.rows = rows or []
        self.description = description
        self.rowcount = rowcount
        self.execute_error = execute_error
        self.cursors: list[MagicMock] = []
        self.connection = MagicMock(name="connection")
        self.released: list[Any] = []

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        return [self.connection]

    def acquire_connection(self, pool: list[Any]) -> Any:
        return pool[0]

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        self.released.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        pool.clear()

    def execute(self, connection: Any, sql: str, params: tuple[Any, ...] = ()) -> Any:
        if self.execute_error is not None:
            raise self.execute_error
        cursor = MagicMock(name="cursor")
        cursor.description = self.description
        cursor.rowcount = self.rowcount
        cursor.fetchone.side_effect = [*self.rows, None]
        cursor.executed = (sql, params)
        self.cursors.append(cursor)
        return cursor

    def column_type(self, column: ColumnMetadata, value: Any) -> SqlType:
        return column.type_code  # type: ignore[no-any-return]


def describe(*columns: tuple[str, SqlType]) -> list[tuple[Any, ...]]:
    """Build a DB-API description whose type codes are SqlType members."""
    return [(name, sql_type, None, None, None, None, None) for name, sql_type in columns]


@pytest.fixture
def fake_executor(sqlite_config: ConnectionConfig):
    """Build ``(executor, adapter)`` over a FakeAdapter.

    Usage:
        executor, adapter = fake_executor(rows=[(1, "Ann")], columns=[("id", SqlType.INTEGER)])
    """

    def _build(
        rows: list[tuple[Any, ...]] | None = None,
        columns: list[tuple[str, SqlType]] | None = None,
        rowcount: int = 0,
        execute_error: Exception | None = None,
    ) -> tuple[StatementExecutor, FakeAdapter]:
        description = describe(*columns) if columns is not None else None
        adapter = FakeAdapter(rows, description, rowcount, execute_error)
        manager = ConnectionManager(sqlite_config, adapter=adapter)
        return StatementExecutor(manager), adapter

    return _build
