"""Unit tests for PreparedStatement, ResultSet and Row."""

from __future__ import annotations

import sqlite3
from unittest.mock import MagicMock

import pytest

from row_template.adapters.sqlite import SqliteAdapter
from row_template.core.exceptions import ParameterBindingError, ResultSetClosedError
from row_template.core.statement import ColumnMetadata, PreparedStatement, ResultSet, Row
from row_template.core.types import SqlType


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT, score REAL)")
    connection.execute("INSERT INTO people VALUES (1, 'Ann', 9.5), (2, 'Bob', NULL)")
    yield connection
    connection.close()


class TestRow:
    def _row(self) -> Row:
        columns = (ColumnMetadata("id"), ColumnMetadata("name"))
        return Row((1, "Ann"), columns, SqliteAdapter())

    def test_positional_and_named_access(self) -> None:
        row = self._row()
        assert row[0] == 1
        assert row["name"] == "Ann"
        assert len(row) == 2
        assert list(row) == [1, "Ann"]

    def test_unknown_column_name(self) -> None:
        with pytest.raises(KeyError):
            self._row()["missing"]

    def test_as_dict_and_names(self) -> None:
        row = self._row()
        assert row.column_names == ["id", "name"]
        assert row.as_dict() == {"id": 1, "name": "Ann"}

    def test_column_types_come_from_adapter(self) -> None:
        assert self._row().column_types == [SqlType.INTEGER, SqlType.VARCHAR]


class TestResultSet:
    def test_iterates_rows_in_cursor_order(self, conn: sqlite3.Connection) -> None:
        cursor = conn.execute("SELECT id, name FROM people ORDER BY id")
        with ResultSet(cursor, SqliteAdapter()) as result_set:
            assert result_set.column_count == 2
            assert [row["name"] for row in result_set] == ["Ann", "Bob"]

    def test_next_row_returns_none_when_exhausted(self, conn: sqlite3.Connection) -> None:
        cursor = conn.execute("SELECT id FROM people WHERE id = 1")
        result_set = ResultSet(cursor, SqliteAdapter())
        assert result_set.next_row() is not None
        assert result_set.next_row() is None

    def test_close_on_context_exit(self) -> None:
        cursor = MagicMock()
        cursor.description = None
        with ResultSet(cursor, SqliteAdapter()) as result_set:
            pass
        assert result_set.closed
        cursor.close.assert_called_once()

    def test_read_after_close(self) -> None:
        cursor = MagicMock()
        cursor.description = None
        result_set = ResultSet(cursor, SqliteAdapter())
        result_set.close()
        with pytest.raises(ResultSetClosedError):
            result_set.next_row()

    def test_rows_outlive_the_cursor(self, conn: sqlite3.Connection) -> None:
        cursor = conn.execute("SELECT id, name, score FROM people WHERE id = 2")
        with ResultSet(cursor, SqliteAdapter()) as result_set:
            row = result_set.next_row()
        assert row is not None
        assert row.values == (2, "Bob", None)
        assert row.column_types == [SqlType.INTEGER, SqlType.VARCHAR, SqlType.NULL]


class TestPreparedStatement:
    def test_bind_uses_one_based_positions(self, conn: sqlite3.Connection) -> None:
        sql = "SELECT name FROM people WHERE id = ? AND name = ?"
        with PreparedStatement(SqliteAdapter(), conn, sql) as statement:
            statement.bind([1, "Ann"])
            row = statement.execute_query().next_row()
        assert row is not None
        assert row[0] == "Ann"

    def test_set_object_out_of_order(self, conn: sqlite3.Connection) -> None:
        sql = "SELECT name FROM people WHERE id = ? AND name = ?"
        with PreparedStatement(SqliteAdapter(), conn, sql) as statement:
            statement.set_object(2, "Bob")
            statement.set_object(1, 2)
            row = statement.execute_query().next_row()
        assert row is not None
        assert row[0] == "Bob"

    def test_position_zero_rejected(self, conn: sqlite3.Connection) -> None:
        statement = PreparedStatement(SqliteAdapter(), conn, "SELECT ?")
        with pytest.raises(ParameterBindingError, match="positions start at 1"):
            statement.set_object(0, 1)

    def test_driver_adaptable_value_is_bound(self, conn: sqlite3.Connection) -> None:
        class Email:
            def __init__(self, address: str) -> None:
                self.address = address

            def __conform__(self, protocol: object) -> str:
                return self.address

        with PreparedStatement(SqliteAdapter(), conn, "SELECT ?") as statement:
            statement.bind([Email("ann@ex.com")])
            row = statement.execute_query().next_row()
        assert row is not None
        assert row[0] == "ann@ex.com"

    def test_unadaptable_value_fails_in_driver(self, conn: sqlite3.Connection) -> None:
        with PreparedStatement(SqliteAdapter(), conn, "SELECT ?") as statement:
            statement.bind([object()])
            with pytest.raises(sqlite3.Error):
                statement.execute_query()

    def test_gap_in_positions_rejected(self, conn: sqlite3.Connection) -> None:
        statement = PreparedStatement(SqliteAdapter(), conn, "SELECT ?, ?")
        statement.set_object(2, 1)
        with pytest.raises(ParameterBindingError, match="parameter 1"):
            statement.execute_query()

    def test_execute_update_returns_rowcount(self, conn: sqlite3.Connection) -> None:
        sql = "DELETE FROM people WHERE id > 0"
        with PreparedStatement(SqliteAdapter(), conn, sql) as statement:
            assert statement.execute_update() == 2

    def test_unknown_rowcount_reported_as_zero(self, conn: sqlite3.Connection) -> None:
        sql = "CREATE TABLE other (id INTEGER)"
        with PreparedStatement(SqliteAdapter(), conn, sql) as statement:
            assert statement.execute_update() == 0

    def test_close_closes_opened_result_sets(self) -> None:
        adapter = MagicMock()
        cursor = MagicMock()
        cursor.description = None
        adapter.execute.return_value = cursor
        with PreparedStatement(adapter, MagicMock(), "SELECT 1") as statement:
            result_set = statement.execute_query()
        assert result_set.closed
        cursor.close.assert_called_once()
