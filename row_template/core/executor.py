"""Statement executor.

The StatementExecutor acquires a connection, prepares a statement, binds
positional arguments and hands the statement to an operation. Every failure
leaves as a DataAccessError; cursors are closed on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from row_template.core.connection import ConnectionConfig, ConnectionManager
from row_template.core.exceptions import DataAccessError, IncorrectResultSizeError
from row_template.core.params import coerce_args, normalize_placeholders
from row_template.core.statement import PreparedStatement, ResultSet, Row
from row_template.mapping.instantiate import instantiate
from row_template.mapping.protocol import RowMapperLike, as_row_function

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _single_row(result_set: ResultSet) -> Row:
    """Return the only row of *result_set*, or raise if there are zero or several."""
    row = result_set.next_row()
    if row is None:
        raise IncorrectResultSizeError(1, 0)
    if result_set.next_row() is not None:
        raise IncorrectResultSizeError(1, 2)
    return row


class StatementExecutor:
    """Synchronous statement executor.

    Holds no state besides the connection manager, so one instance can be
    shared between threads as far as the connection manager allows.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager
        self._paramstyle = connection_manager.adapter.paramstyle
        self._backslash_escapes = connection_manager.adapter.backslash_escapes

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> StatementExecutor:
        """Create a StatementExecutor from a ConnectionConfig.

        Args:
            config: ConnectionConfig instance

        Returns:
            StatementExecutor instance
        """
        return cls(ConnectionManager(config))

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    def execute(self, sql: str, operation: Callable[[PreparedStatement], T]) -> T:
        """Run *operation* against a statement prepared from *sql*.

        Each call is its own transaction: the connection is committed when
        *operation* returns and rolled back when anything raises, so it goes
        back to the pool with no transaction open.

        Raises:
            DataAccessError: on any failure, with the original exception
                chained. IncorrectResultSizeError passes through unchanged.
        """
        logger.debug("Executing SQL statement [%s]", sql)
        adapter = self._connection_manager.adapter
        try:
            with self._connection_manager.get_connection() as conn:
                try:
                    prepared_sql = normalize_placeholders(
                        sql, self._paramstyle, backslash_escapes=self._backslash_escapes
                    )
                    with PreparedStatement(adapter, conn, prepared_sql) as statement:
                        result = operation(statement)
                except Exception:
                    conn.rollback()
                    raise
                conn.commit()
                return result
        except Exception as e:
            logger.exception("%s [%s]", e, sql)
            if isinstance(e, DataAccessError):
                raise
            raise DataAccessError.wrap(e) from e

    def update(self, sql: str, *args: Any) -> int:
        """Execute an insert, update or delete and return the affected row count."""
        params = coerce_args(args)

        def _update(statement: PreparedStatement) -> int:
            statement.bind(params)
            return statement.execute_update()

        return self.execute(sql, _update)

    def query_for_object(self, sql: str, required_type: Callable[..., T], *args: Any) -> T:
        """Execute a query that must return exactly one row and build *required_type* from it.

        Column values are passed to the constructor positionally, in column
        order; see ``row_template.mapping.instantiate`` for the matching rules.

        Raises:
            IncorrectResultSizeError: if the query returns zero or several rows.
            DataAccessError: on any other failure.
        """
        params = coerce_args(args)

        def _query_for_object(statement: PreparedStatement) -> T:
            statement.bind(params)
            with statement.execute_query() as result_set:
                return instantiate(_single_row(result_set), required_type)

        return self.execute(sql, _query_for_object)

    def query(self, sql: str, row_mapper: RowMapperLike[T], *args: Any) -> list[T]:
        """Execute a query and map every row, in cursor order, with *row_mapper*.

        The mapper is called as ``map_row(row, row_index)`` with a 0-based
        index. Zero rows yield an empty list.
        """
        params = coerce_args(args)

        def _query(statement: PreparedStatement) -> list[T]:
            map_row = as_row_function(row_mapper)
            statement.bind(params)
            results: list[T] = []
            with statement.execute_query() as result_set:
                for row_index, row in enumerate(result_set):
                    results.append(map_row(row, row_index))
            return results

        return self.execute(sql, _query)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._connection_manager.close_pool()
