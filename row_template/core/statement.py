"""Prepared statements, result sets and rows.

Thin wrappers over a DB-API connection and cursor that give the executor
positional binding, forward-only row iteration and per-column type codes.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from row_template.core.exceptions import ParameterBindingError, ResultSetClosedError
from row_template.core.types import SqlType

if TYPE_CHECKING:
    from row_template.adapters.protocol import SyncAdapter


@dataclass(frozen=True)
class ColumnMetadata:
    """Name and driver type information of one result column."""

    name: str
    type_code: Any = None
    precision: int | None = None
    scale: int | None = None

    @classmethod
    def from_description(cls, entry: Sequence[Any]) -> ColumnMetadata:
        """Build from a DB-API ``cursor.description`` entry."""
        return cls(name=entry[0], type_code=entry[1], precision=entry[4], scale=entry[5])


class Row:
    """Snapshot of one result row.

    Values are copied out of the cursor, so a Row stays readable after the
    result set is closed. Row mappers should still treat it as scoped to the
    mapping call.
    """

    def __init__(
        self,
        values: Sequence[Any],
        columns: tuple[ColumnMetadata, ...],
        adapter: SyncAdapter,
    ) -> None:
        self._values = tuple(values)
        self._columns = columns
        self._adapter = adapter

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    @property
    def columns(self) -> tuple[ColumnMetadata, ...]:
        return self._columns

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    @property
    def column_types(self) -> list[SqlType]:
        """Portable SQL type of each column, in column order."""
        return [
            self._adapter.column_type(column, value)
            for column, value in zip(self._columns, self._values, strict=True)
        ]

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.column_names, self._values, strict=True))

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            try:
                return self._values[self.column_names.index(key)]
            except ValueError:
                raise KeyError(key) from None
        return self._values[key]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"Row({self.as_dict()!r})"


class ResultSet:
    """Forward-only cursor over query results."""

    def __init__(self, cursor: Any, adapter: SyncAdapter) -> None:
        self._cursor = cursor
        self._adapter = adapter
        self._closed = False
        description = cursor.description or ()
        self._columns = tuple(ColumnMetadata.from_description(entry) for entry in description)

    @property
    def columns(self) -> tuple[ColumnMetadata, ...]:
        return self._columns

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def closed(self) -> bool:
        return self._closed

    def next_row(self) -> Row | None:
        """Advance the cursor and return the next row, or None when exhausted."""
        if self._closed:
            raise ResultSetClosedError()
        values = self._cursor.fetchone()
        if values is None:
            return None
        return Row(values, self._columns, self._adapter)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._cursor.close()

    def __iter__(self) -> Iterator[Row]:
        while (row := self.next_row()) is not None:
            yield row

    def __enter__(self) -> ResultSet:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class PreparedStatement:
    """SQL text plus positional parameters bound to a single connection.

    Parameters are bound by 1-based position. Every cursor or result set the
    statement opens is closed by ``close()``, which also runs on context exit.
    """

    def __init__(self, adapter: SyncAdapter, connection: Any, sql: str) -> None:
        self._adapter = adapter
        self._connection = connection
        self.sql = sql
        self._params: dict[int, Any] = {}
        self._resources: list[Any] = []

    @property
    def connection(self) -> Any:
        return self._connection

    def set_object(self, position: int, value: Any) -> None:
        """Bind *value* to the 1-based placeholder *position*.

        The value goes to the driver unchanged; the driver decides its SQL
        type and rejects values it cannot adapt when the statement runs.
        """
        if position < 1:
            raise ParameterBindingError(position, value, "positions start at 1")
        self._params[position] = value

    def bind(self, args: Sequence[Any]) -> None:
        """Bind *args* in order to positions 1..len(args)."""
        for index, value in enumerate(args):
            self.set_object(index + 1, value)

    def _parameters(self) -> tuple[Any, ...]:
        count = max(self._params, default=0)
        missing = [p for p in range(1, count + 1) if p not in self._params]
        if missing:
            raise ParameterBindingError(missing[0], None, "parameter not set")
        return tuple(self._params[p] for p in range(1, count + 1))

    def _run(self) -> Any:
        return self._adapter.execute(self._connection, self.sql, self._parameters())

    def execute_update(self) -> int:
        """Execute a data-modification statement and return the affected row count.

        Drivers report -1 when the count is unknown (DDL, for instance);
        that is returned as 0.
        """
        cursor = self._run()
        self._resources.append(cursor)
        return max(int(cursor.rowcount), 0)

    def execute_query(self) -> ResultSet:
        """Execute a query and return its result set."""
        result_set = ResultSet(self._run(), self._adapter)
        self._resources.append(result_set)
        return result_set

    def close(self) -> None:
        resources, self._resources = self._resources, []
        for resource in resources:
            resource.close()

    def __enter__(self) -> PreparedStatement:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
