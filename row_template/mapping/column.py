"""Row mappers for single columns and plain dicts."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from row_template.core.statement import Row
from row_template.mapping.instantiate import scalar_value

T = TypeVar("T")


class SingleColumnRowMapper(Generic[T]):
    """Return the value of the row's only column.

    When *required_type* is given, the column's mapped Python type must fit
    it; NULL is always allowed.
    """

    def __init__(self, required_type: type[T] | None = None) -> None:
        self._required_type = required_type

    def map_row(self, row: Row, row_index: int) -> T:
        return scalar_value(row, self._required_type)  # type: ignore[no-any-return]


class DictRowMapper:
    """Return each row as a column-name to value dict."""

    def map_row(self, row: Row, row_index: int) -> dict[str, Any]:
        return row.as_dict()
