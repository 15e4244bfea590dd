"""Row mapper protocol.

The executor calls map_row once per result row, in cursor order, with the
row's 0-based index. Plain callables with the same signature are accepted
as well.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar, Union, runtime_checkable

from row_template.core.statement import Row

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class RowMapper(Protocol[T_co]):
    """Base row mapper protocol."""

    def map_row(self, row: Row, row_index: int) -> T_co:
        """Map one row to a target object."""
        ...


RowMapperLike = Union[RowMapper[T], Callable[[Row, int], T]]


def as_row_function(row_mapper: RowMapperLike[T]) -> Callable[[Row, int], T]:
    """Return the mapping callable behind *row_mapper*."""
    map_row: Any = getattr(row_mapper, "map_row", None)
    if callable(map_row):
        return map_row  # type: ignore[no-any-return]
    if callable(row_mapper):
        return row_mapper
    raise TypeError(
        f"Row mapper must define map_row(row, row_index) or be callable, "
        f"got {type(row_mapper).__name__}"
    )
