"""RowTemplate exception hierarchy.

Callers only ever see ``DataAccessError`` (or its cardinality variant) from
executor operations. The internal kinds below are raised where the failure
happens and wrapped at the executor boundary, with the original kept as
``__cause__``.
"""

from __future__ import annotations

from typing import Any


class RowTemplateError(Exception):
    """Base exception for all RowTemplate errors."""


# --- Data access ---


class DataAccessError(RowTemplateError):
    """Uniform failure raised by every executor operation.

    ``cause_type`` holds the class name of the wrapped exception so callers
    can inspect what went wrong without depending on driver exception types.
    """

    def __init__(self, message: str, *, cause_type: str | None = None) -> None:
        self.message = message
        self.cause_type = cause_type
        super().__init__(message)

    @classmethod
    def wrap(cls, error: BaseException) -> DataAccessError:
        """Build a DataAccessError describing *error*."""
        detail = str(error) or type(error).__name__
        return cls(detail, cause_type=type(error).__name__)


class IncorrectResultSizeError(DataAccessError):
    """Raised when a single-object query does not yield exactly one row."""

    def __init__(self, expected_size: int, actual_size: int) -> None:
        self.expected_size = expected_size
        self.actual_size = actual_size
        if actual_size > expected_size:
            found = f"more than {expected_size}"
        else:
            found = str(actual_size)
        super().__init__(
            f"Incorrect result size: expected {expected_size}, actual {found}",
            cause_type=None,
        )


# --- Statement ---


class StatementError(RowTemplateError):
    """Base for prepared statement errors."""


class ParameterBindingError(StatementError):
    """Raised when a positional argument cannot be bound."""

    def __init__(self, position: int, value: Any, detail: str | None = None) -> None:
        self.position = position
        self.value = value
        message = (
            f"Cannot bind parameter {position} of type {type(value).__name__}"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ResultSetClosedError(StatementError):
    """Raised when reading from a result set that was already closed."""

    def __init__(self) -> None:
        super().__init__("Result set is closed")


# --- Mapping ---


class MappingError(RowTemplateError):
    """Base for mapping errors."""


class UnmappedColumnTypeError(MappingError):
    """Raised when a column type code has no entry in the type mapping table."""

    def __init__(self, sql_type: Any) -> None:
        self.sql_type = sql_type
        super().__init__(f"No Python type mapped for SQL column type {sql_type!r}")


class NoMatchingConstructorError(MappingError):
    """Raised when the target has no constructor matching the row's column types."""

    def __init__(self, target: str, column_types: list[type], detail: str) -> None:
        self.target = target
        self.column_types = column_types
        signature = ", ".join(t.__name__ for t in column_types)
        super().__init__(f"No constructor {target}({signature}): {detail}")


class ObjectConstructionError(MappingError):
    """Raised when the resolved constructor itself fails."""

    def __init__(self, target: str, detail: str) -> None:
        self.target = target
        super().__init__(f"Failed to construct {target}: {detail}")


class ColumnMismatchError(MappingError):
    """Raised when required fields cannot be mapped from row columns."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")


class IncorrectColumnCountError(MappingError):
    """Raised when a row has a different number of columns than required."""

    def __init__(self, expected_count: int, actual_count: int) -> None:
        self.expected_count = expected_count
        self.actual_count = actual_count
        super().__init__(
            f"Incorrect column count: expected {expected_count}, actual {actual_count}"
        )


# --- Adapter ---


class AdapterError(RowTemplateError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
