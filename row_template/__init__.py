"""RowTemplate - positional SQL statement execution and row-to-object mapping."""

from __future__ import annotations

from row_template.core.connection import ConnectionConfig, ConnectionManager
from row_template.core.enums import DatabaseBackend
from row_template.core.exceptions import (
    AdapterError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    DataAccessError,
    IncorrectColumnCountError,
    IncorrectResultSizeError,
    MappingError,
    NoMatchingConstructorError,
    ObjectConstructionError,
    ParameterBindingError,
    PoolError,
    ResultSetClosedError,
    RowTemplateError,
    StatementError,
    UnmappedColumnTypeError,
)
from row_template.core.executor import StatementExecutor
from row_template.core.statement import ColumnMetadata, PreparedStatement, ResultSet, Row
from row_template.core.types import SqlType, python_type_for
from row_template.mapping.column import DictRowMapper, SingleColumnRowMapper
from row_template.mapping.model import ModelRowMapper
from row_template.mapping.protocol import RowMapper

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    # Executor
    "StatementExecutor",
    # Statement
    "PreparedStatement",
    "ResultSet",
    "Row",
    "ColumnMetadata",
    # Types
    "SqlType",
    "python_type_for",
    # Mapping
    "RowMapper",
    "ModelRowMapper",
    "SingleColumnRowMapper",
    "DictRowMapper",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "RowTemplateError",
    "DataAccessError",
    "IncorrectResultSizeError",
    "StatementError",
    "ParameterBindingError",
    "ResultSetClosedError",
    "MappingError",
    "UnmappedColumnTypeError",
    "NoMatchingConstructorError",
    "ObjectConstructionError",
    "ColumnMismatchError",
    "IncorrectColumnCountError",
    "AdapterError",
    "ConnectionError",
    "PoolError",
]
