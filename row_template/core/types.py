"""SQL column type codes and their Python counterparts.

The table here is the only place that decides which Python type a column
of a given SQL type turns into. Adapters translate their driver-specific
type codes into ``SqlType``; the mapping layer then asks
``python_type_for`` when matching constructor signatures.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from enum import IntEnum

from row_template.core.exceptions import UnmappedColumnTypeError

NoneType = type(None)


class SqlType(IntEnum):
    """Portable SQL column type codes."""

    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    REAL = 7
    FLOAT = 6
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    CLOB = 2005
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    BLOB = 2004
    BOOLEAN = 16
    NULL = 0
    OTHER = 1111
    ARRAY = 2003


_PYTHON_TYPES: dict[SqlType, type] = {
    SqlType.BIT: bool,
    SqlType.BOOLEAN: bool,
    SqlType.TINYINT: int,
    SqlType.SMALLINT: int,
    SqlType.INTEGER: int,
    SqlType.BIGINT: int,
    SqlType.REAL: float,
    SqlType.FLOAT: float,
    SqlType.DOUBLE: float,
    SqlType.NUMERIC: Decimal,
    SqlType.DECIMAL: Decimal,
    SqlType.CHAR: str,
    SqlType.VARCHAR: str,
    SqlType.LONGVARCHAR: str,
    SqlType.CLOB: str,
    SqlType.DATE: datetime.date,
    SqlType.TIME: datetime.time,
    SqlType.TIMESTAMP: datetime.datetime,
    SqlType.BINARY: bytes,
    SqlType.VARBINARY: bytes,
    SqlType.BLOB: bytes,
    SqlType.NULL: NoneType,
}

SCALAR_TYPES: frozenset[type] = frozenset(t for t in _PYTHON_TYPES.values() if t is not NoneType)


def python_type_for(sql_type: SqlType) -> type:
    """Return the Python type a column of *sql_type* maps to.

    Raises:
        UnmappedColumnTypeError: if the type has no entry in the table.
    """
    try:
        return _PYTHON_TYPES[sql_type]
    except KeyError:
        raise UnmappedColumnTypeError(sql_type) from None
