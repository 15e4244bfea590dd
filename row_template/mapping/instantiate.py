"""Reflective single-row instantiation.

Builds a target object from one row by matching the row's column types,
taken from the SQL-to-Python type table, against the target's constructor
signature. Column values are passed positionally, in column order.

Supported targets:
1. Scalar types from the type table (int, str, Decimal, ...) - one column,
   value returned as-is
2. Pydantic BaseModel - fields in declaration order, passed by keyword
3. dataclass / plain class - ``__init__`` positional parameters
4. Any other callable - treated as a factory, introspected the same way
"""

from __future__ import annotations

import dataclasses
import inspect
import types
from collections.abc import Callable
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from row_template.core.exceptions import (
    IncorrectColumnCountError,
    NoMatchingConstructorError,
    ObjectConstructionError,
)
from row_template.core.statement import Row
from row_template.core.types import SCALAR_TYPES, NoneType, python_type_for

T = TypeVar("T")

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclasses.dataclass(frozen=True)
class _Parameter:
    name: str
    annotation: Any
    required: bool


def _target_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or type(target).__name__


def _is_pydantic_model(cls: Any) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return inspect.isclass(cls) and issubclass(cls, BaseModel)


def _describe(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation)


def is_assignable(column_type: type, annotation: Any) -> bool:
    """Return True if a value of *column_type* fits a parameter annotated *annotation*.

    Unannotated and ``Any`` parameters accept everything. Unions accept when
    any member does. NULL columns need a None-accepting annotation. ``int``
    widens to ``float``.
    """
    if annotation is Any or annotation is object or annotation is inspect.Parameter.empty:
        return True
    if isinstance(annotation, TypeVar):
        return True
    while hasattr(annotation, "__supertype__"):  # typing.NewType
        annotation = annotation.__supertype__

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(column_type, arg) for arg in get_args(annotation))
    if column_type is NoneType:
        return annotation is None or annotation is NoneType
    if annotation is float and column_type is int:
        return True
    if origin is not None:
        annotation = origin
    return isinstance(annotation, type) and issubclass(column_type, annotation)


def _pydantic_parameters(cls: Any) -> list[_Parameter]:
    return [
        _Parameter(name, field.annotation, field.is_required())
        for name, field in cls.model_fields.items()
    ]


def _signature_parameters(target: Any, column_types: list[type]) -> list[_Parameter]:
    name = _target_name(target)
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError) as e:
        raise NoMatchingConstructorError(
            name, column_types, f"no introspectable signature: {e}"
        ) from e

    # Dataclass __init__ annotations are synthesized; the class carries the real ones.
    if inspect.isclass(target) and not dataclasses.is_dataclass(target):
        hints_source: Any = target.__init__
    else:
        hints_source = target
    try:
        hints = get_type_hints(hints_source)
    except (NameError, TypeError) as e:
        raise NoMatchingConstructorError(
            name, column_types, f"cannot resolve annotations: {e}"
        ) from e

    return [
        _Parameter(
            parameter.name,
            hints.get(parameter.name, Any),
            parameter.default is inspect.Parameter.empty,
        )
        for parameter in signature.parameters.values()
        if parameter.kind in _POSITIONAL_KINDS
    ]


def resolve_constructor(target: Callable[..., T], column_types: list[type]) -> Callable[..., T]:
    """Find a constructor on *target* accepting *column_types* in order.

    The column count must cover every required positional parameter and
    must not exceed the total number of positional parameters.

    Raises:
        NoMatchingConstructorError: if the signature does not fit.
    """
    name = _target_name(target)
    is_pydantic = _is_pydantic_model(target)
    if is_pydantic:
        parameters = _pydantic_parameters(target)
    else:
        parameters = _signature_parameters(target, column_types)

    required = sum(1 for p in parameters if p.required)
    if not required <= len(column_types) <= len(parameters):
        raise NoMatchingConstructorError(
            name,
            column_types,
            f"takes {required} to {len(parameters)} positional arguments, "
            f"row has {len(column_types)} columns",
        )

    for index, (column_type, parameter) in enumerate(zip(column_types, parameters)):
        if not is_assignable(column_type, parameter.annotation):
            raise NoMatchingConstructorError(
                name,
                column_types,
                f"column {index + 1} ({column_type.__name__}) does not fit "
                f"parameter '{parameter.name}: {_describe(parameter.annotation)}'",
            )

    if is_pydantic:
        names = [p.name for p in parameters[: len(column_types)]]

        def _by_keyword(*values: Any) -> T:
            return target(**dict(zip(names, values, strict=True)))

        return _by_keyword
    return target


def scalar_value(row: Row, required_type: type | None = None) -> Any:
    """Return the only column of *row*, checked against *required_type* when given.

    NULL is accepted for any required type.
    """
    if len(row) != 1:
        raise IncorrectColumnCountError(1, len(row))
    if required_type is None:
        return row[0]
    column_types = [python_type_for(row.column_types[0])]
    if not is_assignable(column_types[0], required_type | None):
        raise NoMatchingConstructorError(
            required_type.__name__,
            column_types,
            f"column of type {column_types[0].__name__} is not a {required_type.__name__}",
        )
    return row[0]


def instantiate(row: Row, required_type: Callable[..., T]) -> T:
    """Construct *required_type* from the values of *row*.

    Raises:
        UnmappedColumnTypeError: if a column's SQL type is not in the type table.
        IncorrectColumnCountError: if a scalar target meets more than one column.
        NoMatchingConstructorError: if no constructor fits the column types.
        ObjectConstructionError: if the constructor raises.
    """
    if required_type in SCALAR_TYPES:
        return scalar_value(row, required_type)  # type: ignore[no-any-return]

    column_types = [python_type_for(sql_type) for sql_type in row.column_types]
    constructor = resolve_constructor(required_type, column_types)
    try:
        return constructor(*row.values)
    except Exception as e:
        raise ObjectConstructionError(_target_name(required_type), str(e)) from e
