"""Column-name row mapper.

Supports dataclasses, Pydantic models, and plain classes.
"""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any, Generic, TypeVar

from row_template.core.exceptions import ColumnMismatchError, ObjectConstructionError
from row_template.core.statement import Row
from row_template.mapping.instantiate import _is_pydantic_model

T = TypeVar("T")

_KEYWORD_KINDS = (
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def _required_fields(cls: type) -> list[str]:
    """Names the constructor needs that have no default."""
    if _is_pydantic_model(cls):
        fields = cls.model_fields.items()  # type: ignore[attr-defined]
        return [name for name, field in fields if field.is_required()]

    if dataclasses.is_dataclass(cls):
        return [
            f.name
            for f in dataclasses.fields(cls)
            if f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        ]

    try:
        parameters = inspect.signature(cls).parameters.values()
    except (TypeError, ValueError):
        return []
    return [
        p.name
        for p in parameters
        if p.kind in _KEYWORD_KINDS and p.default is inspect.Parameter.empty
    ]


class ModelRowMapper(Generic[T]):
    """Map each row to *target_class* by column name.

    Detection order:
    1. Pydantic BaseModel -> model_validate(row)
    2. dataclass -> target_class(**row)
    3. Plain class -> target_class(**row)

    Unlike ``query_for_object``, matching is by name, so column order does
    not matter and Pydantic models get their usual type coercion. Required
    fields with no matching column raise ColumnMismatchError before the
    constructor runs; a constructor or validation failure raises
    ObjectConstructionError.

    Args:
        target_class: The class to construct from row data.
        aliases: Optional column-name to field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._aliases = aliases or {}
        self._is_pydantic = _is_pydantic_model(target_class)
        self._required = _required_fields(target_class)

    def _fields(self, row: Row) -> dict[str, Any]:
        return {
            self._aliases.get(name, name): value
            for name, value in zip(row.column_names, row.values, strict=True)
        }

    def map_row(self, row: Row, row_index: int) -> T:
        """Map a single row to a target_class instance."""
        fields = self._fields(row)
        missing = [name for name in self._required if name not in fields]
        if missing:
            raise ColumnMismatchError(self._target_class.__name__, missing)

        try:
            if self._is_pydantic:
                return self._target_class.model_validate(fields)  # type: ignore[attr-defined, no-any-return]
            return self._target_class(**fields)
        except (TypeError, ValueError) as e:
            raise ObjectConstructionError(
                f"{self._target_class.__name__} (row {row_index})", str(e)
            ) from e
