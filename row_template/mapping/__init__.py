"""Mapping layer - turn result rows into typed objects."""

from __future__ import annotations

from row_template.mapping.column import DictRowMapper, SingleColumnRowMapper
from row_template.mapping.instantiate import instantiate, is_assignable, resolve_constructor
from row_template.mapping.model import ModelRowMapper
from row_template.mapping.protocol import RowMapper

__all__ = [
    "RowMapper",
    "ModelRowMapper",
    "SingleColumnRowMapper",
    "DictRowMapper",
    "instantiate",
    "is_assignable",
    "resolve_constructor",
]
