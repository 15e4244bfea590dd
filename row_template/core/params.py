"""Positional placeholder normalization.

Statements are always written with ``?`` placeholders. Drivers that use a
different DB-API paramstyle get the placeholders rewritten here, leaving
quoted literals, quoted identifiers and comments untouched.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

# Spans in which a ``?`` is not a placeholder. Backslash escapes inside
# quotes only exist on backends that enable them (MySQL); elsewhere a
# backslash is an ordinary character. PostgreSQL E'' strings always escape.
_ESCAPE_STRING = r"(?<![\w$])[Ee]'(?:[^'\\]|\\.|'')*'"
_COMMENTS = r"--[^\n]*|/\*.*?\*/"
_BACKTICK_IDENTIFIER = r"`(?:[^`]|``)*`"

_QUOTED_SPANS: dict[bool, re.Pattern[str]] = {
    False: re.compile(
        "|".join(
            (
                _ESCAPE_STRING,
                r"'(?:[^']|'')*'",
                r'"(?:[^"]|"")*"',
                _BACKTICK_IDENTIFIER,
                _COMMENTS,
            )
        ),
        re.DOTALL,
    ),
    True: re.compile(
        "|".join(
            (
                r"'(?:[^'\\]|\\.|'')*'",
                r'"(?:[^"\\]|\\.|"")*"',
                _BACKTICK_IDENTIFIER,
                _COMMENTS,
            )
        ),
        re.DOTALL,
    ),
}

_PLACEHOLDER = "?"


def normalize_placeholders(
    sql: str,
    paramstyle: str,
    *,
    backslash_escapes: bool = False,
) -> str:
    """Convert ``?`` placeholders to the target paramstyle.

    Args:
        sql: SQL string with ``?`` placeholders.
        paramstyle: Target style - 'qmark' (no conversion), 'format' (%s)
            or 'numeric' (:1, :2, ...).
        backslash_escapes: Whether a backslash escapes the next character
            inside quoted literals on the target backend.

    Returns:
        SQL with placeholders converted to the target style.
    """
    if paramstyle == "qmark":
        return sql
    if paramstyle not in ("format", "numeric"):
        raise ValueError(f"Unsupported paramstyle: {paramstyle}")
    return _convert_placeholders(sql, paramstyle, backslash_escapes)


@lru_cache(maxsize=256)
def _convert_placeholders(sql: str, paramstyle: str, backslash_escapes: bool) -> str:
    """Rewrite ``?`` outside quoted spans, numbering from 1 for 'numeric'."""
    parts: list[str] = []
    position = 0
    last_end = 0

    def _rewrite(segment: str) -> str:
        nonlocal position
        out: list[str] = []
        for char in segment:
            if char != _PLACEHOLDER:
                out.append(char)
                continue
            position += 1
            out.append("%s" if paramstyle == "format" else f":{position}")
        return "".join(out)

    for match in _QUOTED_SPANS[backslash_escapes].finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_rewrite(sql[last_end:start]))
        parts.append(match.group())
        last_end = end

    if last_end < len(sql):
        parts.append(_rewrite(sql[last_end:]))

    return "".join(parts)


def coerce_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Normalize variadic statement arguments to a positional tuple.

    * ``()`` -> ``()``.
    * A single ``list`` or ``tuple`` argument is spread, so
      ``update(sql, [1, 2])`` and ``update(sql, 1, 2)`` bind the same values.
    * Anything else is returned unchanged.
    """
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return tuple(args[0])
    return tuple(args)
