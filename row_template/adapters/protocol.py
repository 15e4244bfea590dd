"""Database adapter protocol.

Every adapter module MUST implement this protocol so the executor can stay
driver-agnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from row_template.core.connection import ConnectionConfig

if TYPE_CHECKING:
    from row_template.core.statement import ColumnMetadata
    from row_template.core.types import SqlType


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """DB-API placeholder style: 'qmark' (?), 'format' (%s) or 'numeric' (:1)."""
        ...

    @property
    def backslash_escapes(self) -> bool:
        """Whether a backslash escapes the next character in quoted literals."""
        ...

    def create_pool(self, config: ConnectionConfig) -> Any:
        """Create a connection pool."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Acquire a connection from the pool."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Release a connection back to the pool."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close the pool and release all connections."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: tuple[Any, ...] = (),
    ) -> Any:
        """Execute SQL and return a cursor yielding tuple rows."""
        ...

    def column_type(self, column: ColumnMetadata, value: Any) -> SqlType:
        """Translate a column's driver type code into a portable SqlType."""
        ...
