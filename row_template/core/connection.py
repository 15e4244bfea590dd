"""Connection configuration and management.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager is the data source the executor draws connections from;
it uses the SyncAdapter protocol for pool-based connection lifecycle.
"""

from __future__ import annotations

import importlib
import logging
import threading
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel

from row_template.core.enums import DatabaseBackend
from row_template.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    pool_size: int = 5
    pool_timeout: int = 30
    extra: dict[str, Any] = {}


# Adapter module mapping: backend → (module_path, class_name)
_ADAPTER_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("row_template.adapters.sqlite", "SqliteAdapter"),
    DatabaseBackend.POSTGRESQL: ("row_template.adapters.postgresql", "PostgresqlAdapter"),
    DatabaseBackend.MYSQL: ("row_template.adapters.mysql", "MysqlAdapter"),
    DatabaseBackend.ORACLE: ("row_template.adapters.oracle", "OracleAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    try:
        backend = DatabaseBackend.from_driver(driver)
    except ValueError:
        raise AdapterError(f"Unsupported database driver: {driver}") from None

    module_path, cls_name = _ADAPTER_MAP[backend]

    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionManager:
    """Connection provider backed by an adapter-managed pool."""

    def __init__(self, config: ConnectionConfig, adapter: Any | None = None) -> None:
        self.config = config
        self._adapter = adapter if adapter is not None else _load_adapter(config.driver)
        self._pool: Any = None
        self._lock = threading.Lock()

    @property
    def adapter(self) -> Any:
        return self._adapter

    def initialize_pool(self) -> Any:
        """Initialize the connection pool."""
        with self._lock:
            if self._pool is None:
                self._pool = self._adapter.create_pool(self.config)
                logger.debug(
                    "Created %s pool with %d connection(s)",
                    self.config.driver,
                    self.config.pool_size,
                )
        return self._pool

    @contextmanager
    def get_connection(self):  # type: ignore[no-untyped-def]
        """Get a connection from the pool as a context manager."""
        pool = self._pool if self._pool is not None else self.initialize_pool()
        connection = self._adapter.acquire_connection(pool)
        try:
            yield connection
        finally:
            self._adapter.release_connection(connection, pool)

    def close_pool(self) -> None:
        """Close the connection pool."""
        with self._lock:
            if self._pool is not None:
                self._adapter.close_pool(self._pool)
                self._pool = None
                logger.debug("Closed %s pool", self.config.driver)
