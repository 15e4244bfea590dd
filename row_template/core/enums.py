"""Database backend enumeration."""

from __future__ import annotations

from enum import Enum

# Driver-module and dialect names accepted in ConnectionConfig.driver
_DRIVER_ALIASES: dict[str, str] = {
    "sqlite3": "sqlite",
    "postgres": "postgresql",
    "psycopg": "postgresql",
    "mariadb": "mysql",
    "oracledb": "oracle",
}


class DatabaseBackend(Enum):
    """Supported database backends, valued by canonical driver name."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"

    @classmethod
    def from_driver(cls, driver: str) -> DatabaseBackend:
        """Resolve a driver name or alias, case-insensitively.

        Raises:
            ValueError: if the name matches no backend.
        """
        name = driver.strip().lower()
        return cls(_DRIVER_ALIASES.get(name, name))
