"""
Example 03: Error Handling

Every executor failure is a DataAccessError. A single-object query that
finds zero or several rows raises IncorrectResultSizeError, a subclass.
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from row_template import (
    ConnectionConfig,
    DataAccessError,
    IncorrectResultSizeError,
    StatementExecutor,
)


@dataclass
class User:
    id: int
    name: str


def main():
    logging.basicConfig(level=logging.CRITICAL)

    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    executor = StatementExecutor.from_config(
        ConnectionConfig(driver="sqlite", database=db_path, pool_size=1)
    )
    executor.update("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    executor.update("INSERT INTO users (name) VALUES (?)", "Alice")
    executor.update("INSERT INTO users (name) VALUES (?)", "Bob")

    print("=== Error Handling ===\n")

    try:
        executor.query_for_object("SELECT id, name FROM users WHERE id = ?", User, 42)
    except IncorrectResultSizeError as e:
        print(f"No rows:    {e} (actual_size={e.actual_size})")

    try:
        executor.query_for_object("SELECT id, name FROM users", User)
    except IncorrectResultSizeError as e:
        print(f"Many rows:  {e}")

    try:
        executor.query_for_object("SELECT name, id FROM users WHERE id = ?", User, 1)
    except DataAccessError as e:
        print(f"Mapping:    {e} [{e.cause_type}]")

    try:
        executor.update("DELETE FROM missing WHERE id = ?", 1)
    except DataAccessError as e:
        print(f"Driver:     {e} [{e.cause_type}]")
        print(f"Cause:      {type(e.__cause__).__module__}.{type(e.__cause__).__name__}")

    executor.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
