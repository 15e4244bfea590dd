"""
Example 01: Basic Statement Execution

This example demonstrates update, query_for_object and query using
RowTemplate's StatementExecutor against a temporary SQLite database.
"""

import tempfile
from pathlib import Path

from row_template import ConnectionConfig, SingleColumnRowMapper, StatementExecutor


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path, pool_size=1)
    executor = StatementExecutor.from_config(config)

    print("=== Basic Statement Execution ===\n")

    # update: DDL reports 0 affected rows
    executor.update(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email TEXT NOT NULL)"
    )

    # update: positional arguments bind to ? placeholders in order
    for name, email in [("Alice", "alice@example.com"), ("Bob", "bob@example.com")]:
        affected = executor.update("INSERT INTO users (name, email) VALUES (?, ?)", name, email)
        print(f"Inserted {name}: {affected} row(s)")
    print()

    # query_for_object: exactly one row, scalar target
    count = executor.query_for_object("SELECT COUNT(*) FROM users", int)
    print(f"query_for_object result: {count} total users\n")

    # query: a plain function works as a row mapper
    rows = executor.query(
        "SELECT id, name FROM users ORDER BY id",
        lambda row, row_index: f"#{row_index} {row['name']} (id={row[0]})",
    )
    print(f"query result ({len(rows)} rows):")
    for line in rows:
        print(f"  - {line}")
    print()

    names = executor.query("SELECT name FROM users", SingleColumnRowMapper(str))
    print(f"Names: {names}")

    executor.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
