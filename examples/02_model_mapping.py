"""
Example 02: Model Mapping

This example demonstrates building dataclasses and Pydantic models from rows,
both positionally with query_for_object and by name with ModelRowMapper.
"""

import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel

from row_template import ConnectionConfig, ModelRowMapper, StatementExecutor


@dataclass
class UserDataclass:
    """User model using dataclass"""
    id: int
    name: str
    email: str


class UserPydantic(BaseModel):
    """User model using Pydantic"""
    id: int
    name: str
    email: str
    active: bool


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path, pool_size=1)
    executor = StatementExecutor.from_config(config)
    executor.update("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            active INTEGER DEFAULT 1
        )
    """)
    executor.update("INSERT INTO users (name, email) VALUES (?, ?)", "Alice", "alice@example.com")
    executor.update("INSERT INTO users (name, email) VALUES (?, ?)", "Bob", "bob@example.com")

    print("=== Model Mapping ===\n")

    # Positional: column order must match the constructor
    print("1. query_for_object (by position):")
    user = executor.query_for_object(
        "SELECT id, name, email FROM users WHERE id = ?", UserDataclass, 1
    )
    print(f"   Type: {type(user).__name__}")
    print(f"   Data: {user}\n")

    # By name: column order does not matter, Pydantic coerces 1 -> True
    print("2. ModelRowMapper (by name):")
    users = executor.query(
        "SELECT active, email, name, id FROM users ORDER BY id",
        ModelRowMapper(UserPydantic),
    )
    for u in users:
        print(f"   - {u.name} <{u.email}> active={u.active}")
    print()

    # Aliases rename columns to fields
    print("3. Column aliases:")
    users = executor.query(
        "SELECT id AS user_id, name, email FROM users",
        ModelRowMapper(UserDataclass, aliases={"user_id": "id"}),
    )
    print(f"   {users}")

    executor.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
