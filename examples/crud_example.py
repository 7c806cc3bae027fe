#!/usr/bin/env python3
"""sqlprep CRUD Example.

This example demonstrates the basic usage of sqlprep:
- Building parameterized queries from format strings
- IN clause expansion (empty lists become IN (NULL))
- Raw SQL and fragments
- Single and batch INSERT
- Validating raw SQL against an allow list
- Running queries through SqliteHandle / wrap_handle

Usage:
    uv run python examples/crud_example.py
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass

from sqlprep import (
    DisallowedQueryError,
    SqliteHandle,
    SqlTemplate,
    build_format,
    fragment_format,
    insert,
    into,
    prepare,
    raw,
    validate,
    wrap_handle,
)

# =============================================================================
# Entity Definition
# =============================================================================


@dataclass
class NewUser:
    """Row for INSERT.

    Dataclass fields become column names in declaration order.
    """

    name: str
    email: str
    department: str | None = None


# =============================================================================
# Database Setup
# =============================================================================


def setup_database() -> SqliteHandle:
    """Set up SQLite database for testing."""
    conn = sqlite3.connect(":memory:")

    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            department TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            metadata TEXT
        )
    """)

    # Insert sample data
    sample_data = [
        ("Tanaka Taro", "tanaka@example.com", "Sales", "2024-01-15 09:00:00"),
        ("Suzuki Hanako", "suzuki@example.com", "Development", "2024-02-01 10:30:00"),
        ("Sato Ichiro", "sato@example.com", "Sales", "2024-02-15 14:00:00"),
        ("Yamada Misaki", "yamada@example.com", "Development", "2024-03-01 11:00:00"),
    ]
    conn.executemany(
        "INSERT INTO users (name, email, department, created_at) VALUES (?, ?, ?, ?)",
        sample_data,
    )
    conn.commit()
    return SqliteHandle(conn, auto_commit=True)


# =============================================================================
# CRUD Operations
# =============================================================================


def demo_select(handle: SqliteHandle) -> None:
    """Demo: Select with embedded values."""
    print("=" * 60)
    print("[SELECT] Values become ? placeholders")
    print("=" * 60)

    query = build_format("SELECT id, name FROM users WHERE department = {dept} ORDER BY id", dept="Sales")

    print(f"SQL: {query.sql}")
    print(f"Parameters: {query.params}")
    print()

    for row in handle.prepare(query.sql).bind(*query.params).all():
        print(f"  {row}")
    print()


def demo_in_clause(handle: SqliteHandle) -> None:
    """Demo: IN clause expansion.

    Lists are expanded to one placeholder per element.
    An empty list becomes IN (NULL), which matches nothing.
    """
    print("=" * 60)
    print("[IN CLAUSE] Search by multiple IDs")
    print("=" * 60)

    for ids in ([1, 3], []):
        query = build_format("SELECT id, name FROM users WHERE id IN {} ORDER BY id", ids)
        print(f"Generated SQL: {query.sql}")
        print(f"Parameters: {query.params}")
        rows = handle.prepare(query.sql).bind(*query.params).all()
        print(f"Results: {rows}")
        print()


def demo_raw_and_fragment(handle: SqliteHandle) -> None:
    """Demo: Raw SQL and fragments.

    raw() is inserted verbatim; fragment() keeps its values parameterized.
    """
    print("=" * 60)
    print("[RAW / FRAGMENT] Compose a query from parts")
    print("=" * 60)

    columns = raw("id, name, department")
    condition = fragment_format("department = {} AND created_at >= {}", "Sales", "2024-02-01")
    order = raw("created_at DESC")

    query = build_format("SELECT {} FROM users WHERE {} ORDER BY {}", columns, condition, order)

    print(f"Generated SQL: {query.sql}")
    print(f"Parameters: {query.params}")
    print()

    for row in handle.prepare(query.sql).bind(*query.params).all():
        print(f"  {row}")
    print()


def demo_subquery(handle: SqliteHandle) -> None:
    """Demo: Nested query (wrapped in parentheses)."""
    print("=" * 60)
    print("[SUBQUERY] Users in the same department as Sato")
    print("=" * 60)

    sub = build_format("SELECT department FROM users WHERE name = {}", "Sato Ichiro")
    query = build_format("SELECT name FROM users WHERE department IN {} ORDER BY id", sub)

    print(f"Generated SQL: {query.sql}")
    print(f"Parameters: {query.params}")
    print()

    for row in handle.prepare(query.sql).bind(*query.params).all():
        print(f"  {row}")
    print()


def demo_insert(handle: SqliteHandle) -> None:
    """Demo: INSERT.

    Batch rows are reconciled: missing columns are filled with NULL.
    Dict values are stored as JSON text.
    """
    print("=" * 60)
    print("[INSERT] Register new users")
    print("=" * 60)

    single = insert(into("users"), NewUser("New User", "newuser@example.com", "General Affairs"))
    print(f"Generated SQL: {single.sql}")
    print(f"Parameters: {single.params}")
    result = handle.prepare(single.sql).bind(*single.params).run()
    print(f"Inserted ID: {result.last_row_id}")
    print()

    batch = insert(
        into("users"),
        [
            {"name": "Batch A", "email": "a@example.com", "metadata": {"role": "admin"}},
            {"name": "Batch B", "email": "b@example.com", "created_at": raw("datetime('now')")},
        ],
    )
    print(f"Generated SQL: {batch.sql}")
    print(f"Parameters: {batch.params}")
    result = handle.prepare(batch.sql).bind(*batch.params).run()
    print(f"Inserted rows: {result.changes}")
    print()


def demo_update(handle: SqliteHandle) -> None:
    """Demo: UPDATE through wrap_handle."""
    print("=" * 60)
    print("[UPDATE] Update user information")
    print("=" * 60)

    q = wrap_handle(handle)
    template = SqlTemplate.from_format(
        "UPDATE users SET department = {dept} WHERE id = {id}", dept="Sales (Transferred)", id=1
    )
    result = q(template).run()
    print(f"Updated rows: {result.changes}")

    # Verify update result
    print(f"After update: {q('SELECT * FROM users WHERE id = ?', 1).first()}")
    print()


def demo_delete(handle: SqliteHandle) -> None:
    """Demo: DELETE with the positional form."""
    print("=" * 60)
    print("[DELETE] Delete user")
    print("=" * 60)

    result = prepare(handle, "DELETE FROM users WHERE email = ?", "newuser@example.com").run()
    print(f"Deleted rows: {result.changes}")
    print()


def demo_validate(handle: SqliteHandle) -> None:
    """Demo: Validate user-supplied sort order against an allow list."""
    print("=" * 60)
    print("[VALIDATE] Allow-listed raw SQL")
    print("=" * 60)

    allowed = ["name ASC", "name DESC", "created_at DESC"]
    for requested in ("name DESC", "name; DROP TABLE users"):
        try:
            order = validate(requested, allowed)
        except DisallowedQueryError as e:
            print(f"Rejected: {e}")
            continue
        query = build_format("SELECT name FROM users ORDER BY {}", order)
        print(f"Generated SQL: {query.sql}")
        print(f"First: {handle.prepare(query.sql).first('name')}")
    print()


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    """Run the examples."""
    logging.basicConfig(level=logging.INFO)

    print("sqlprep CRUD Example")
    print("=" * 60)
    print()

    handle = setup_database()

    # Run each demo
    demo_select(handle)
    demo_in_clause(handle)
    demo_raw_and_fragment(handle)
    demo_subquery(handle)
    demo_insert(handle)
    demo_update(handle)
    demo_delete(handle)
    demo_validate(handle)

    print("=" * 60)
    print("Example completed")
    print("=" * 60)


if __name__ == "__main__":
    main()
