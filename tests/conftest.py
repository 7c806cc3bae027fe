"""pytest 共通設定: SQLite テスト基盤."""

from __future__ import annotations

import sqlite3
from collections.abc import Generator

import pytest

from sqlprep import SqliteHandle


@pytest.fixture
def db() -> Generator[sqlite3.Connection, None, None]:
    """テスト用 SQLite インメモリ DB を作成し、テストデータを投入する."""
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            age INTEGER,
            email TEXT,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            metadata TEXT
        )
    """)
    conn.execute("""
        INSERT INTO users (name, age, email, created_at, metadata) VALUES
        ('John', 30, 'john@example.com', datetime('now', '-2 days'), '{"role": "user"}'),
        ('Jane', 25, 'jane@example.com', datetime('now', '-1 day'), '{"role": "admin"}'),
        ('Bob', 35, 'bob@example.com', datetime('now'), '{"role": "user"}')
    """)
    conn.commit()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def handle(db: sqlite3.Connection) -> SqliteHandle:
    """テスト用 SqliteHandle."""
    return SqliteHandle(db)
