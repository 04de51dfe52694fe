"""Operations on the ``kv_store`` table."""

from __future__ import annotations

import sqlite3
from time import time
from typing import Optional


def get_value(conn: sqlite3.Connection, key: str) -> Optional[str]:
    """Return the stored value for *key*, or ``None`` if it was never written."""
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else None


def set_value(conn: sqlite3.Connection, key: str, value: str) -> None:
    """Insert or replace the whole value stored under *key*."""
    now = int(time())
    with conn:
        conn.execute(
            """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value      = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value, now),
        )
