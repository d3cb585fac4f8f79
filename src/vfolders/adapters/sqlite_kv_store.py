from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from vfolders.ports.key_value_port import KeyValueStorePort


class SQLiteKeyValueStore(KeyValueStorePort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        self._ensure_schema()

    def get(self, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """
                    SELECT value
                    FROM kv_entries
                    WHERE key = ?
                    """,
                    (key,),
                ).fetchone()
            if row is None:
                return None
            return row[0]
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to read key: {key}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_entries(key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, datetime.now(timezone.utc).isoformat()),
                )
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to write key: {key}") from exc

    def delete(self, key: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to delete key: {key}") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._sqlite_path)

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_entries(
                        key TEXT PRIMARY KEY,
                        value TEXT,
                        updated_at TEXT
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to initialize key-value schema") from exc
