# src/simple_todo/storage/kv_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """
    SQLite key-value store for small string blobs (task list, preferences).

    Keys are grouped by namespace, so unrelated settings never share a key.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "prefs.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("KeyValueStore ready db=%s", self._db_path)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS prefs (
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL,
                    PRIMARY KEY (namespace, key)
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self, namespace: str, key: str, default: str | None = None) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT value FROM prefs WHERE namespace = ? AND key = ?",
                (namespace, key),
            ).fetchone()
            return default if row is None else str(row[0])
        finally:
            conn.close()

    def set(self, namespace: str, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO prefs(namespace, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(namespace, key) DO UPDATE
                SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (namespace, key, value, time.time()),
            )
            conn.commit()
            logger.debug("prefs set %s/%s (%d chars)", namespace, key, len(value))
        finally:
            conn.close()

    def delete(self, namespace: str, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM prefs WHERE namespace = ? AND key = ?", (namespace, key))
            conn.commit()
        finally:
            conn.close()
