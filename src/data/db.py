"""
EduWork Tracker — Key-Value Database.

All state (today's tasks, earnings, stats, uploads, payout details) lives in
a single SQLite table of JSON values, surviving bot restarts. Every write is
committed immediately, so a read always sees the preceding write.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """SQLite-backed implementation of KeyValueStore."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from src.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        # A :memory: database only lives as long as its connection
        self._memory_conn: sqlite3.Connection | None = (
            sqlite3.connect(db_path) if db_path == ":memory:" else None
        )
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        if self._memory_conn is not None:
            return self._memory_conn
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Create the kv table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key        TEXT PRIMARY KEY,
                    value      TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
        logger.debug("KV table initialized at %s", self._db_path)

    def get(self, key: str) -> Any | None:
        """Return the decoded value for key, or None if absent or corrupt."""
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt value for key '%s', treating as absent: %s", key, exc)
            return None

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                               updated_at = excluded.updated_at
                """,
                (key, payload, now),
            )
        logger.debug("KV set '%s'", key)

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        logger.debug("KV delete '%s'", key)

