"""
SQLite Event Store Adapter.

Implements EventStorePort and StatsRepoPort using SQLite.

Key behaviors:
- Schema created on open (idempotent)
- Timestamps stored as UTC ISO-8601 text with fixed precision so that
  lexical order matches chronological order
- One connection shared across threads, serialized by a lock
- sqlite3 errors surface as StoreError
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock
from typing import Any

from src.core.entities import PageViewEvent
from src.core.ports.events import StoreError

logger = logging.getLogger(__name__)

SALT_KEY = "hash_salt"

STAT_COLUMNS = frozenset(
    {"path", "referrer", "browser", "os", "device", "screen_size", "bot_name"}
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL,
    visitor_id TEXT NOT NULL,
    ip_hash TEXT NOT NULL,
    path TEXT NOT NULL DEFAULT '',
    referrer TEXT NOT NULL DEFAULT 'Direct',
    browser TEXT NOT NULL DEFAULT 'Unknown',
    os TEXT NOT NULL DEFAULT 'Unknown',
    device TEXT NOT NULL DEFAULT 'Desktop',
    screen_size TEXT NOT NULL DEFAULT '',
    duration_sec INTEGER NOT NULL DEFAULT 0,
    is_bot INTEGER NOT NULL DEFAULT 0,
    bot_name TEXT NOT NULL DEFAULT ''
);
CREATE INDEX IF NOT EXISTS idx_events_timestamp ON events (timestamp);
CREATE INDEX IF NOT EXISTS idx_events_visitor ON events (visitor_id);
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
);
"""


# -----------------------------------------------------------------------------
# Helper functions
# -----------------------------------------------------------------------------


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def format_ts(dt: datetime) -> str:
    """Format a datetime as fixed-precision UTC text. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="microseconds")


def parse_ts(s: str) -> datetime:
    """Parse a stored timestamp."""
    return datetime.fromisoformat(s)


# -----------------------------------------------------------------------------
# Event Store
# -----------------------------------------------------------------------------


class SQLiteEventStore:
    """SQLite implementation of EventStorePort and StatsRepoPort."""

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._lock = Lock()
        self._conn = connection or self._connect(db_path)
        self._conn.row_factory = dict_factory
        try:
            self._conn.executescript(SCHEMA)
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to initialize schema: {e}") from e

    @staticmethod
    def _connect(db_path: str) -> sqlite3.Connection:
        try:
            if db_path == ":memory:":
                return sqlite3.connect(db_path, check_same_thread=False)
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(db_path, check_same_thread=False, timeout=10.0)
            conn.execute("PRAGMA journal_mode = WAL;")
            return conn
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Failed to open database {db_path}: {e}") from e

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _fetchall(self, sql: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
        with self._lock:
            try:
                return self._conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StoreError(f"Query failed: {e}") from e

    def _fetchone(self, sql: str, params: tuple[Any, ...]) -> dict[str, Any] | None:
        rows = self._fetchall(sql, params)
        return rows[0] if rows else None

    def _execute_write(self, sql: str, params: tuple[Any, ...], action: str) -> int:
        with self._lock:
            try:
                # Commits on success, rolls back on error
                with self._conn:
                    cursor = self._conn.execute(sql, params)
                return cursor.rowcount
            except sqlite3.Error as e:
                raise StoreError(f"Failed to {action}: {e}") from e

    # --- EventStorePort ---

    def insert(self, event: PageViewEvent) -> None:
        self._execute_write(
            """
            INSERT INTO events (
                timestamp, visitor_id, ip_hash, path, referrer, browser,
                os, device, screen_size, duration_sec, is_bot, bot_name
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                format_ts(event.timestamp),
                event.visitor_id,
                event.ip_hash,
                event.path,
                event.referrer,
                event.browser,
                event.os,
                event.device,
                event.screen_size,
                event.duration_sec,
                int(event.is_bot),
                event.bot_name,
            ),
            "insert event",
        )

    def delete_older_than(self, cutoff: datetime) -> int:
        return self._execute_write(
            "DELETE FROM events WHERE timestamp < ?",
            (format_ts(cutoff),),
            "delete events",
        )

    def get_salt(self) -> bytes | None:
        row = self._fetchone("SELECT value FROM settings WHERE key = ?", (SALT_KEY,))
        return bytes(row["value"]) if row else None

    def set_salt(self, salt: bytes) -> None:
        # Plain INSERT: an existing salt is never overwritten.
        self._execute_write(
            "INSERT INTO settings (key, value) VALUES (?, ?)",
            (SALT_KEY, salt),
            "store salt",
        )

    def ping(self) -> None:
        """Health probe."""
        self._fetchone("SELECT 1 AS ok", ())

    # --- StatsRepoPort ---

    def count_page_views(self, since: datetime) -> int:
        row = self._fetchone(
            "SELECT COUNT(*) AS n FROM events "
            "WHERE is_bot = 0 AND duration_sec = 0 AND timestamp >= ?",
            (format_ts(since),),
        )
        return int(row["n"]) if row else 0

    def count_unique_visitors(self, since: datetime) -> int:
        row = self._fetchone(
            "SELECT COUNT(DISTINCT visitor_id) AS n FROM events "
            "WHERE is_bot = 0 AND timestamp >= ?",
            (format_ts(since),),
        )
        return int(row["n"]) if row else 0

    def average_duration(self, since: datetime) -> float:
        row = self._fetchone(
            "SELECT AVG(duration_sec) AS avg FROM events "
            "WHERE is_bot = 0 AND duration_sec > 0 AND timestamp >= ?",
            (format_ts(since),),
        )
        if not row or row["avg"] is None:
            return 0.0
        return float(row["avg"])

    def count_bot_hits(self, since: datetime) -> int:
        row = self._fetchone(
            "SELECT COUNT(*) AS n FROM events WHERE is_bot = 1 AND timestamp >= ?",
            (format_ts(since),),
        )
        return int(row["n"]) if row else 0

    def top_values(
        self,
        column: str,
        since: datetime,
        limit: int = 10,
        bots: bool = False,
    ) -> list[tuple[str, int]]:
        if column not in STAT_COLUMNS:
            raise ValueError(f"Unknown stats column: {column}")

        scope = "is_bot = 1" if bots else "is_bot = 0 AND duration_sec = 0"
        rows = self._fetchall(
            f"SELECT {column} AS label, COUNT(*) AS n FROM events "
            f"WHERE {scope} AND timestamp >= ? AND {column} != '' "
            f"GROUP BY {column} ORDER BY n DESC, label ASC LIMIT ?",
            (format_ts(since), limit),
        )
        return [(r["label"], int(r["n"])) for r in rows]
