"""
In-memory event store for tests and development.

Implements EventStorePort and StatsRepoPort with the same semantics as the
SQLite adapter: page views are human load beacons (duration 0), engagement
beacons (duration > 0) only feed the average duration.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from threading import Lock

from src.core.entities import PageViewEvent
from src.core.ports.events import StoreError

STAT_COLUMNS = frozenset(
    {"path", "referrer", "browser", "os", "device", "screen_size", "bot_name"}
)


class InMemoryEventStore:
    """In-memory event store."""

    def __init__(self) -> None:
        self._events: list[PageViewEvent] = []
        self._salt: bytes | None = None
        self._lock = Lock()

    # --- EventStorePort ---

    def insert(self, event: PageViewEvent) -> None:
        with self._lock:
            self._events.append(event)

    def delete_older_than(self, cutoff: datetime) -> int:
        with self._lock:
            kept = [e for e in self._events if e.timestamp >= cutoff]
            deleted = len(self._events) - len(kept)
            self._events = kept
            return deleted

    def get_salt(self) -> bytes | None:
        return self._salt

    def set_salt(self, salt: bytes) -> None:
        with self._lock:
            if self._salt is not None:
                raise StoreError("Salt already set")
            self._salt = salt

    def ping(self) -> None:
        """Health probe (always succeeds)."""

    # --- StatsRepoPort ---

    def _human(self, since: datetime) -> list[PageViewEvent]:
        return [e for e in self._events if not e.is_bot and e.timestamp >= since]

    def _page_views(self, since: datetime) -> list[PageViewEvent]:
        return [e for e in self._human(since) if e.duration_sec == 0]

    def _bots(self, since: datetime) -> list[PageViewEvent]:
        return [e for e in self._events if e.is_bot and e.timestamp >= since]

    def count_page_views(self, since: datetime) -> int:
        with self._lock:
            return len(self._page_views(since))

    def count_unique_visitors(self, since: datetime) -> int:
        with self._lock:
            return len({e.visitor_id for e in self._human(since)})

    def average_duration(self, since: datetime) -> float:
        with self._lock:
            durations = [e.duration_sec for e in self._human(since) if e.duration_sec > 0]
        if not durations:
            return 0.0
        return sum(durations) / len(durations)

    def count_bot_hits(self, since: datetime) -> int:
        with self._lock:
            return len(self._bots(since))

    def top_values(
        self,
        column: str,
        since: datetime,
        limit: int = 10,
        bots: bool = False,
    ) -> list[tuple[str, int]]:
        if column not in STAT_COLUMNS:
            raise ValueError(f"Unknown stats column: {column}")

        with self._lock:
            events = self._bots(since) if bots else self._page_views(since)
            counts = Counter(getattr(e, column) for e in events)

        counts.pop("", None)
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return ranked[:limit]

    # --- Test helpers ---

    def get_all(self) -> list[PageViewEvent]:
        """Get all stored events (for testing)."""
        with self._lock:
            return list(self._events)
