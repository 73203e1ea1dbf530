"""
Stats component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class StatsRepoPort(Protocol):
    """
    Read side of the event store.

    Page views are human events with duration_sec == 0 (load beacons).
    Engagement beacons (duration_sec > 0) only feed the average duration.
    """

    def count_page_views(self, since: datetime) -> int:
        ...

    def count_unique_visitors(self, since: datetime) -> int:
        ...

    def average_duration(self, since: datetime) -> float:
        ...

    def count_bot_hits(self, since: datetime) -> int:
        ...

    def top_values(
        self,
        column: str,
        since: datetime,
        limit: int = 10,
        bots: bool = False,
    ) -> list[tuple[str, int]]:
        """Most frequent non-empty values of column, ordered by count then label."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
