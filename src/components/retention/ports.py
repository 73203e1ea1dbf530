"""
Retention component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class EventPurgePort(Protocol):
    """Delete side of the event store."""

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete events with timestamp strictly before cutoff. Returns rows deleted."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
