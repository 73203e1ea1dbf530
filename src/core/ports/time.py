"""
Time provider interface.

All timestamps are UTC. Components take a TimePort so window and retention
logic can be tested with a fixed clock.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time (timezone-aware)."""
        ...
