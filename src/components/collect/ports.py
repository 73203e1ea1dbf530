"""
Collect component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.core.entities import PageViewEvent


class EventSinkPort(Protocol):
    """Write side of the event store."""

    def insert(self, event: PageViewEvent) -> None:
        """Persist an event. Raises StoreError on failure."""
        ...


class HasherPort(Protocol):
    """Visitor identity hasher."""

    def hash_ip(self, ip: str) -> str:
        ...

    def generate_visitor_id(self, ip: str, user_agent: str) -> str:
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
