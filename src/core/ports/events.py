"""
Event store interface.

The ingestion core only assumes durable inserts, deletion by age, and a
single persisted salt. Any storage engine satisfying this port can back it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.core.entities import PageViewEvent


class StoreError(Exception):
    """
    Transient storage failure.

    Raised by adapters for insert, delete or salt I/O failures. Request-path
    callers surface it as a server error; the retention loop retries later.
    """


class EventStorePort(Protocol):
    """Event store interface."""

    def insert(self, event: PageViewEvent) -> None:
        """Persist an event. Durable before returning."""
        ...

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete events with timestamp < cutoff. Returns rows deleted."""
        ...

    def get_salt(self) -> bytes | None:
        """Return the persisted salt, or None."""
        ...

    def set_salt(self, salt: bytes) -> None:
        """Persist the salt."""
        ...
