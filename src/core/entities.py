"""
Domain entities for nanolytica.

Only pseudonymous, coarse data is persisted: no raw IPs, no raw user agents.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

__all__ = [
    "PageViewEvent",
]


@dataclass(frozen=True)
class PageViewEvent:
    """
    Stored page view or bot hit.

    Bot hits are tagged with ``is_bot`` and ``bot_name`` rather than dropped
    so they can be reported separately from human traffic.
    """

    timestamp: datetime
    visitor_id: str
    ip_hash: str
    path: str = ""
    referrer: str = "Direct"
    browser: str = "Unknown"
    os: str = "Unknown"
    device: str = "Desktop"
    screen_size: str = ""
    duration_sec: int = 0
    is_bot: bool = False
    bot_name: str = ""
