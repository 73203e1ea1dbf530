"""
User agent component models.

Test assertions: classifier precedence, device precedence, bot detection
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DeviceClass = Literal["Desktop", "Mobile", "Tablet"]

UNKNOWN = "Unknown"
OTHER_BOT = "Other Bot"


# --- Rule Table Entry ---


@dataclass(frozen=True)
class UARule:
    """
    Single precedence rule for one classification axis.

    Matches when any token in ``contains`` occurs in the user agent and
    none of the tokens in ``excludes`` do. Matching is case-sensitive.
    """

    label: str
    contains: tuple[str, ...]
    excludes: tuple[str, ...] = ()

    def matches(self, user_agent: str) -> bool:
        if not any(token in user_agent for token in self.contains):
            return False
        return not any(token in user_agent for token in self.excludes)


# --- Results ---


@dataclass(frozen=True)
class ClassificationResult:
    """Coarse browser/OS/device classification."""

    browser: str = UNKNOWN
    os: str = UNKNOWN
    device: DeviceClass = "Desktop"


@dataclass(frozen=True)
class BotInfo:
    """Bot detection result."""

    is_bot: bool
    name: str = ""

    def __bool__(self) -> bool:
        return self.is_bot
