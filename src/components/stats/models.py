"""
Stats component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# --- Validation Error ---


@dataclass(frozen=True)
class StatsValidationError:
    """Stats query validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Enums ---


Period = Literal["today", "week", "month", "year"]
PERIODS: tuple[str, ...] = ("today", "week", "month", "year")
DEFAULT_PERIOD: Period = "week"
DEFAULT_TOP_LIMIT = 10


# --- Input Models ---


@dataclass(frozen=True)
class StatsQueryInput:
    """Input for dashboard queries."""

    period: str = DEFAULT_PERIOD
    limit: int = DEFAULT_TOP_LIMIT


# --- Output Models ---


@dataclass(frozen=True)
class CountItem:
    """Label with hit count."""

    label: str
    count: int


@dataclass(frozen=True)
class SummaryStats:
    """Human traffic summary."""

    unique_visitors: int
    page_views: int
    avg_duration_sec: float
    top_pages: tuple[CountItem, ...] = ()
    top_referrers: tuple[CountItem, ...] = ()
    browsers: tuple[CountItem, ...] = ()
    operating_systems: tuple[CountItem, ...] = ()
    devices: tuple[CountItem, ...] = ()
    screen_sizes: tuple[CountItem, ...] = ()


@dataclass(frozen=True)
class BotStats:
    """Crawler traffic summary."""

    total_hits: int
    top_bots: tuple[CountItem, ...] = ()
    top_paths: tuple[CountItem, ...] = ()


@dataclass(frozen=True)
class SummaryOutput:
    """Output for summary query."""

    period: str
    stats: SummaryStats | None
    errors: list[StatsValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class BotStatsOutput:
    """Output for bot stats query."""

    period: str
    stats: BotStats | None
    errors: list[StatsValidationError] = field(default_factory=list)
    success: bool = True
