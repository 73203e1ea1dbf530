"""
Stats component - Dashboard aggregates.
"""

from .component import (
    period_start,
    run_query_bot_stats,
    run_query_summary,
    validate_query,
)
from .models import (
    DEFAULT_PERIOD,
    PERIODS,
    BotStats,
    BotStatsOutput,
    CountItem,
    Period,
    StatsQueryInput,
    StatsValidationError,
    SummaryOutput,
    SummaryStats,
)
from .ports import StatsRepoPort, TimePort

__all__ = [
    # Entry points
    "run_query_summary",
    "run_query_bot_stats",
    # Pure functions
    "period_start",
    "validate_query",
    # Models
    "BotStats",
    "BotStatsOutput",
    "CountItem",
    "DEFAULT_PERIOD",
    "PERIODS",
    "Period",
    "StatsQueryInput",
    "StatsValidationError",
    "SummaryOutput",
    "SummaryStats",
    # Ports
    "StatsRepoPort",
    "TimePort",
]
