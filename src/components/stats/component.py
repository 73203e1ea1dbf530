"""
Stats component - Dashboard aggregates over a rolling period.

Human traffic and crawler traffic are reported separately; bot hits
never count towards visitors, page views or durations.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from .models import (
    PERIODS,
    BotStats,
    BotStatsOutput,
    CountItem,
    StatsQueryInput,
    StatsValidationError,
    SummaryOutput,
    SummaryStats,
)
from .ports import StatsRepoPort, TimePort

MAX_TOP_LIMIT = 100

_PERIOD_DAYS = {"week": 7, "month": 30, "year": 365}


def _system_clock() -> TimePort:
    from src.adapters.clock import SystemClock

    return SystemClock()


def period_start(period: str, now: datetime) -> datetime:
    """
    Start of the reporting window.

    today is midnight UTC; the other periods are rolling windows.

    Raises:
        ValueError: If period is unknown.
    """
    if period == "today":
        return now.astimezone(UTC).replace(hour=0, minute=0, second=0, microsecond=0)
    days = _PERIOD_DAYS.get(period)
    if days is None:
        raise ValueError(f"Unknown period: {period}")
    return now - timedelta(days=days)


def validate_query(inp: StatsQueryInput) -> list[StatsValidationError]:
    errors: list[StatsValidationError] = []
    if inp.period not in PERIODS:
        errors.append(
            StatsValidationError(
                code="invalid_period",
                message=f"period must be one of: {', '.join(PERIODS)}",
                field_name="period",
            )
        )
    if not 1 <= inp.limit <= MAX_TOP_LIMIT:
        errors.append(
            StatsValidationError(
                code="invalid_limit",
                message=f"limit must be between 1 and {MAX_TOP_LIMIT}",
                field_name="limit",
            )
        )
    return errors


def _top(
    repo: StatsRepoPort,
    column: str,
    since: datetime,
    limit: int,
    bots: bool = False,
) -> tuple[CountItem, ...]:
    return tuple(
        CountItem(label=label, count=count)
        for label, count in repo.top_values(column, since, limit=limit, bots=bots)
    )


# --- Component Entry Points ---


def run_query_summary(
    inp: StatsQueryInput,
    *,
    repo: StatsRepoPort,
    time_port: TimePort | None = None,
) -> SummaryOutput:
    """
    Query human traffic for the dashboard.

    Args:
        inp: Period and list size.
        repo: Stats repository port.
        time_port: Optional time port.

    Returns:
        SummaryOutput with stats, or validation errors.
    """
    errors = validate_query(inp)
    if errors:
        return SummaryOutput(period=inp.period, stats=None, errors=errors, success=False)

    now = (time_port or _system_clock()).now_utc()
    since = period_start(inp.period, now)

    stats = SummaryStats(
        unique_visitors=repo.count_unique_visitors(since),
        page_views=repo.count_page_views(since),
        avg_duration_sec=round(repo.average_duration(since), 1),
        top_pages=_top(repo, "path", since, inp.limit),
        top_referrers=_top(repo, "referrer", since, inp.limit),
        browsers=_top(repo, "browser", since, inp.limit),
        operating_systems=_top(repo, "os", since, inp.limit),
        devices=_top(repo, "device", since, inp.limit),
        screen_sizes=_top(repo, "screen_size", since, inp.limit),
    )
    return SummaryOutput(period=inp.period, stats=stats)


def run_query_bot_stats(
    inp: StatsQueryInput,
    *,
    repo: StatsRepoPort,
    time_port: TimePort | None = None,
) -> BotStatsOutput:
    """Query crawler traffic for the dashboard."""
    errors = validate_query(inp)
    if errors:
        return BotStatsOutput(period=inp.period, stats=None, errors=errors, success=False)

    now = (time_port or _system_clock()).now_utc()
    since = period_start(inp.period, now)

    stats = BotStats(
        total_hits=repo.count_bot_hits(since),
        top_bots=_top(repo, "bot_name", since, inp.limit, bots=True),
        top_paths=_top(repo, "path", since, inp.limit, bots=True),
    )
    return BotStatsOutput(period=inp.period, stats=stats)
