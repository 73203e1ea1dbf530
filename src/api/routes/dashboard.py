"""
Dashboard API Routes.

Aggregated visitor and crawler statistics, behind HTTP Basic auth.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.deps import get_store, require_dashboard_user
from src.api.routes.collect import error_detail
from src.api.schemas import BotStatsResponse, ErrorResponse, SummaryResponse
from src.components.stats import (
    DEFAULT_PERIOD,
    StatsQueryInput,
    StatsRepoPort,
    run_query_bot_stats,
    run_query_summary,
)

router = APIRouter(dependencies=[Depends(require_dashboard_user)])


@router.get(
    "/stats",
    response_model=SummaryResponse,
    responses={400: {"model": ErrorResponse}, 401: {"description": "Not authenticated"}},
)
def get_stats(
    period: str = Query(DEFAULT_PERIOD, description="today, week, month or year"),
    limit: int = Query(10, description="Entries per top list"),
    repo: StatsRepoPort = Depends(get_store),
) -> SummaryResponse:
    out = run_query_summary(StatsQueryInput(period=period, limit=limit), repo=repo)
    if not out.success or out.stats is None:
        raise HTTPException(status_code=400, detail=error_detail(out.errors))
    return SummaryResponse(period=out.period, **asdict(out.stats))


@router.get(
    "/bot-stats",
    response_model=BotStatsResponse,
    responses={400: {"model": ErrorResponse}, 401: {"description": "Not authenticated"}},
)
def get_bot_stats(
    period: str = Query(DEFAULT_PERIOD, description="today, week, month or year"),
    limit: int = Query(10, description="Entries per top list"),
    repo: StatsRepoPort = Depends(get_store),
) -> BotStatsResponse:
    out = run_query_bot_stats(StatsQueryInput(period=period, limit=limit), repo=repo)
    if not out.success or out.stats is None:
        raise HTTPException(status_code=400, detail=error_detail(out.errors))
    return BotStatsResponse(period=out.period, **asdict(out.stats))
