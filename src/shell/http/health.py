"""
Health endpoints.

Key behaviors:
- /health: status, server time (RFC 3339 UTC) and dependency checks;
  503 when any check fails
- /health/live: liveness probe (process alive)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

# --- Types ---


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "ok"
    UNHEALTHY = "unhealthy"


@dataclass
class CheckResult:
    """Result of a single health check."""

    name: str
    status: HealthStatus
    message: str = ""
    latency_ms: float = 0.0


class HealthCheck(Protocol):
    """Protocol for health checks."""

    name: str

    def check(self) -> CheckResult:
        """Run the health check and return result."""
        ...


class HealthCheckRegistry:
    """Registry of health checks to run."""

    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    def run_all(self) -> list[CheckResult]:
        return [check.check() for check in self._checks]

    def clear(self) -> None:
        self._checks = []


# --- Built-in Checks ---


class DatabaseCheck:
    """Event store connectivity check."""

    name = "database"

    def __init__(self, ping: Callable[[], None]) -> None:
        self._ping = ping

    def check(self) -> CheckResult:
        start = time.perf_counter()
        try:
            self._ping()
        except Exception as e:
            return CheckResult(
                name=self.name,
                status=HealthStatus.UNHEALTHY,
                message=f"Database error: {e!s}",
                latency_ms=(time.perf_counter() - start) * 1000,
            )
        return CheckResult(
            name=self.name,
            status=HealthStatus.HEALTHY,
            message="Database connected",
            latency_ms=(time.perf_counter() - start) * 1000,
        )


def rfc3339_now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")


# --- FastAPI Router ---


def create_health_router(registry: HealthCheckRegistry) -> APIRouter:
    """
    Create FastAPI router for health endpoints.

    Args:
        registry: Checks run on every /health request

    Returns:
        FastAPI router with health endpoints
    """
    router = APIRouter(tags=["health"])

    @router.get(
        "/health",
        response_model=None,
        responses={
            200: {"description": "Service is healthy"},
            503: {"description": "Service is unhealthy"},
        },
    )
    def health_check() -> JSONResponse:
        results = registry.run_all()
        healthy = all(r.status == HealthStatus.HEALTHY for r in results)
        overall = HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY

        response = {
            "status": overall.value,
            "time": rfc3339_now(),
            "checks": [
                {
                    "name": r.name,
                    "status": r.status.value,
                    "message": r.message,
                    "latency_ms": round(r.latency_ms, 2),
                }
                for r in results
            ],
        }
        status_code = (
            status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        return JSONResponse(content=response, status_code=status_code)

    @router.get("/health/live", response_model=None)
    def liveness_check() -> JSONResponse:
        """Process is alive and responding."""
        return JSONResponse(content={"alive": True}, status_code=status.HTTP_200_OK)

    return router
