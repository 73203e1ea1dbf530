from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock
from src.adapters.memory_store import InMemoryEventStore
from src.api.routes import collect, dashboard
from src.app_shell.rate_limit import AuthRateLimiter
from src.components.auth import DashboardAuthenticator, DashboardCredentials
from src.components.collect import DEFAULT_LIMITS
from src.components.visitor import VisitorHasher

PROJECT_ROOT = Path(__file__).parent.parent

DASHBOARD_USER = "owner"
DASHBOARD_PASSWORD = "correct-horse"


@pytest.fixture
def fixed_clock():
    return FixedClock(datetime(2026, 4, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def memory_store():
    return InMemoryEventStore()


@pytest.fixture
def hasher():
    return VisitorHasher(b"test-salt-0123456789abcdef")


@pytest.fixture
def rate_limiter():
    return AuthRateLimiter(window_seconds=300, max_attempts=3)


@pytest.fixture
def api_app(memory_store, hasher, rate_limiter):
    """
    Routers mounted on a bare app with in-memory state.
    No lifespan: nothing touches disk.
    """
    app = FastAPI()
    app.include_router(collect.router, prefix="/api/analytics")
    app.include_router(dashboard.router, prefix="/api/analytics")
    app.state.store = memory_store
    app.state.hasher = hasher
    app.state.collect_limits = DEFAULT_LIMITS
    app.state.authenticator = DashboardAuthenticator(
        DashboardCredentials(DASHBOARD_USER, DASHBOARD_PASSWORD), rate_limiter
    )
    return app


@pytest.fixture
def api_client(api_app):
    return TestClient(api_app)


@pytest.fixture
def dashboard_auth():
    return (DASHBOARD_USER, DASHBOARD_PASSWORD)
