import logging
import sys
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.adapters.sqlite_db import SQLiteEventStore
from src.api.deps import Settings, get_settings
from src.api.routes import collect, dashboard
from src.app_shell.config import dashboard_credentials, load_startup_rules
from src.app_shell.rate_limit import AuthRateLimiter
from src.components.auth import DashboardAuthenticator
from src.components.retention import start_retention_scheduler
from src.components.visitor import SaltInitError, create_visitor_hasher
from src.core.ports import StoreError
from src.rules.loader import collect_limits
from src.shell.http.health import DatabaseCheck, HealthCheckRegistry, create_health_router

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("nanolytica.access")

MAX_BODY_BYTES = 10 * 1024

Receive = Callable[[], Awaitable[dict[str, Any]]]
Send = Callable[[dict[str, Any]], Awaitable[None]]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_startup_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    try:
        store = SQLiteEventStore(settings.db_path)
    except StoreError as e:
        logger.critical("Cannot open database %s: %s", settings.db_path, e)
        sys.exit(1)
    logger.info("Event store opened at %s", settings.db_path)

    try:
        hasher = create_visitor_hasher(store)
    except SaltInitError as e:
        logger.critical("Salt initialization failed: %s", e)
        store.close()
        sys.exit(1)

    app.state.store = store
    app.state.hasher = hasher
    app.state.collect_limits = collect_limits(rules.collect)
    app.state.authenticator = DashboardAuthenticator(
        dashboard_credentials(settings.username, settings.password),
        AuthRateLimiter.from_rules(rules.auth),
    )
    app.state.health.register(DatabaseCheck(store.ping))

    stop_retention = start_retention_scheduler(
        store,
        rules.retention.retention_days,
        rules.retention.sweep_interval_seconds,
    )

    yield

    stop_retention()
    app.state.health.clear()
    store.close()
    logger.info("Shutdown complete")


async def access_log(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    start = time.perf_counter()
    response = await call_next(request)
    access_logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - start) * 1000,
    )
    return response


SECURITY_HEADERS = {
    "X-XSS-Protection": "1; mode=block",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; connect-src 'self'; frame-ancestors 'none'"
    ),
}


async def security_headers(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


class BodyLimitMiddleware:
    """
    Reject request bodies larger than max_bytes with 413.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are buffered up to the cap and replayed downstream.
    """

    def __init__(self, app: Any, max_bytes: int = MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: dict[str, Any], receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = _header(scope, b"content-length")
        if length is not None and length.isdigit():
            if int(length) > self.max_bytes:
                await _too_large(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        buffered: list[dict[str, Any]] = []
        size = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            size += len(message.get("body", b""))
            if size > self.max_bytes:
                await _too_large(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> dict[str, Any]:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)


def _header(scope: dict[str, Any], name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1").strip()
    return None


async def _too_large(scope: dict[str, Any], receive: Receive, send: Send) -> None:
    response = JSONResponse(status_code=413, content={"detail": "Request body too large"})
    await response(scope, receive, send)


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Nanolytica API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.settings = settings or get_settings()
    app.state.health = HealthCheckRegistry()

    # --- Routers ---
    app.include_router(create_health_router(app.state.health))
    app.include_router(collect.router, prefix="/api/analytics", tags=["Collect"])
    app.include_router(dashboard.router, prefix="/api/analytics", tags=["Dashboard"])

    # Beacons arrive from any site running the tracker
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(BodyLimitMiddleware, max_bytes=MAX_BODY_BYTES)
    app.middleware("http")(security_headers)
    app.middleware("http")(access_log)

    return app


app = create_app()
