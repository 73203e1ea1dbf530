import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from src.components.auth import DashboardAuthenticator
from src.components.collect import DEFAULT_LIMITS, CollectLimits
from src.components.visitor import VisitorHasher
from src.core.ports import EventStorePort

TRUTHY = {"1", "true", "yes", "on"}


# --- Settings ---
class Settings:
    def __init__(
        self,
        db_path: str | None = None,
        rules_path: Path | None = None,
        username: str | None = None,
        password: str | None = None,
        trust_proxy: bool | None = None,
    ) -> None:
        self.base_dir = Path(os.getcwd())
        self.db_path = db_path or os.environ.get(
            "NANOLYTICA_DB_PATH", str(self.base_dir / "data" / "nanolytica.db")
        )
        env_rules = os.environ.get("NANOLYTICA_RULES_PATH")
        self.rules_path = rules_path or (
            Path(env_rules) if env_rules else self.base_dir / "rules.yaml"
        )
        self.username = username or os.environ.get("NANOLYTICA_USERNAME")
        self.password = password or os.environ.get("NANOLYTICA_PASSWORD")
        if trust_proxy is None:
            trust_proxy = os.environ.get("NANOLYTICA_TRUST_PROXY", "").lower() in TRUTHY
        self.trust_proxy = trust_proxy


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Runtime state (populated by the app lifespan) ---
def get_store(request: Request) -> EventStorePort:
    return request.app.state.store


def get_hasher(request: Request) -> VisitorHasher:
    return request.app.state.hasher


def get_collect_limits(request: Request) -> CollectLimits:
    return getattr(request.app.state, "collect_limits", DEFAULT_LIMITS)


def get_authenticator(request: Request) -> DashboardAuthenticator:
    return request.app.state.authenticator


# --- Client ---
def get_client_ip(request: Request) -> str:
    """Client address: first X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


def get_login_ip(request: Request) -> str:
    """
    Address used to throttle dashboard logins.

    Forwarding headers are client-controlled, so they only count when the
    app is configured to sit behind a trusted proxy.
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.trust_proxy:
        return get_client_ip(request)
    return request.client.host if request.client else "unknown"


# --- Auth ---
basic_scheme = HTTPBasic(auto_error=False, realm="Nanolytica")


def require_dashboard_user(
    request: Request,
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_scheme)],
    authenticator: DashboardAuthenticator = Depends(get_authenticator),
) -> str:
    if credentials is None or not authenticator.check(
        credentials.username, credentials.password, get_login_ip(request)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": 'Basic realm="Nanolytica"'},
        )
    return credentials.username
