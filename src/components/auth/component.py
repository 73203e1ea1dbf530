import hmac
import logging
import secrets

from .models import (
    DEFAULT_USERNAME,
    GENERATED_PASSWORD_BYTES,
    AuthOutput,
    DashboardCredentials,
    LoginInput,
)
from .ports import RateLimiterPort

logger = logging.getLogger(__name__)


def resolve_credentials(
    username: str | None, password: str | None
) -> tuple[DashboardCredentials, bool]:
    """
    Build dashboard credentials from configuration.

    Both values must be set to be used. Otherwise the login falls back to
    the default username with a random password.
    Returns the credentials and whether the password was generated.
    """
    if username and password:
        return DashboardCredentials(username, password), False
    password = secrets.token_hex(GENERATED_PASSWORD_BYTES)
    return DashboardCredentials(DEFAULT_USERNAME, password), True


def _equal(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class DashboardAuthenticator:
    def __init__(self, credentials: DashboardCredentials, rate_limiter: RateLimiterPort):
        self.credentials = credentials
        self.rate_limiter = rate_limiter

    def check(self, username: str, password: str, source_ip: str) -> bool:
        return run_login(LoginInput(username, password, source_ip), self).success


def run_login(inp: LoginInput, authenticator: DashboardAuthenticator) -> AuthOutput:
    limiter = authenticator.rate_limiter
    if limiter.check_rate_limit(inp.source_ip):
        logger.warning("Dashboard login blocked for %s (too many failures)", inp.source_ip)
        return AuthOutput(success=False, rate_limited=True, error="Too many attempts")

    creds = authenticator.credentials
    # Both comparisons always run
    user_ok = _equal(inp.username, creds.username)
    pass_ok = _equal(inp.password, creds.password)
    if user_ok and pass_ok:
        return AuthOutput(success=True)

    limiter.record_failure(inp.source_ip)
    logger.info("Dashboard login failed from %s", inp.source_ip)
    return AuthOutput(success=False, error="Invalid credentials")
