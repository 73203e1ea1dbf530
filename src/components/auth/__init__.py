"""
Auth component - Dashboard authentication.

Single operator account checked in constant time, behind a per-IP
failed-login throttle.
"""

from .component import (
    DashboardAuthenticator,
    resolve_credentials,
    run_login,
)
from .models import (
    DEFAULT_USERNAME,
    AuthOutput,
    DashboardCredentials,
    LoginInput,
)
from .ports import RateLimiterPort

__all__ = [
    # Entry points
    "run_login",
    "DashboardAuthenticator",
    "resolve_credentials",
    # Models
    "AuthOutput",
    "DashboardCredentials",
    "DEFAULT_USERNAME",
    "LoginInput",
    # Ports
    "RateLimiterPort",
]
