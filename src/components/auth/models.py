from dataclasses import dataclass, field

DEFAULT_USERNAME = "admin"
GENERATED_PASSWORD_BYTES = 16


@dataclass(frozen=True)
class DashboardCredentials:
    username: str
    password: str = field(repr=False)


@dataclass
class LoginInput:
    username: str
    password: str
    source_ip: str


@dataclass
class AuthOutput:
    success: bool = False
    rate_limited: bool = False
    error: str | None = None
