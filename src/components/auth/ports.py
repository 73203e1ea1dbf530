from typing import Protocol


class RateLimiterPort(Protocol):
    """Per-IP failed-login throttle."""

    def check_rate_limit(self, ip: str) -> bool:
        """Return True if ip is currently blocked."""
        ...

    def record_failure(self, ip: str) -> None:
        ...
