from datetime import UTC, datetime, timedelta
from threading import Lock
from typing import Protocol

from src.rules.models import AuthRules


class TimePort(Protocol):
    """Protocol for time operations (enables testing with deterministic time)."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...


class SystemTimeAdapter:
    """Production time adapter using system clock."""

    def now_utc(self) -> datetime:
        return datetime.now(UTC)


class AuthRateLimiter:
    """
    Per-IP failed-login throttle.

    Only failures are recorded. An IP is blocked while it has
    max_attempts or more failures inside the sliding window.
    State is in-memory and per-process.
    """

    def __init__(
        self,
        window_seconds: int = 300,
        max_attempts: int = 5,
        time_port: TimePort | None = None,
    ):
        self.window_seconds = window_seconds
        self.max_attempts = max_attempts
        self._time = time_port if time_port is not None else SystemTimeAdapter()
        self._failures: dict[str, list[datetime]] = {}
        self._lock = Lock()

    @classmethod
    def from_rules(
        cls,
        rules: AuthRules,
        time_port: TimePort | None = None,
    ) -> "AuthRateLimiter":
        return cls(rules.window_seconds, rules.max_attempts, time_port)

    def _cutoff(self) -> datetime:
        return self._time.now_utc() - timedelta(seconds=self.window_seconds)

    def _prune(self, ip: str) -> list[datetime]:
        cutoff = self._cutoff()
        recent = [t for t in self._failures.get(ip, []) if t > cutoff]
        if recent:
            self._failures[ip] = recent
        else:
            self._failures.pop(ip, None)
        return recent

    def check_rate_limit(self, ip: str) -> bool:
        """Return True if ip is currently blocked."""
        if self.max_attempts <= 0:
            return True

        with self._lock:
            return len(self._prune(ip)) >= self.max_attempts

    def _prune_expired(self) -> None:
        cutoff = self._cutoff()
        stale = [ip for ip, times in self._failures.items() if times[-1] <= cutoff]
        for ip in stale:
            del self._failures[ip]

    def record_failure(self, ip: str) -> None:
        with self._lock:
            self._prune_expired()
            self._prune(ip)
            self._failures.setdefault(ip, []).append(self._time.now_utc())

    def tracked_ips(self) -> int:
        """Number of IPs currently tracked."""
        with self._lock:
            return len(self._failures)
