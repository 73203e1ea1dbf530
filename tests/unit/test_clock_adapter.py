from datetime import UTC, datetime, timedelta

from src.adapters.clock import FixedClock, SystemClock
from src.core.ports import TimePort


def test_system_clock():
    clock: TimePort = SystemClock()
    now = clock.now_utc()
    assert isinstance(now, datetime)
    assert now.tzinfo is not None
    # Sanity check: is it close to real now?
    diff = abs((datetime.now(UTC) - now).total_seconds())
    assert diff < 1.0


def test_fixed_clock():
    start = datetime(2026, 1, 1, tzinfo=UTC)
    clock = FixedClock(start)
    assert clock.now_utc() == start
    assert clock.now_utc() == start

    assert clock.advance(days=1, seconds=5) == start + timedelta(days=1, seconds=5)
    assert clock.now_utc() == start + timedelta(days=1, seconds=5)

    clock.set(start)
    assert clock.now_utc() == start
