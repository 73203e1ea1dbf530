"""
Unit tests for the retention component.

Test assertions:
- Cutoff is now - retention_days
- Only events strictly older than the cutoff are deleted
- Sweeps are idempotent
- Failed sweeps are logged and retried
- stop() joins the worker thread
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_store import InMemoryEventStore
from src.components.retention import (
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    RetentionScheduler,
    SweepState,
    compute_cutoff,
    run_sweep,
    start_retention_scheduler,
)
from src.core.entities import PageViewEvent
from src.core.ports.events import StoreError

NOW = datetime(2026, 6, 15, 12, 0, 0, tzinfo=UTC)


# --- Test Fixtures ---


def _event(ts: datetime) -> PageViewEvent:
    return PageViewEvent(timestamp=ts, visitor_id="v" * 16, ip_hash="i" * 16, path="/")


class RecordingStore:
    """Counts delete calls and signals each one."""

    def __init__(self, failures: int = 0) -> None:
        self.calls: list[datetime] = []
        self.failures = failures
        self.called = threading.Event()
        self.second_call = threading.Event()

    def delete_older_than(self, cutoff: datetime) -> int:
        self.calls.append(cutoff)
        if len(self.calls) >= 2:
            self.second_call.set()
        self.called.set()
        if len(self.calls) <= self.failures:
            raise StoreError("database is locked")
        return 0


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


# --- Cutoff ---


def test_compute_cutoff() -> None:
    assert compute_cutoff(NOW, 30) == NOW - timedelta(days=30)


class TestRunSweep:
    def test_defaults_to_system_clock(self) -> None:
        before = datetime.now(UTC)
        result = run_sweep(RecordingStore(), 7)
        after = datetime.now(UTC)

        assert before - timedelta(days=7) <= result.cutoff <= after - timedelta(days=7)

    def test_deletes_only_expired(self, clock) -> None:
        store = InMemoryEventStore()
        cutoff = NOW - timedelta(days=7)
        old = _event(cutoff - timedelta(seconds=1))
        boundary = _event(cutoff)
        fresh = _event(NOW)
        for e in (old, boundary, fresh):
            store.insert(e)

        result = run_sweep(store, 7, clock)

        assert result.cutoff == cutoff
        assert result.deleted == 1
        assert store.get_all() == [boundary, fresh]

    def test_idempotent(self, clock) -> None:
        store = InMemoryEventStore()
        store.insert(_event(NOW - timedelta(days=40)))
        store.insert(_event(NOW))

        first = run_sweep(store, 30, clock)
        second = run_sweep(store, 30, clock)

        assert first.deleted == 1
        assert second.deleted == 0
        assert len(store.get_all()) == 1

    def test_store_error_propagates(self, clock) -> None:
        with pytest.raises(StoreError):
            run_sweep(RecordingStore(failures=1), 30, clock)


# --- Scheduler ---


class TestRetentionScheduler:
    def test_rejects_bad_config(self) -> None:
        with pytest.raises(ValueError):
            RetentionScheduler(RecordingStore(), retention_days=0)
        with pytest.raises(ValueError):
            RetentionScheduler(RecordingStore(), interval_seconds=0)

    def test_defaults_keep_a_year_and_sweep_daily(self, clock) -> None:
        scheduler = RetentionScheduler(RecordingStore(), time_port=clock)

        assert DEFAULT_SWEEP_INTERVAL_SECONDS == 86400.0
        assert scheduler.run_once().cutoff == NOW - timedelta(days=365)

    def test_run_once(self, clock) -> None:
        store = RecordingStore()
        scheduler = RetentionScheduler(store, 30, 60.0, clock)

        result = scheduler.run_once()

        assert result.cutoff == NOW - timedelta(days=30)
        assert scheduler.last_result == result
        assert scheduler.state == SweepState.IDLE
        assert not scheduler.is_running

    def test_sweeps_on_start(self, clock) -> None:
        store = RecordingStore()
        scheduler = RetentionScheduler(store, 30, 3600.0, clock)

        scheduler.start()
        try:
            assert store.called.wait(timeout=5.0)
            assert scheduler.is_running
        finally:
            scheduler.stop()

        assert store.calls[0] == NOW - timedelta(days=30)

    def test_stop_joins_thread(self, clock) -> None:
        scheduler = RetentionScheduler(RecordingStore(), 30, 3600.0, clock)
        scheduler.start()
        thread = scheduler._thread

        scheduler.stop()

        assert thread is not None
        assert not thread.is_alive()
        assert not scheduler.is_running

    def test_start_and_stop_are_idempotent(self, clock) -> None:
        store = RecordingStore()
        scheduler = RetentionScheduler(store, 30, 3600.0, clock)
        scheduler.start()
        scheduler.start()
        store.called.wait(timeout=5.0)
        scheduler.stop()
        scheduler.stop()

        assert len(store.calls) == 1

    def test_failure_is_retried(self, clock, caplog) -> None:
        store = RecordingStore(failures=1)
        scheduler = RetentionScheduler(store, 30, 0.01, clock)

        scheduler.start()
        try:
            assert store.second_call.wait(timeout=5.0)
        finally:
            scheduler.stop()

        assert "Retention sweep failed" in caplog.text


def test_start_retention_scheduler_returns_stop(clock) -> None:
    store = RecordingStore()
    before = {t.name for t in threading.enumerate()}

    stop = start_retention_scheduler(store, 30, 3600.0, clock)
    assert store.called.wait(timeout=5.0)
    stop()

    after = {t.name for t in threading.enumerate()}
    assert "retention-sweeper" not in after - before
