"""
Retention component - Time-bounded deletion of stored events.

A single daemon thread sweeps on start and then once per interval.
Each sweep deletes events older than now - retention_days.

Invariants:
- The cutoff only moves forward, so a missed sweep is healed by the next one
- Re-running a sweep against an unchanged cutoff deletes nothing and is not an error
- A failed sweep is logged and retried on the next tick; the thread keeps running
- stop() returns only after the worker thread has exited
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta

from .models import (
    DEFAULT_RETENTION_DAYS,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    SweepResult,
    SweepState,
)
from .ports import EventPurgePort, TimePort

logger = logging.getLogger(__name__)


def _system_clock() -> TimePort:
    from src.adapters.clock import SystemClock

    return SystemClock()


def compute_cutoff(now: datetime, retention_days: int) -> datetime:
    """Events with timestamp strictly before the returned instant are expired."""
    return now - timedelta(days=retention_days)


def run_sweep(
    store: EventPurgePort,
    retention_days: int,
    time_port: TimePort | None = None,
) -> SweepResult:
    """
    Run one retention sweep.

    Raises:
        StoreError: If the delete fails.
    """
    clock = time_port or _system_clock()
    cutoff = compute_cutoff(clock.now_utc(), retention_days)
    deleted = store.delete_older_than(cutoff)
    logger.info("Retention sweep: cutoff=%s deleted=%d", cutoff.isoformat(), deleted)
    return SweepResult(cutoff=cutoff, deleted=deleted)


class RetentionScheduler:
    """
    Background retention sweeper.

    Runs a daemon thread that sweeps immediately and then
    every interval_seconds until stopped.
    """

    def __init__(
        self,
        store: EventPurgePort,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        time_port: TimePort | None = None,
    ) -> None:
        if retention_days < 1:
            raise ValueError("retention_days must be at least 1")
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self._store = store
        self._retention_days = retention_days
        self._interval = interval_seconds
        self._time = time_port or _system_clock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._sweep_lock = threading.Lock()
        self._running = False
        self.state = SweepState.IDLE
        self.last_result: SweepResult | None = None

    def start(self) -> None:
        """Start the background sweeper."""
        if self._running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop,
            name="retention-sweeper",
            daemon=True,
        )
        self._thread.start()
        self._running = True
        logger.info(
            "Retention scheduler started (retention: %d days, interval: %.1fs)",
            self._retention_days,
            self._interval,
        )

    def stop(self) -> None:
        """Stop the sweeper and wait for the worker thread to exit."""
        if not self._running:
            return

        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
        self._running = False
        logger.info("Retention scheduler stopped")

    def run_once(self) -> SweepResult:
        """Sweep now, on the caller's thread. Store errors propagate."""
        with self._sweep_lock:
            self.state = SweepState.SWEEPING
            try:
                result = run_sweep(self._store, self._retention_days, self._time)
                self.last_result = result
                return result
            finally:
                self.state = SweepState.IDLE

    @property
    def is_running(self) -> bool:
        """Check if the sweeper thread is active."""
        return self._running

    def _tick(self) -> None:
        try:
            self.run_once()
        except Exception:
            logger.exception("Retention sweep failed; retrying next tick")

    def _loop(self) -> None:
        self._tick()
        while not self._stop_event.wait(timeout=self._interval):
            self._tick()


def start_retention_scheduler(
    store: EventPurgePort,
    retention_days: int = DEFAULT_RETENTION_DAYS,
    interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    time_port: TimePort | None = None,
) -> Callable[[], None]:
    """
    Start a retention sweeper.

    Returns:
        Stop function; calling it terminates and joins the worker thread.
    """
    scheduler = RetentionScheduler(store, retention_days, interval_seconds, time_port)
    scheduler.start()
    return scheduler.stop
