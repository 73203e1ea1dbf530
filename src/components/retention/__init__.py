"""
Retention component - Periodic deletion of expired events.
"""

from .component import (
    RetentionScheduler,
    compute_cutoff,
    run_sweep,
    start_retention_scheduler,
)
from .models import (
    DEFAULT_RETENTION_DAYS,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    SweepResult,
    SweepState,
)
from .ports import EventPurgePort, TimePort

__all__ = [
    # Entry points
    "RetentionScheduler",
    "start_retention_scheduler",
    "run_sweep",
    # Pure functions
    "compute_cutoff",
    # Models
    "DEFAULT_RETENTION_DAYS",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "SweepResult",
    "SweepState",
    # Ports
    "EventPurgePort",
    "TimePort",
]
