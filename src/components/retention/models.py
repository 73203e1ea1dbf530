"""
Retention component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

DEFAULT_RETENTION_DAYS = 365
DEFAULT_SWEEP_INTERVAL_SECONDS = 86400.0


class SweepState(str, Enum):
    """Scheduler state."""

    IDLE = "idle"
    SWEEPING = "sweeping"


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one retention sweep."""

    cutoff: datetime
    deleted: int
