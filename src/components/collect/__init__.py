"""
Collect component - Beacon validation and ingestion.
"""

from .component import (
    build_event,
    effective_user_agent,
    run_collect,
    validate_collect_request,
)
from .models import (
    DEFAULT_LIMITS,
    CollectInput,
    CollectLimits,
    CollectOutput,
    CollectRequest,
    CollectValidationError,
)
from .ports import EventSinkPort, HasherPort, TimePort

__all__ = [
    # Entry point
    "run_collect",
    # Pure functions
    "validate_collect_request",
    "build_event",
    "effective_user_agent",
    # Models
    "CollectInput",
    "CollectLimits",
    "CollectOutput",
    "CollectRequest",
    "CollectValidationError",
    "DEFAULT_LIMITS",
    # Ports
    "EventSinkPort",
    "HasherPort",
    "TimePort",
]
