"""
Collect component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.core.entities import PageViewEvent

# --- Limits ---


@dataclass(frozen=True)
class CollectLimits:
    """Upper bounds for collection payload fields."""

    max_path_len: int = 2048
    max_referrer_len: int = 2048
    max_screen_size_len: int = 32
    max_user_agent_len: int = 512
    max_duration_sec: int = 86400


DEFAULT_LIMITS = CollectLimits()


# --- Validation Error ---


@dataclass(frozen=True)
class CollectValidationError:
    """Collect payload validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CollectRequest:
    """
    Raw collection payload as sent by the tracking script.

    Every field is optional; empty strings and zero are valid.
    """

    path: str = ""
    referrer: str = ""
    screen_size: str = ""
    user_agent: str = ""
    duration_sec: int = 0


@dataclass(frozen=True)
class CollectInput:
    """Collection request plus transport context."""

    request: CollectRequest
    client_ip: str
    header_user_agent: str = ""


# --- Output Models ---


@dataclass(frozen=True)
class CollectOutput:
    """Result of a collection attempt."""

    event: PageViewEvent | None
    accepted: bool
    errors: list[CollectValidationError] = field(default_factory=list)
