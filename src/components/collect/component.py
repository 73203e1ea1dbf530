"""
Collect component - Validation and ingestion of page view beacons.

Pipeline: validate -> detect bot / classify UA -> hash identity ->
normalize referrer -> insert.

Invariants:
- Oversized or out-of-range payloads are rejected before anything is stored
- Empty optional fields are accepted (minimal beacons)
- Raw IP and raw user agent never leave this function
- Bot hits are stored tagged, not dropped
"""

from __future__ import annotations

import logging
from datetime import datetime

from src.components.referrer import clean_referrer
from src.components.useragent import classify_user_agent, detect_bot
from src.core.entities import PageViewEvent

from .models import (
    DEFAULT_LIMITS,
    CollectInput,
    CollectLimits,
    CollectOutput,
    CollectRequest,
    CollectValidationError,
)
from .ports import EventSinkPort, HasherPort, TimePort

logger = logging.getLogger(__name__)


def _system_clock() -> TimePort:
    from src.adapters.clock import SystemClock

    return SystemClock()


# --- Validation (pure) ---


def _check_length(
    value: str,
    limit: int,
    field_name: str,
) -> CollectValidationError | None:
    if len(value) > limit:
        return CollectValidationError(
            code=f"{field_name}_too_long",
            message=f"Field '{field_name}' exceeds maximum length ({limit})",
            field_name=field_name,
        )
    return None


def validate_collect_request(
    req: CollectRequest,
    limits: CollectLimits = DEFAULT_LIMITS,
) -> list[CollectValidationError]:
    """
    Bounds-check a collection payload.

    Performs no normalization and no semantic checks (paths are not
    verified against real routes).

    Returns:
        List of validation errors (empty if valid).
    """
    checks = (
        _check_length(req.path, limits.max_path_len, "path"),
        _check_length(req.referrer, limits.max_referrer_len, "referrer"),
        _check_length(req.screen_size, limits.max_screen_size_len, "screen_size"),
        _check_length(req.user_agent, limits.max_user_agent_len, "user_agent"),
    )
    errors = [e for e in checks if e is not None]

    if req.duration_sec < 0 or req.duration_sec > limits.max_duration_sec:
        errors.append(
            CollectValidationError(
                code="invalid_duration",
                message=f"duration_sec must be between 0 and {limits.max_duration_sec}",
                field_name="duration_sec",
            )
        )

    return errors


# --- Event construction (pure) ---


def effective_user_agent(inp: CollectInput, limits: CollectLimits = DEFAULT_LIMITS) -> str:
    """Payload user agent, falling back to the (bounded) request header."""
    if inp.request.user_agent:
        return inp.request.user_agent
    return inp.header_user_agent[: limits.max_user_agent_len]


def build_event(
    inp: CollectInput,
    hasher: HasherPort,
    now: datetime,
    limits: CollectLimits = DEFAULT_LIMITS,
) -> PageViewEvent:
    """Derive the stored event from a validated request."""
    req = inp.request
    user_agent = effective_user_agent(inp, limits)

    bot = detect_bot(user_agent)
    ua = classify_user_agent(user_agent)

    return PageViewEvent(
        timestamp=now,
        visitor_id=hasher.generate_visitor_id(inp.client_ip, user_agent),
        ip_hash=hasher.hash_ip(inp.client_ip),
        path=req.path,
        referrer=clean_referrer(req.referrer),
        browser=ua.browser,
        os=ua.os,
        device=ua.device,
        screen_size=req.screen_size,
        duration_sec=req.duration_sec,
        is_bot=bot.is_bot,
        bot_name=bot.name,
    )


# --- Component Entry Point ---


def run_collect(
    inp: CollectInput,
    *,
    store: EventSinkPort,
    hasher: HasherPort,
    time_port: TimePort | None = None,
    limits: CollectLimits | None = None,
) -> CollectOutput:
    """
    Validate and persist a collection request.

    Args:
        inp: Request payload plus client IP and header user agent.
        store: Event sink.
        hasher: Visitor identity hasher.
        time_port: Optional time port.
        limits: Optional field limits.

    Returns:
        CollectOutput with the stored event, or the validation errors.

    Raises:
        StoreError: If the insert fails.
    """
    limits = limits or DEFAULT_LIMITS
    clock = time_port or _system_clock()

    errors = validate_collect_request(inp.request, limits)
    if errors:
        logger.debug("Rejected collect request: %s", ", ".join(e.code for e in errors))
        return CollectOutput(event=None, accepted=False, errors=errors)

    event = build_event(inp, hasher, clock.now_utc(), limits)
    store.insert(event)

    return CollectOutput(event=event, accepted=True)
