"""
User agent component - Browser/OS/device classification and bot detection.

Invariants:
- Pure and reentrant: no state, no I/O
- Never raises: unknown input degrades to "Unknown" / "Desktop"
- Axes are evaluated independently, first matching rule wins
- Bot detection is independent of browser classification
"""

from __future__ import annotations

from ._impl import (
    BROWSER_RULES,
    DEVICE_RULES,
    GENERIC_BOT_MARKERS,
    KNOWN_BOTS,
    OS_RULES,
)
from .models import OTHER_BOT, UNKNOWN, BotInfo, ClassificationResult, DeviceClass, UARule


def match_first(rules: tuple[UARule, ...], user_agent: str, default: str) -> str:
    """Return the label of the first rule matching the user agent."""
    for rule in rules:
        if rule.matches(user_agent):
            return rule.label
    return default


def classify_browser(user_agent: str | None) -> str:
    """Classify browser family."""
    return match_first(BROWSER_RULES, user_agent or "", UNKNOWN)


def classify_os(user_agent: str | None) -> str:
    """Classify operating system family."""
    return match_first(OS_RULES, user_agent or "", UNKNOWN)


def classify_device(user_agent: str | None) -> DeviceClass:
    """Classify device as Tablet, Mobile or Desktop."""
    label = match_first(DEVICE_RULES, user_agent or "", "Desktop")
    if label == "Tablet":
        return "Tablet"
    if label == "Mobile":
        return "Mobile"
    return "Desktop"


def classify_user_agent(user_agent: str | None) -> ClassificationResult:
    """
    Classify a raw user agent string.

    Args:
        user_agent: Raw User-Agent header value (may be empty).

    Returns:
        ClassificationResult with browser, os and device.
    """
    return ClassificationResult(
        browser=classify_browser(user_agent),
        os=classify_os(user_agent),
        device=classify_device(user_agent),
    )


# --- Bot detection ---


def detect_bot(user_agent: str | None) -> BotInfo:
    """
    Detect crawler traffic.

    Known signatures are matched case-insensitively in table order. Anything
    else carrying a generic marker ("bot", "crawler", "spider") is reported
    as "Other Bot". The generic fallback is a heuristic and can misfire on
    unrelated tokens that happen to contain "bot".
    """
    if not user_agent:
        return BotInfo(is_bot=False)

    ua_lower = user_agent.lower()

    for signature, name in KNOWN_BOTS:
        if signature in ua_lower:
            return BotInfo(is_bot=True, name=name)

    for marker in GENERIC_BOT_MARKERS:
        if marker in ua_lower:
            return BotInfo(is_bot=True, name=OTHER_BOT)

    return BotInfo(is_bot=False)


def is_bot(user_agent: str | None) -> bool:
    """Check whether the user agent belongs to a bot."""
    return detect_bot(user_agent).is_bot


def extract_bot_name(user_agent: str | None) -> str:
    """Return the bot display name, or "" for non-bot user agents."""
    return detect_bot(user_agent).name
