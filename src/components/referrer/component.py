"""
Referrer component - Referrer URL normalization.

Reduces a raw referrer to a display label:
- empty -> "Direct"
- known search engine host -> engine name
- anything else -> host without a leading "www."

Invariants:
- Pure and reentrant
- Never raises; unparseable input falls back to the trimmed raw string
"""

from __future__ import annotations

from urllib.parse import urlparse

from .models import DIRECT, SEARCH_ENGINES


def extract_host(raw: str) -> str | None:
    """
    Extract the lowercase host from a URL-like string.

    Scheme-less input ("example.com/page") is treated as a network path.
    Returns None when no host can be found.
    """
    candidate = raw if "//" in raw else f"//{raw}"
    try:
        host = urlparse(candidate).hostname
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        return None
    return host or None


def match_search_engine(host: str) -> str | None:
    """Return the engine name when any host label names a known engine."""
    labels = host.split(".")
    for keyword, name in SEARCH_ENGINES:
        if keyword in labels:
            return name
    return None


def strip_www(host: str) -> str:
    """Remove a single leading "www." label."""
    if host.startswith("www.") and len(host) > 4:
        return host[4:]
    return host


def clean_referrer(raw: str | None) -> str:
    """
    Normalize a referrer URL to a display label.

    Args:
        raw: Referrer as sent by the tracker (may be empty).

    Returns:
        "Direct", a search engine name, or a bare host.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return DIRECT

    host = extract_host(trimmed)
    if host is None:
        return trimmed

    engine = match_search_engine(host)
    if engine is not None:
        return engine

    return strip_www(host)
