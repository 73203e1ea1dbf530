"""
Referrer component constants.
"""

from __future__ import annotations

DIRECT = "Direct"

# (host label, display name); a host matches when any of its dot-separated
# labels equals the keyword, so "www.google.co.uk" and "google.com" both map
# to Google while "googleusercontent.com" does not.
SEARCH_ENGINES: tuple[tuple[str, str], ...] = (
    ("google", "Google"),
    ("bing", "Bing"),
    ("duckduckgo", "DuckDuckGo"),
    ("yahoo", "Yahoo"),
    ("yandex", "Yandex"),
    ("baidu", "Baidu"),
    ("ecosia", "Ecosia"),
    ("startpage", "Startpage"),
    ("qwant", "Qwant"),
    ("kagi", "Kagi"),
)
