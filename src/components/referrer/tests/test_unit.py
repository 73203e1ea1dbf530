"""
Unit tests for the referrer component.
"""

from __future__ import annotations

import pytest

from src.components.referrer import (
    DIRECT,
    clean_referrer,
    extract_host,
    match_search_engine,
    strip_www,
)


class TestDirect:
    """Missing referrers are Direct."""

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_is_direct(self, raw: str | None) -> None:
        assert clean_referrer(raw) == DIRECT == "Direct"


class TestSearchEngines:
    """Known engines collapse to their name."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("https://www.google.com/search?q=x", "Google"),
            ("https://google.co.uk/", "Google"),
            ("https://www.bing.com/search?q=test", "Bing"),
            ("https://duckduckgo.com/", "DuckDuckGo"),
            ("https://search.yahoo.com/search?p=x", "Yahoo"),
            ("https://yandex.ru/search/?text=x", "Yandex"),
        ],
    )
    def test_engine_name(self, raw: str, expected: str) -> None:
        assert clean_referrer(raw) == expected

    def test_label_match_only(self) -> None:
        """Hosts that merely contain an engine keyword are not engines."""
        assert match_search_engine("lh3.googleusercontent.com") is None
        assert clean_referrer("https://lh3.googleusercontent.com/a") == (
            "lh3.googleusercontent.com"
        )


class TestDomains:
    """Other referrers reduce to their host."""

    def test_www_equivalence(self) -> None:
        assert clean_referrer("https://www.example.com/p") == "example.com"
        assert clean_referrer("https://example.com/p") == "example.com"

    def test_subdomain_kept(self) -> None:
        assert clean_referrer("https://blog.example.com/post") == "blog.example.com"

    def test_port_and_credentials_dropped(self) -> None:
        assert clean_referrer("http://user:pw@www.example.com:8080/x") == "example.com"

    def test_host_is_lowercased(self) -> None:
        assert clean_referrer("https://WWW.Example.COM/") == "example.com"

    def test_scheme_less(self) -> None:
        assert clean_referrer("example.com/page") == "example.com"

    def test_surrounding_whitespace(self) -> None:
        assert clean_referrer("  https://example.com/  ") == "example.com"


class TestMalformed:
    """Unparseable referrers fall back to the trimmed raw value."""

    def test_broken_ipv6(self) -> None:
        assert clean_referrer(" http://[::1/page ") == "http://[::1/page"

    def test_scheme_only(self) -> None:
        assert clean_referrer("https://") == "https://"


class TestHelpers:
    """Helper functions."""

    def test_extract_host(self) -> None:
        assert extract_host("https://Example.com:443/x") == "example.com"
        assert extract_host("https://") is None

    def test_strip_www(self) -> None:
        assert strip_www("www.example.com") == "example.com"
        assert strip_www("www.") == "www."
        assert strip_www("wwwexample.com") == "wwwexample.com"
