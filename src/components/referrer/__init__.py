"""
Referrer component - Referrer normalization.
"""

from .component import (
    clean_referrer,
    extract_host,
    match_search_engine,
    strip_www,
)
from .models import DIRECT, SEARCH_ENGINES

__all__ = [
    "clean_referrer",
    "extract_host",
    "match_search_engine",
    "strip_www",
    "DIRECT",
    "SEARCH_ENGINES",
]
