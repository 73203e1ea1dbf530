"""
User agent component - Classification and bot detection.
"""

from .component import (
    classify_browser,
    classify_device,
    classify_os,
    classify_user_agent,
    detect_bot,
    extract_bot_name,
    is_bot,
    match_first,
)
from .models import (
    OTHER_BOT,
    UNKNOWN,
    BotInfo,
    ClassificationResult,
    DeviceClass,
    UARule,
)

__all__ = [
    # Classification
    "classify_user_agent",
    "classify_browser",
    "classify_os",
    "classify_device",
    "match_first",
    # Bots
    "detect_bot",
    "is_bot",
    "extract_bot_name",
    # Models
    "BotInfo",
    "ClassificationResult",
    "DeviceClass",
    "UARule",
    "OTHER_BOT",
    "UNKNOWN",
]
