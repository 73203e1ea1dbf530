"""
User agent rule tables.

Each axis is an ordered tuple evaluated first-match-wins, so more specific
tokens must come before the generic ones they overlap with (every Chrome UA
also carries "Safari/", every Edge UA also carries "Chrome/").
"""

from __future__ import annotations

from .models import UARule

# --- Browser ---

BROWSER_RULES: tuple[UARule, ...] = (
    UARule("Edge", ("Edg/", "EdgA/", "EdgiOS/", "Edge/")),
    UARule("Opera", ("OPR/", "Opera")),
    UARule("Chrome", ("Chrome/", "CriOS/"), excludes=("Edg/", "OPR/")),
    UARule("Firefox", ("Firefox/", "FxiOS/")),
    UARule("Safari", ("Safari/",), excludes=("Chrome/", "Chromium/", "CriOS/")),
)

# --- Operating system ---

OS_RULES: tuple[UARule, ...] = (
    UARule("iOS", ("iPhone", "iPad", "iPod")),
    UARule("Android", ("Android",)),
    UARule("macOS", ("Mac OS X", "Macintosh"), excludes=("iPhone", "iPad", "iPod")),
    UARule("Windows", ("Windows NT",)),
    UARule("Linux", ("Linux",), excludes=("Android",)),
)

# --- Device class ---

TABLET_MARKERS: tuple[str, ...] = ("iPad", "Tablet", "Kindle", "Silk/", "PlayBook")

DEVICE_RULES: tuple[UARule, ...] = (
    UARule("Tablet", TABLET_MARKERS),
    UARule("Mobile", ("Mobile", "Android", "iPhone", "iPod")),
)

# --- Bots ---

# Ordered (lowercase signature, display name). Vendor-specific entries must
# come before the generic markers below.
KNOWN_BOTS: tuple[tuple[str, str], ...] = (
    ("googlebot", "Googlebot"),
    ("adsbot-google", "Google Ads"),
    ("mediapartners-google", "Google AdSense"),
    ("bingbot", "Bingbot"),
    ("bingpreview", "Bing Preview"),
    ("yandexbot", "Yandex"),
    ("baiduspider", "Baidu"),
    ("duckduckbot", "DuckDuckGo"),
    ("slurp", "Yahoo"),
    ("applebot", "Applebot"),
    ("petalbot", "Petal"),
    ("ahrefsbot", "Ahrefs"),
    ("semrushbot", "SEMrush"),
    ("mj12bot", "Majestic"),
    ("dotbot", "Moz"),
    ("facebookexternalhit", "Facebook"),
    ("twitterbot", "Twitter"),
    ("linkedinbot", "LinkedIn"),
    ("slackbot", "Slack"),
    ("discordbot", "Discord"),
    ("telegrambot", "Telegram"),
    ("whatsapp", "WhatsApp"),
    ("gptbot", "GPTBot"),
    ("chatgpt-user", "ChatGPT"),
    ("claudebot", "ClaudeBot"),
    ("perplexitybot", "Perplexity"),
    ("bytespider", "ByteDance"),
    ("ccbot", "Common Crawl"),
    ("ia_archiver", "Alexa"),
)

GENERIC_BOT_MARKERS: tuple[str, ...] = ("bot", "crawler", "spider")
