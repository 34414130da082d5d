# =============================================================================
# core/intent.py  —  Keyword Intent Matcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Decides whether a free-text user message is asking for weather, a crypto
#   price, or news — using nothing but substring tests.
#
# TWO PASSES OVER THE SAME TEXT:
#   1. match_intent()  — the STRICT check the host calls during validation.
#      A domain keyword must appear together with a trigger word
#      ("weather" + "what", "bitcoin" + "price", "news" + "latest" ...).
#   2. route_intent()  — the LOOSE check the handler uses once validation has
#      already passed.  A single domain keyword is enough.
#
#   Both passes check domains in the same order: weather → crypto → news.
#   Text that mentions several domains is routed to the first one only.
#
# KNOWN FRAGILITY:
#   No tokenization ("btc" matches inside "subtract"), no negation
#   ("I don't care about the weather, what..." still matches), no scoring.
#   The behavior is kept exactly as-is on purpose; callers rely on it.
# =============================================================================

import re

from core.models import Intent


WEATHER_KEYWORD = "weather"
WEATHER_TRIGGERS = ("what", "how", "get", "check", "temperature", "forecast")

CRYPTO_KEYWORDS = ("bitcoin", "crypto", "btc")
CRYPTO_TRIGGERS = ("price", "value", "cost", "worth")

NEWS_KEYWORD = "news"
NEWS_TRIGGERS = ("latest", "recent", "today", "current")

_CITY_PATTERN = re.compile(r"weather (?:in |for |at )?([a-zA-Z\s]+)")


def _contains_any(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)


def _normalize(text: str | None) -> str:
    return (text or "").lower()


def match_intent(text: str | None) -> Intent:
    """Strict classification used to decide whether to handle a message."""
    text = _normalize(text)

    if WEATHER_KEYWORD in text and _contains_any(text, WEATHER_TRIGGERS):
        return Intent.WEATHER

    if _contains_any(text, CRYPTO_KEYWORDS) and _contains_any(text, CRYPTO_TRIGGERS):
        return Intent.CRYPTO

    if NEWS_KEYWORD in text and _contains_any(text, NEWS_TRIGGERS):
        return Intent.NEWS

    return Intent.NONE


def should_handle(text: str | None) -> bool:
    """True if any domain matches (the action's validation predicate)."""
    return match_intent(text) is not Intent.NONE


def route_intent(text: str | None) -> Intent:
    """Loose classification used by the handler after validation passed."""
    text = _normalize(text)

    if WEATHER_KEYWORD in text:
        return Intent.WEATHER
    if _contains_any(text, CRYPTO_KEYWORDS):
        return Intent.CRYPTO
    if NEWS_KEYWORD in text:
        return Intent.NEWS
    return Intent.NONE


def extract_city(text: str | None, default: str = "London") -> str:
    """Pull a city name out of "weather in <city>"-style phrasing.

    Only letters and whitespace are captured, so punctuation ends the name:
    "What's the weather in New York?" → "new york".  Phrasing without a
    city ("what's the weather like?") captures the following word; that
    quirk is long-standing and kept.
    """
    match = _CITY_PATTERN.search(_normalize(text))
    if match:
        city = match.group(1).strip()
        if city:
            return city
    return default
