# =============================================================================
# core/formatters.py  —  Turning API JSON into chat-ready text
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One pure function per data domain.  Each takes the JSON exactly as the
#   external API returned it and produces a short, emoji-decorated message.
#
# THE ONE RULE: NEVER RAISE ON BAD INPUT.
#   APIs change, return partial payloads, or return an error object with a
#   200 status.  A formatter that receives a shape it doesn't understand
#   returns a fixed "not available" sentence instead.  Internally, missing
#   fields raise MalformedDataError, which is caught right here.
#
# NUMBER CONVENTIONS (fixed, no locale handling):
#   - Temperatures: whole degrees, halves round up (20.5 → 21, -0.5 → 0)
#   - Price and 24h change: two decimals
#   - Market cap: thousands separators, no decimals
# =============================================================================

import json
import logging
import math
from collections.abc import Mapping
from typing import Any

from core.errors import MalformedDataError

logger = logging.getLogger(__name__)

WEATHER_UNAVAILABLE = "Weather data is not available."
CRYPTO_UNAVAILABLE = "Cryptocurrency data is not available."
NEWS_UNAVAILABLE = "No news articles available."

MAX_NEWS_ARTICLES = 3


def _require(mapping: Any, name: str) -> Any:
    if not isinstance(mapping, Mapping) or mapping.get(name) is None:
        raise MalformedDataError(f"missing field {name!r}")
    return mapping[name]


def _number(mapping: Any, name: str) -> float:
    value = _require(mapping, name)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise MalformedDataError(f"field {name!r} is not a number: {value!r}") from exc
    if not math.isfinite(number):
        raise MalformedDataError(f"field {name!r} is not a number: {value!r}")
    return number


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


# =============================================================================
# Weather (OpenWeather "current weather" payload)
# =============================================================================
def format_weather_data(data: Any) -> str:
    """Format an OpenWeather current-weather response.

    Needs main.temp, main.feels_like and main.humidity.  The description and
    location are optional.
    """
    try:
        main = _require(data, "main")
        temp = _round_half_up(_number(main, "temp"))
        feels_like = _round_half_up(_number(main, "feels_like"))
        humidity = _require(main, "humidity")
    except MalformedDataError as exc:
        logger.debug("Weather payload unusable: %s", exc)
        return WEATHER_UNAVAILABLE

    description = "unknown"
    conditions = data.get("weather")
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], Mapping):
        description = conditions[0].get("description") or "unknown"
    location = data.get("name") or "Unknown location"

    return (
        f"🌤️ **Weather in {location}**\n"
        f"🌡️ Temperature: {temp}°C (feels like {feels_like}°C)\n"
        f"💧 Humidity: {humidity}%\n"
        f"☁️ Conditions: {_capitalize(str(description))}"
    )


# =============================================================================
# Crypto (CoinGecko /coins/markets payload — a list of coins)
# =============================================================================
def format_crypto_data(data: Any) -> str:
    """Format the first coin of a CoinGecko markets response."""
    if not isinstance(data, list) or not data:
        return CRYPTO_UNAVAILABLE

    coin = data[0]
    try:
        name = _require(coin, "name")
        symbol = str(_require(coin, "symbol")).upper()
        price = f"{_number(coin, 'current_price'):.2f}"
        change = f"{_number(coin, 'price_change_percentage_24h'):.2f}"
        market_cap = _number(coin, "market_cap")
    except MalformedDataError as exc:
        logger.debug("Crypto payload unusable: %s", exc)
        return CRYPTO_UNAVAILABLE

    # The icon follows the rounded figure the user sees, so "-0.00" counts as flat-up.
    change_icon = "📈" if float(change) >= 0 else "📉"

    return (
        f"₿ **{name} ({symbol})**\n"
        f"💰 Price: ${price}\n"
        f"{change_icon} 24h Change: {change}%\n"
        f"📊 Market Cap: ${market_cap:,.0f}"
    )


# =============================================================================
# News ({"articles": [...]} — NewsAPI shape, also used by the placeholder)
# =============================================================================
def format_news_data(data: Any) -> str:
    """Format the top three articles."""
    articles = data.get("articles") if isinstance(data, Mapping) else None
    if not isinstance(articles, list):
        return NEWS_UNAVAILABLE

    blocks = []
    for index, article in enumerate(articles[:MAX_NEWS_ARTICLES], start=1):
        if not isinstance(article, Mapping):
            article = {}
        source = article.get("source")
        source_name = source.get("name") if isinstance(source, Mapping) else None
        blocks.append(
            f"**{index}. {article.get('title') or 'Untitled'}**\n"
            f"{article.get('description') or 'No description available'}\n"
            f"🔗 Source: {source_name or 'Unknown'}\n"
        )

    return "📰 **Latest News**\n\n" + "\n".join(blocks)


def format_json_data(data: Any, title: str = "API Data") -> str:
    """Pretty-print arbitrary JSON in a fenced block (debug / raw output)."""
    try:
        formatted = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        return f"❌ Could not format data: {exc}"
    return f"📋 **{title}**\n```json\n{formatted}\n```"
