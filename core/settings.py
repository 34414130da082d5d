# =============================================================================
# core/settings.py  —  Plugin Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads every tunable of the plugin from environment variables into one
#   frozen Settings object.  main.py calls load_dotenv() first, so values in
#   a local .env file count as environment variables too.
#
# WHY A DATACLASS INSTEAD OF os.environ LOOKUPS EVERYWHERE?
#   The action, the service and the MCP server all need the same values.
#   Building Settings once and injecting it keeps the modules testable:
#   tests construct Settings(...) directly and never touch the environment.
#
# SECRETS:
#   OPEN_WEATHER_API_KEY and NEWS_API_KEY are read here and nowhere else.
#   They are never hardcoded and never logged (see core/api_service.py for
#   URL redaction).
# =============================================================================

from dataclasses import dataclass
import logging
import math
import os
from typing import Mapping, Optional

from core.errors import ConfigurationError


@dataclass(frozen=True)
class Settings:
    """All runtime configuration for the plugin."""

    # --- API credentials ---
    open_weather_api_key: str = ""
    news_api_key: str = ""          # Empty = use placeholder headlines

    # --- Query defaults ---
    default_city: str = "London"
    crypto_coin_id: str = "bitcoin"
    crypto_vs_currency: str = "usd"

    # --- HTTP behavior ---
    user_agent: str = "HelloBot/1.0"
    http_timeout_seconds: float = 10.0

    # --- Cache ---
    cache_ttl_seconds: float = 300.0   # 5 minutes
    cache_max_entries: int = 256

    # --- Provider ---
    recent_message_window: int = 5

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build Settings from environment variables (or any mapping).

        Unset or blank variables fall back to the dataclass defaults.

        Raises:
            ConfigurationError: if a numeric variable cannot be parsed or is
                not positive.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            open_weather_api_key=_text(env, "OPEN_WEATHER_API_KEY", defaults.open_weather_api_key),
            news_api_key=_text(env, "NEWS_API_KEY", defaults.news_api_key),
            default_city=_text(env, "DEFAULT_CITY", defaults.default_city),
            crypto_coin_id=_text(env, "CRYPTO_COIN_ID", defaults.crypto_coin_id).lower(),
            crypto_vs_currency=_text(env, "CRYPTO_VS_CURRENCY", defaults.crypto_vs_currency).lower(),
            user_agent=_text(env, "API_USER_AGENT", defaults.user_agent),
            http_timeout_seconds=_positive(env, "HTTP_TIMEOUT_SECONDS", defaults.http_timeout_seconds, float),
            cache_ttl_seconds=_positive(env, "CACHE_TTL_SECONDS", defaults.cache_ttl_seconds, float),
            cache_max_entries=_positive(env, "CACHE_MAX_ENTRIES", defaults.cache_max_entries, int),
            recent_message_window=_positive(env, "RECENT_MESSAGE_WINDOW", defaults.recent_message_window, int),
            log_level=_text(env, "LOG_LEVEL", defaults.log_level).upper(),
        )

    @property
    def has_live_news(self) -> bool:
        return bool(self.news_api_key)

    @property
    def log_level_number(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


def _text(env: Mapping[str, str], name: str, default: str) -> str:
    value = (env.get(name) or "").strip()
    return value or default


def _positive(env: Mapping[str, str], name: str, default, cast):
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {raw!r}")
    return value
