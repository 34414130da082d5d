# =============================================================================
# plugin/fetch_api.py  —  The FETCH_API_DATA Action
# =============================================================================
#
# WHAT THIS ACTION DOES:
#   When a user message matches a weather / crypto / news pattern, fetch the
#   data from the matching public API and reply with formatted text.
#
# THE FLOW (what the host runtime does with this object):
#   1. validate(message)  → strict keyword check (core/intent.match_intent)
#   2. handler(message, callback):
#        a) narrow the message to ONE domain (core/intent.route_intent)
#        b) emit a "fetching..." progress line through the callback
#        c) fetch via ApiService (cached), format via core/formatters
#        d) emit the final text, tagged FETCH_API_DATA
#        e) return True
#
# ERROR HANDLING — two layers, the user never sees a stack trace:
#   - Per-domain: a failed fetch or missing API key becomes
#     "❌ Sorry, I couldn't get <domain> data. <reason>" and the handler
#     still returns True (it did respond).
#   - Top level: anything else (including a missing service) becomes
#     "❌ I encountered an error while fetching data: <reason>", tagged ERROR,
#     and the handler returns False.  Nothing propagates to the host.
# =============================================================================

import logging
from typing import Any, Awaitable, Callable, Optional

from core.api_service import ApiService
from core.endpoints import build_crypto_url, build_weather_url
from core.errors import ApiPluginError, ConfigurationError, ServiceUnavailableError
from core.formatters import format_crypto_data, format_news_data, format_weather_data
from core.intent import extract_city, route_intent, should_handle
from core.models import ERROR_ACTION, FETCH_API_ACTION, Content, Intent, Memory
from core.news import fetch_news
from core.settings import Settings

logger = logging.getLogger(__name__)

Callback = Callable[[Content], Awaitable[Any]]

WEATHER_PROGRESS = "🔍 Let me check the current weather for you..."
NEWS_PROGRESS = "📰 Fetching the latest news for you..."
UNKNOWN_REQUEST = (
    "🤔 I'm not sure what API data you're looking for. "
    "Try asking about weather, Bitcoin prices, or latest news!"
)


class FetchApiAction:
    """Keyword-triggered action that answers with live API data."""

    name = FETCH_API_ACTION
    similes = (
        "GET_WEATHER", "CHECK_WEATHER", "WEATHER_INFO",
        "GET_CRYPTO", "CHECK_CRYPTO", "CRYPTO_PRICE",
        "GET_NEWS", "LATEST_NEWS", "NEWS_UPDATE",
        "FETCH_DATA", "GET_INFO", "API_CALL",
    )
    description = "Fetches data from various APIs based on user requests"

    # (user text, first reply) pairs shown to the agent as usage examples
    examples = (
        ("What's the weather like?", Content(WEATHER_PROGRESS, FETCH_API_ACTION)),
        ("What's the Bitcoin price?", Content("🔍 Checking the latest Bitcoin price...", FETCH_API_ACTION)),
        ("Show me the latest news", Content(NEWS_PROGRESS, FETCH_API_ACTION)),
    )

    def __init__(
        self,
        service: Optional[ApiService],
        settings: Optional[Settings] = None,
        news_source: Callable[[ApiService, Settings], Awaitable[Any]] = fetch_news,
    ):
        self.service = service
        self.settings = settings or (service.settings if service is not None else Settings())
        self._news_source = news_source

    async def validate(self, message: Memory, state: Any = None) -> bool:
        return should_handle(message.text)

    async def handler(
        self,
        message: Memory,
        callback: Callback,
        state: Any = None,
        options: Any = None,
    ) -> bool:
        try:
            if self.service is None:
                raise ServiceUnavailableError("API service not available")

            text = message.text
            intent = route_intent(text)
            logger.info("%s handling %s request", self.name, intent.value)

            if intent is Intent.WEATHER:
                response = await self._answer_weather(text, callback)
            elif intent is Intent.CRYPTO:
                response = await self._answer_crypto(callback)
            elif intent is Intent.NEWS:
                response = await self._answer_news(callback)
            else:
                response = UNKNOWN_REQUEST

            await callback(Content(text=response, action=FETCH_API_ACTION))
            return True

        except Exception as exc:
            logger.exception("%s handler failed", self.name)
            try:
                await callback(Content(
                    text=f"❌ I encountered an error while fetching data: {exc}",
                    action=ERROR_ACTION,
                ))
            except Exception:
                logger.exception("%s could not deliver the error message", self.name)
            return False

    # -------------------------------------------------------------------------
    # Per-domain branches.  Each returns the final text to send.
    # -------------------------------------------------------------------------
    async def _answer_weather(self, text: str, callback: Callback) -> str:
        await callback(Content(text=WEATHER_PROGRESS, action=FETCH_API_ACTION))

        city = extract_city(text, self.settings.default_city)
        try:
            if not self.settings.open_weather_api_key:
                raise ConfigurationError("OPEN_WEATHER_API_KEY is not configured.")
            data = await self.service.fetch_api(
                build_weather_url(city, self.settings.open_weather_api_key)
            )
            return format_weather_data(data)
        except ApiPluginError as exc:
            return f"❌ Sorry, I couldn't get weather data for {city}. {exc}"

    async def _answer_crypto(self, callback: Callback) -> str:
        coin_label = self.settings.crypto_coin_id.replace("-", " ").title()
        await callback(Content(
            text=f"🔍 Checking the latest {coin_label} price...",
            action=FETCH_API_ACTION,
        ))

        try:
            data = await self.service.fetch_api(
                build_crypto_url(self.settings.crypto_coin_id, self.settings.crypto_vs_currency)
            )
            return format_crypto_data(data)
        except ApiPluginError as exc:
            return f"❌ Sorry, I couldn't get cryptocurrency data. {exc}"

    async def _answer_news(self, callback: Callback) -> str:
        await callback(Content(text=NEWS_PROGRESS, action=FETCH_API_ACTION))

        try:
            data = await self._news_source(self.service, self.settings)
            return format_news_data(data)
        except ApiPluginError as exc:
            return f"❌ Sorry, I couldn't get news data. {exc}"
