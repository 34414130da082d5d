# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server for HelloBot
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the plugin's capabilities as MCP tools so the LLM agent
#   (agent/hello_agent.py) can call them when the keyword action didn't
#   catch a request, e.g. "is it warm in Lisbon right now?".
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs data and calls a tool by name via MCP
#   2. FastMCP routes the call to the decorated coroutine below
#   3. The coroutine fetches through the shared ApiService (so the 5-minute
#      cache applies to tool calls too) and formats the result
#   4. The agent receives a dict with a ready-to-read "text" field
#
# TOOLS:
#   get_current_weather   → OpenWeather, formatted
#   get_crypto_price      → CoinGecko, formatted (or raw JSON on request)
#   get_latest_news       → placeholder or NewsAPI headlines, formatted
#   handle_api_request    → runs the FETCH_API_DATA action on free text
#   get_api_context       → the API_DATA provider's hint for a room
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server
#     b) Spawned by the ADK agent via stdio transport
# =============================================================================

from contextlib import asynccontextmanager
import json
import logging
import sys

from dotenv import load_dotenv
from fastmcp import FastMCP

from core.endpoints import build_crypto_url, build_weather_url
from core.errors import ApiPluginError
from core.formatters import format_crypto_data, format_json_data, format_news_data, format_weather_data
from core.models import Content, Memory
from core.news import fetch_news
from core.settings import Settings
from plugin.registry import create_api_plugin
from plugin.runtime import PluginRuntime

# =============================================================================
# Logging Setup
# =============================================================================
# Log to STDERR: STDOUT carries the MCP JSON protocol, and a stray log line
# there would corrupt the stream.
# =============================================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("tools.mcp_server")


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info("%s called with: %s", tool_name, param_str)


def _log_response(tool_name: str, result: dict) -> dict:
    logger.info("  ← %s response: %s", tool_name, json.dumps(result, ensure_ascii=False, separators=(",", ":")))
    return result


# =============================================================================
# Plugin wiring (one service and one cache for the whole server process)
# =============================================================================
load_dotenv()
settings = Settings.from_env()
logging.getLogger().setLevel(settings.log_level_number)

plugin = create_api_plugin(settings)
runtime = PluginRuntime(plugin)
service = plugin.services[0]


@asynccontextmanager
async def _plugin_lifespan(server: FastMCP):
    await plugin.start()
    try:
        yield
    finally:
        await plugin.stop()


mcp = FastMCP("hellobot-api", lifespan=_plugin_lifespan)


@mcp.tool()
async def get_current_weather(city: str = "") -> dict:
    """Get the current weather (temperature, feels-like, humidity, conditions) for a city.

    Args:
        city: City name, e.g. "Paris" or "New York".  Defaults to the
              configured default city when empty.

    Returns:
        {"city": ..., "text": formatted weather}  or  {"city": ..., "error": ...}
    """
    _log_request("get_current_weather", city=city)
    city = city.strip() or settings.default_city

    if not settings.open_weather_api_key:
        return _log_response("get_current_weather", {
            "city": city,
            "error": "OPEN_WEATHER_API_KEY is not configured.",
        })
    try:
        data = await service.fetch_api(build_weather_url(city, settings.open_weather_api_key))
    except ApiPluginError as exc:
        return _log_response("get_current_weather", {"city": city, "error": str(exc)})
    return _log_response("get_current_weather", {"city": city, "text": format_weather_data(data)})


@mcp.tool()
async def get_crypto_price(coin_id: str = "", raw: bool = False) -> dict:
    """Get the current USD price, 24h change and market cap of a cryptocurrency.

    Args:
        coin_id: CoinGecko coin id, e.g. "bitcoin", "ethereum".  Defaults to
                 the configured coin.
        raw: Return the raw CoinGecko JSON (pretty-printed) instead of the
             summary.  Only useful for debugging.
    """
    _log_request("get_crypto_price", coin_id=coin_id, raw=raw)
    coin_id = coin_id.strip().lower() or settings.crypto_coin_id

    try:
        data = await service.fetch_api(build_crypto_url(coin_id, settings.crypto_vs_currency))
    except ApiPluginError as exc:
        return _log_response("get_crypto_price", {"coin_id": coin_id, "error": str(exc)})

    text = format_json_data(data, title=f"CoinGecko: {coin_id}") if raw else format_crypto_data(data)
    return _log_response("get_crypto_price", {"coin_id": coin_id, "text": text})


@mcp.tool()
async def get_latest_news() -> dict:
    """Get the top three current news headlines with descriptions and sources."""
    _log_request("get_latest_news")
    try:
        data = await fetch_news(service, settings)
    except ApiPluginError as exc:
        return _log_response("get_latest_news", {"error": str(exc)})
    return _log_response("get_latest_news", {
        "live": settings.has_live_news,
        "text": format_news_data(data),
    })


@mcp.tool()
async def handle_api_request(text: str, room_id: str = "mcp") -> dict:
    """Answer a free-text request ("what's the weather in Rome?") the way the chat action does.

    Returns whether the message matched the weather/crypto/news keyword
    patterns, whether the answer succeeded, and every message produced.
    """
    _log_request("handle_api_request", text=text, room_id=room_id)
    result = await runtime.handle_message(room_id, text)
    return _log_response("handle_api_request", {
        "handled": result.handled,
        "success": result.success,
        "messages": [reply.text for reply in result.replies],
    })


@mcp.tool()
async def get_api_context(room_id: str = "mcp") -> dict:
    """Report whether API data was fetched recently in a conversation room."""
    _log_request("get_api_context", room_id=room_id)
    provider = plugin.providers[0]
    result = await provider.get(Memory(room_id=room_id, content=Content()))
    return _log_response("get_api_context", {"text": result.text, "values": result.values})


if __name__ == "__main__":
    mcp.run()
