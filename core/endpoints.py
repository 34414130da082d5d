# =============================================================================
# core/endpoints.py  —  External API URLs
# =============================================================================
#
#   Weather: OpenWeather current weather (needs OPEN_WEATHER_API_KEY)
#   Crypto:  CoinGecko markets (free, no key required)
#
# Metric units for weather, so formatters always print °C.
# =============================================================================

from core.api_service import build_url

OPEN_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
COINGECKO_MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"


def build_weather_url(city: str, api_key: str) -> str:
    return build_url(OPEN_WEATHER_URL, {"q": city, "appid": api_key, "units": "metric"})


def build_crypto_url(coin_id: str = "bitcoin", vs_currency: str = "usd") -> str:
    return build_url(COINGECKO_MARKETS_URL, {"vs_currency": vs_currency, "ids": coin_id})
