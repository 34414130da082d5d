import asyncio
import unittest

from core.errors import FetchError
from core.models import ERROR_ACTION, FETCH_API_ACTION, Content, Memory
from core.settings import Settings
from plugin.fetch_api import NEWS_PROGRESS, UNKNOWN_REQUEST, WEATHER_PROGRESS, FetchApiAction

PARIS = {
    "main": {"temp": 20.4, "feels_like": 19.6, "humidity": 50},
    "weather": [{"description": "clear sky"}],
    "name": "Paris",
}
BITCOIN = [{
    "name": "Bitcoin",
    "symbol": "btc",
    "current_price": 50000.456,
    "price_change_percentage_24h": -2.345,
    "market_cap": 900000000,
}]


class FakeService:
    """Answers fetch_api() by URL prefix and records every URL asked for."""

    def __init__(self, settings: Settings, responses: dict | None = None, error: Exception | None = None):
        self.settings = settings
        self.responses = responses or {}
        self.error = error
        self.urls = []

    async def fetch_api(self, url, options=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        for prefix, data in self.responses.items():
            if url.startswith(prefix):
                return data
        raise FetchError(f"Failed to fetch from {url}: HTTP 404: Not Found", status=404)


class Recorder:
    def __init__(self):
        self.contents: list[Content] = []

    async def __call__(self, content: Content) -> None:
        self.contents.append(content)

    @property
    def texts(self) -> list[str]:
        return [content.text for content in self.contents]


def _message(text: str) -> Memory:
    return Memory(room_id="room-1", content=Content(text=text))


def _run(action: FetchApiAction, text: str) -> tuple[bool, Recorder]:
    recorder = Recorder()
    ok = asyncio.run(action.handler(_message(text), recorder))
    return ok, recorder


class ValidateTests(unittest.TestCase):
    def test_validate_uses_strict_keyword_match(self):
        action = FetchApiAction(FakeService(Settings()))

        self.assertTrue(asyncio.run(action.validate(_message("What's the weather like?"))))
        self.assertTrue(asyncio.run(action.validate(_message("How much is Bitcoin worth?"))))
        self.assertTrue(asyncio.run(action.validate(_message("Show me the latest news"))))
        self.assertFalse(asyncio.run(action.validate(_message("Hello"))))
        self.assertFalse(asyncio.run(action.validate(_message("bitcoin"))))

    def test_metadata(self):
        self.assertEqual(FetchApiAction.name, "FETCH_API_DATA")
        self.assertIn("GET_WEATHER", FetchApiAction.similes)
        self.assertEqual(len(FetchApiAction.examples), 3)


class WeatherBranchTests(unittest.TestCase):
    def test_weather_is_fetched_and_formatted(self):
        settings = Settings(open_weather_api_key="KEY")
        service = FakeService(settings, {"https://api.openweathermap.org/": PARIS})

        ok, recorder = _run(FetchApiAction(service, settings), "What's the weather in Paris?")

        self.assertTrue(ok)
        self.assertEqual(recorder.texts[0], WEATHER_PROGRESS)
        self.assertEqual(
            service.urls,
            ["https://api.openweathermap.org/data/2.5/weather?q=paris&appid=KEY&units=metric"],
        )
        final = recorder.contents[-1]
        self.assertEqual(final.action, FETCH_API_ACTION)
        self.assertIn("Weather in Paris", final.text)
        self.assertIn("20°C", final.text)

    def test_default_city_is_used_without_city_phrase(self):
        settings = Settings(open_weather_api_key="KEY", default_city="Oslo")
        service = FakeService(settings, {"https://api.openweathermap.org/": PARIS})

        _run(FetchApiAction(service, settings), "check weather")

        self.assertIn("q=Oslo", service.urls[0])

    def test_missing_api_key_apologizes_without_fetching(self):
        service = FakeService(Settings())

        ok, recorder = _run(FetchApiAction(service), "what's the weather in rome")

        self.assertTrue(ok)
        self.assertEqual(service.urls, [])
        self.assertEqual(
            recorder.texts[-1],
            "❌ Sorry, I couldn't get weather data for rome. OPEN_WEATHER_API_KEY is not configured.",
        )

    def test_fetch_failure_apologizes(self):
        settings = Settings(open_weather_api_key="KEY")
        service = FakeService(settings, error=FetchError("Failed to fetch from x: HTTP 500: Oops", status=500))

        ok, recorder = _run(FetchApiAction(service, settings), "check weather")

        self.assertTrue(ok)
        self.assertEqual(
            recorder.texts[-1],
            "❌ Sorry, I couldn't get weather data for London. Failed to fetch from x: HTTP 500: Oops",
        )
        self.assertEqual(recorder.contents[-1].action, FETCH_API_ACTION)


class CryptoBranchTests(unittest.TestCase):
    def test_bitcoin_price_is_fetched_and_formatted(self):
        settings = Settings()
        service = FakeService(settings, {"https://api.coingecko.com/": BITCOIN})

        ok, recorder = _run(FetchApiAction(service), "How much is Bitcoin worth?")

        self.assertTrue(ok)
        self.assertEqual(recorder.texts[0], "🔍 Checking the latest Bitcoin price...")
        self.assertEqual(
            service.urls,
            ["https://api.coingecko.com/api/v3/coins/markets?vs_currency=usd&ids=bitcoin"],
        )
        self.assertIn("$50000.46", recorder.texts[-1])
        self.assertIn("📉", recorder.texts[-1])

    def test_configured_coin_is_used(self):
        settings = Settings(crypto_coin_id="ethereum", crypto_vs_currency="eur")
        service = FakeService(settings, {"https://api.coingecko.com/": BITCOIN})

        ok, recorder = _run(FetchApiAction(service), "crypto price")

        self.assertEqual(recorder.texts[0], "🔍 Checking the latest Ethereum price...")
        self.assertTrue(service.urls[0].endswith("vs_currency=eur&ids=ethereum"))

    def test_fetch_failure_apologizes(self):
        service = FakeService(Settings(), error=FetchError("network down"))

        ok, recorder = _run(FetchApiAction(service), "btc price")

        self.assertTrue(ok)
        self.assertEqual(recorder.texts[-1], "❌ Sorry, I couldn't get cryptocurrency data. network down")


class NewsBranchTests(unittest.TestCase):
    def test_placeholder_news_without_key(self):
        service = FakeService(Settings())

        ok, recorder = _run(FetchApiAction(service), "Show me the latest news")

        self.assertTrue(ok)
        self.assertEqual(service.urls, [])
        self.assertEqual(recorder.texts[0], NEWS_PROGRESS)
        self.assertIn("Tech Innovation Continues to Drive Markets", recorder.texts[-1])
        self.assertIn("Source: Global News", recorder.texts[-1])

    def test_live_news_with_key(self):
        settings = Settings(news_api_key="NK")
        articles = {"articles": [{"title": "Live headline", "source": {"name": "Wire"}}]}
        service = FakeService(settings, {"https://newsapi.org/": articles})

        ok, recorder = _run(FetchApiAction(service, settings), "latest news")

        self.assertTrue(ok)
        self.assertIn("apiKey=NK", service.urls[0])
        self.assertIn("Live headline", recorder.texts[-1])

    def test_live_news_failure_apologizes(self):
        settings = Settings(news_api_key="NK")
        service = FakeService(settings, error=FetchError("HTTP 426"))

        ok, recorder = _run(FetchApiAction(service, settings), "latest news")

        self.assertTrue(ok)
        self.assertEqual(recorder.texts[-1], "❌ Sorry, I couldn't get news data. HTTP 426")


class HandlerFallbackTests(unittest.TestCase):
    def test_unrecognized_request_gets_hint(self):
        ok, recorder = _run(FetchApiAction(FakeService(Settings())), "hello there")

        self.assertTrue(ok)
        self.assertEqual(recorder.texts, [UNKNOWN_REQUEST])
        self.assertEqual(recorder.contents[0].action, FETCH_API_ACTION)

    def test_missing_service_reports_error_and_fails(self):
        with self.assertLogs("plugin.fetch_api", level="ERROR"):
            ok, recorder = _run(FetchApiAction(None), "what's the weather")

        self.assertFalse(ok)
        self.assertEqual(
            recorder.texts,
            ["❌ I encountered an error while fetching data: API service not available"],
        )
        self.assertEqual(recorder.contents[0].action, ERROR_ACTION)

    def test_unexpected_error_is_contained(self):
        service = FakeService(Settings(), error=RuntimeError("boom"))

        with self.assertLogs("plugin.fetch_api", level="ERROR"):
            ok, recorder = _run(FetchApiAction(service), "bitcoin price")

        self.assertFalse(ok)
        self.assertEqual(recorder.texts[-1], "❌ I encountered an error while fetching data: boom")
        self.assertEqual(recorder.contents[-1].action, ERROR_ACTION)

    def test_failing_callback_does_not_escape(self):
        async def broken_callback(content):
            raise ConnectionError("host went away")

        action = FetchApiAction(FakeService(Settings()))
        with self.assertLogs("plugin.fetch_api", level="ERROR"):
            ok = asyncio.run(action.handler(_message("latest news"), broken_callback))

        self.assertFalse(ok)
