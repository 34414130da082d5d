# =============================================================================
# core/news.py  —  News Source (placeholder or live NewsAPI)
# =============================================================================
#
# DATA SOURCE TOGGLE:
#   NEWS_API_KEY unset   → two static placeholder headlines (offline, stable)
#   NEWS_API_KEY set     → live top headlines from newsapi.org
#
#   Both return the same {"articles": [...]} shape, so format_news_data()
#   doesn't care which one was used.
# =============================================================================

from copy import deepcopy
from typing import Any

from core.api_service import ApiService, build_url
from core.settings import Settings

NEWS_API_URL = "https://newsapi.org/v2/top-headlines"

PLACEHOLDER_NEWS: dict[str, Any] = {
    "articles": [
        {
            "title": "Tech Innovation Continues to Drive Markets",
            "description": "Latest developments in AI and automation are reshaping industries worldwide.",
            "source": {"name": "Tech Daily"},
        },
        {
            "title": "Climate Change Summit Reaches Key Agreements",
            "description": "World leaders agree on new initiatives to combat climate change.",
            "source": {"name": "Global News"},
        },
    ]
}


def placeholder_news() -> dict[str, Any]:
    """A fresh copy of the static headlines (callers may mutate it)."""
    return deepcopy(PLACEHOLDER_NEWS)


def build_news_url(api_key: str, country: str = "us", page_size: int = 5) -> str:
    return build_url(NEWS_API_URL, {"country": country, "pageSize": page_size, "apiKey": api_key})


async def fetch_news(service: ApiService, settings: Settings) -> dict[str, Any]:
    """Return headlines from the configured source.

    Raises:
        FetchError: only in live mode, when the request fails.
    """
    if not settings.has_live_news:
        return placeholder_news()
    return await service.fetch_api(build_news_url(settings.news_api_key))
