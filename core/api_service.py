# =============================================================================
# core/api_service.py  —  Fetch-With-Cache Service ("api-fetcher")
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs an HTTP GET against a public JSON API and caches the parsed
#   response for a short window, keyed by the exact (URL, options) pair.
#
# THE CONTRACT (fetch_api):
#   1. Build the cache key:  "<url>:<options serialized as sorted JSON>"
#   2. Fresh entry in the cache?  Return its data.  No network call.
#   3. Another coroutine already fetching the same key?  Wait for that
#      request instead of starting a second one (single-flight).
#   4. Otherwise: ONE request, bounded by a timeout.  No retries, no backoff.
#        - 2xx + JSON body  → store in cache, return data
#        - anything else    → raise FetchError with a descriptive message
#
# HOW THE REQUEST IS MADE:
#   With the standard library (urllib.request), exactly like a plain REST
#   call.  urlopen() blocks, so it runs in a worker thread via
#   asyncio.to_thread() and the event loop stays responsive.  The timeout
#   bounds the whole request (asyncio.wait_for), not only each socket read.
#   The opener is injectable: tests pass a fake and never touch the network.
#
# SECRETS IN URLS:
#   OpenWeather and NewsAPI take their key as a query parameter.  Every URL
#   that reaches a log line or an error message goes through redact_url()
#   first, because error messages end up in front of the user.
# =============================================================================

import asyncio
import json
import logging
from typing import Any, Callable, Mapping, Optional
import urllib.error
import urllib.parse
import urllib.request

from core.cache import ResponseCache
from core.errors import FetchError
from core.settings import Settings

logger = logging.getLogger(__name__)

_SECRET_PARAMS = frozenset({"appid", "apikey", "api_key", "key", "token"})


def build_cache_key(url: str, options: Optional[Mapping[str, Any]] = None) -> str:
    """Request signature used as the cache key."""
    serialized = json.dumps(dict(options or {}), sort_keys=True, separators=(",", ":"), default=str)
    return f"{url}:{serialized}"


def build_url(base: str, params: Mapping[str, Any]) -> str:
    """Append percent-encoded query parameters to `base`."""
    query = urllib.parse.urlencode(
        [(name, value) for name, value in params.items() if value is not None],
        quote_via=urllib.parse.quote,
    )
    return f"{base}?{query}" if query else base


def redact_url(url: str) -> str:
    """Replace the values of credential-like query parameters with ***."""
    parts = urllib.parse.urlsplit(url)
    if not parts.query:
        return url
    pairs = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    if not any(name.lower() in _SECRET_PARAMS for name, _ in pairs):
        return url
    redacted = [
        (name, "***" if name.lower() in _SECRET_PARAMS else value)
        for name, value in pairs
    ]
    query = urllib.parse.urlencode(redacted, safe="*", quote_via=urllib.parse.quote)
    return urllib.parse.urlunsplit(parts._replace(query=query))


class ApiService:
    """Fetches JSON from public APIs, with a time-boxed in-memory cache."""

    service_type = "api-fetcher"
    capability_description = "Fetches and formats data from various APIs"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[ResponseCache] = None,
        opener: Optional[Callable[..., Any]] = None,
    ):
        self.settings = settings or Settings()
        self.cache = cache or ResponseCache(
            ttl_seconds=self.settings.cache_ttl_seconds,
            max_entries=self.settings.cache_max_entries,
        )
        self._opener = opener or urllib.request.urlopen
        self._inflight: dict[str, asyncio.Future] = {}
        self.started = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    @classmethod
    async def start(cls, settings: Optional[Settings] = None, **kwargs) -> "ApiService":
        service = cls(settings, **kwargs)
        await service.on_start()
        return service

    async def on_start(self) -> None:
        if self.started:
            return
        self.started = True
        logger.info("%s service started (cache ttl=%ss, max=%d)",
                    self.service_type, self.cache.ttl_seconds, self.cache.max_entries)

    async def stop(self) -> None:
        self.started = False
        self.cache.clear()
        logger.info("%s service stopped, cache cleared", self.service_type)

    # -------------------------------------------------------------------------
    # Fetch
    # -------------------------------------------------------------------------
    async def fetch_api(self, url: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Return parsed JSON for `url`, from cache when fresh.

        Args:
            url: Fully built request URL, query string included.
            options: Optional request options.  Recognized keys:
                "headers" (dict, merged over the defaults) and
                "timeout" (seconds).  The whole mapping is part of the
                cache key.

        Raises:
            FetchError: network failure, timeout, non-2xx status, or a body
                that is not JSON.
        """
        options = dict(options or {})
        key = build_cache_key(url, options)

        cached = self.cache.lookup(key)
        if cached is not None:
            logger.debug("📦 Using cached data for %s", redact_url(url))
            return cached.data

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_and_store(key, url, options))
            self._inflight[key] = pending
            pending.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            logger.debug("Waiting on in-flight request for %s", redact_url(url))

        return await asyncio.shield(pending)

    def _forget(self, key: str, done: asyncio.Future) -> None:
        if self._inflight.get(key) is done:
            del self._inflight[key]
        if not done.cancelled():
            # Mark the exception as retrieved; callers already received it.
            done.exception()

    async def _fetch_and_store(self, key: str, url: str, options: dict) -> Any:
        safe_url = redact_url(url)
        timeout = self._timeout(options)
        logger.info("🌐 Fetching data from %s", safe_url)
        try:
            # urlopen's timeout only bounds each socket operation; wait_for
            # bounds the whole request, slow trickling bodies included.
            data = await asyncio.wait_for(
                asyncio.to_thread(self._get_json, url, options), timeout
            )
        except asyncio.TimeoutError as exc:
            error = FetchError(f"Failed to fetch from {safe_url}: timed out after {timeout:g}s")
            logger.error("❌ API fetch failed for %s: %s", safe_url, error)
            raise error from exc
        except FetchError as exc:
            logger.error("❌ API fetch failed for %s: %s", safe_url, exc)
            raise
        self.cache.store(key, data)
        return data

    def _timeout(self, options: Mapping[str, Any]) -> float:
        return float(options.get("timeout") or self.settings.http_timeout_seconds)

    def _get_json(self, url: str, options: Mapping[str, Any]) -> Any:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }
        headers.update(options.get("headers") or {})
        timeout = self._timeout(options)
        safe_url = redact_url(url)

        request = urllib.request.Request(url, headers=headers, method="GET")
        try:
            with self._opener(request, timeout=timeout) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    reason = getattr(response, "reason", "")
                    raise FetchError(
                        f"Failed to fetch from {safe_url}: HTTP {status}: {reason}",
                        status=status,
                    )
                body = response.read()
                charset = _content_charset(response)
        except urllib.error.HTTPError as exc:
            raise FetchError(
                f"Failed to fetch from {safe_url}: HTTP {exc.code}: {exc.reason}",
                status=exc.code,
            ) from exc
        except urllib.error.URLError as exc:
            raise FetchError(f"Failed to fetch from {safe_url}: {exc.reason}") from exc
        except OSError as exc:
            # Timeouts (TimeoutError) and dropped connections end up here.
            reason = str(exc) or type(exc).__name__
            raise FetchError(f"Failed to fetch from {safe_url}: {reason}") from exc

        try:
            return json.loads(body.decode(charset or "utf-8"))
        except (ValueError, LookupError) as exc:
            raise FetchError(f"Failed to fetch from {safe_url}: response is not valid JSON") from exc


def _content_charset(response: Any) -> Optional[str]:
    headers = getattr(response, "headers", None)
    get_charset = getattr(headers, "get_content_charset", None)
    return get_charset() if callable(get_charset) else None
