# =============================================================================
# core/cache.py  —  Time-Boxed In-Memory Response Cache
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds recently fetched JSON responses for a fixed window (5 minutes by
#   default) so repeated questions don't hit the external APIs again.
#
# RULES:
#   - An entry is FRESH while (now - timestamp) < ttl.  At exactly ttl it is
#     stale, and lookup() drops it.
#   - Capacity is bounded.  When a store() would exceed max_entries, the
#     least-recently-used entry is evicted (OrderedDict order = recency).
#   - sweep_expired() removes every stale entry in one pass.  store() runs
#     it when the cache is full, before evicting anything still fresh.
#
# WHAT THIS IS NOT:
#   Not durable, not shared between processes, not thread-safe on its own.
#   The service serializes concurrent fetches for a key on the event loop
#   (see core/api_service.py), which is the only writer.
#
# The clock is injectable so tests can move time without sleeping.
# =============================================================================

from collections import OrderedDict
import time
from typing import Any, Callable, Optional

from core.models import CacheEntry


class ResponseCache:
    """LRU-bounded TTL cache keyed by request signature."""

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.lookup(key, touch=False) is not None

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp < self.ttl_seconds

    def lookup(self, key: str, touch: bool = True) -> Optional[CacheEntry]:
        """Return the fresh entry for `key`, or None.

        A stale entry found here is removed.  `touch` marks the entry as
        most recently used.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry, self._clock()):
            del self._entries[key]
            return None
        if touch:
            self._entries.move_to_end(key)
        return entry

    def store(self, key: str, data: Any) -> CacheEntry:
        """Insert or replace the entry for `key`, evicting LRU entries if full."""
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self.max_entries:
            self.sweep_expired()
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)

        entry = CacheEntry(key=key, data=data, timestamp=self._clock())
        self._entries[key] = entry
        return entry

    def sweep_expired(self) -> int:
        """Drop every stale entry.  Returns how many were removed."""
        now = self._clock()
        stale = [key for key, entry in self._entries.items() if not self._is_fresh(entry, now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
