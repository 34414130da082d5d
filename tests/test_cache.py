import unittest

from core.cache import ResponseCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ResponseCacheTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = ResponseCache(ttl_seconds=300, max_entries=3, clock=self.clock)

    def test_lookup_returns_stored_entry_inside_window(self):
        self.cache.store("k", {"a": 1})
        self.clock.advance(299.9)

        entry = self.cache.lookup("k")

        self.assertIsNotNone(entry)
        self.assertEqual(entry.data, {"a": 1})
        self.assertEqual(entry.timestamp, 1000.0)

    def test_entry_is_stale_at_exactly_ttl(self):
        self.cache.store("k", [1, 2])
        self.clock.advance(300)

        self.assertIsNone(self.cache.lookup("k"))
        self.assertEqual(len(self.cache), 0)

    def test_missing_key_returns_none(self):
        self.assertIsNone(self.cache.lookup("nope"))

    def test_falsy_json_values_are_cached(self):
        self.cache.store("empty-list", [])
        self.cache.store("null", None)

        self.assertEqual(self.cache.lookup("empty-list").data, [])
        self.assertIsNone(self.cache.lookup("null").data)
        self.assertIn("null", self.cache)

    def test_store_replaces_and_refreshes_timestamp(self):
        self.cache.store("k", "old")
        self.clock.advance(200)
        self.cache.store("k", "new")
        self.clock.advance(200)

        self.assertEqual(self.cache.lookup("k").data, "new")
        self.assertEqual(len(self.cache), 1)

    def test_least_recently_used_entry_is_evicted_when_full(self):
        self.cache.store("a", 1)
        self.cache.store("b", 2)
        self.cache.store("c", 3)
        self.cache.lookup("a")  # a is now most recent; b is the LRU

        self.cache.store("d", 4)

        self.assertEqual(len(self.cache), 3)
        self.assertIsNone(self.cache.lookup("b"))
        for key in ("a", "c", "d"):
            self.assertIsNotNone(self.cache.lookup(key))

    def test_expired_entries_are_swept_before_evicting_fresh_ones(self):
        self.cache.store("old", 1)
        self.clock.advance(250)
        self.cache.store("b", 2)
        self.cache.store("c", 3)
        self.clock.advance(60)  # "old" is now stale, "b" and "c" are fresh

        self.cache.store("d", 4)

        self.assertEqual(len(self.cache), 3)
        for key in ("b", "c", "d"):
            self.assertIsNotNone(self.cache.lookup(key))

    def test_sweep_expired_counts_removed_entries(self):
        self.cache.store("a", 1)
        self.cache.store("b", 2)
        self.clock.advance(100)
        self.cache.store("c", 3)
        self.clock.advance(250)

        self.assertEqual(self.cache.sweep_expired(), 2)
        self.assertEqual(len(self.cache), 1)

    def test_clear(self):
        self.cache.store("a", 1)
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)

    def test_invalid_limits_are_rejected(self):
        with self.assertRaises(ValueError):
            ResponseCache(ttl_seconds=0)
        with self.assertRaises(ValueError):
            ResponseCache(max_entries=0)
