import asyncio
import unittest
from datetime import datetime, timedelta, timezone

from core.api_service import ApiService
from core.memory import InMemoryMessageStore
from core.models import FETCH_API_ACTION, Content, Memory
from core.settings import Settings
from plugin.api_data import CAPABILITIES_TEXT, RECENT_ACTIVITY_TEXT, ApiDataProvider

ROOM = "room-1"


def _fill(store: InMemoryMessageStore, actions: list, room_id: str = ROOM) -> None:
    """Add one message per entry, oldest first; an entry is the content.action."""
    async def add_all():
        for index, action in enumerate(actions):
            await store.add_memory(Memory(room_id=room_id, content=Content(text=f"m{index}", action=action)))
    asyncio.run(add_all())


def _get(provider: ApiDataProvider, room_id: str = ROOM):
    return asyncio.run(provider.get(Memory(room_id=room_id, content=Content(text="hi"))))


class ApiDataProviderTests(unittest.TestCase):
    def setUp(self):
        self.settings = Settings()
        self.store = InMemoryMessageStore()
        self.provider = ApiDataProvider(ApiService(self.settings), self.store, self.settings)

    def test_recent_fetch_marker_sets_flag(self):
        _fill(self.store, [None, FETCH_API_ACTION, None, None, None])

        result = _get(self.provider)

        self.assertEqual(result.text, RECENT_ACTIVITY_TEXT)
        self.assertEqual(result.values, {"has_recent_api_data": True, "can_fetch_more": True})

    def test_marker_older_than_last_five_is_ignored(self):
        _fill(self.store, [FETCH_API_ACTION, None, None, None, None, None])

        result = _get(self.provider)

        self.assertEqual(result.text, CAPABILITIES_TEXT)
        self.assertEqual(
            result.values,
            {"has_recent_api_data": False, "available_apis": ["weather", "crypto", "news"]},
        )

    def test_other_actions_do_not_count(self):
        _fill(self.store, ["ERROR", "REPLY", None])
        self.assertFalse(_get(self.provider).values["has_recent_api_data"])

    def test_empty_room(self):
        self.assertFalse(_get(self.provider).values["has_recent_api_data"])

    def test_rooms_are_isolated(self):
        _fill(self.store, [FETCH_API_ACTION], room_id="other-room")
        self.assertFalse(_get(self.provider).values["has_recent_api_data"])
        self.assertTrue(_get(self.provider, "other-room").values["has_recent_api_data"])

    def test_window_size_comes_from_settings(self):
        settings = Settings(recent_message_window=2)
        provider = ApiDataProvider(ApiService(settings), self.store, settings)
        _fill(self.store, [FETCH_API_ACTION, None, None])

        self.assertFalse(_get(provider).values["has_recent_api_data"])

    def test_store_is_not_modified(self):
        _fill(self.store, [FETCH_API_ACTION, None])
        _get(self.provider)
        self.assertEqual(self.store.room_size(ROOM), 2)

    def test_missing_service_or_store_gives_empty_context(self):
        for provider in (ApiDataProvider(None, self.store), ApiDataProvider(ApiService(), None)):
            with self.subTest(provider=provider):
                result = _get(provider)
                self.assertEqual(result.text, "")
                self.assertEqual(result.values, {})


class InMemoryMessageStoreTests(unittest.TestCase):
    def test_newest_first_and_bounded(self):
        store = InMemoryMessageStore()
        _fill(store, [None, None, None])

        recent = asyncio.run(store.get_memories(ROOM, count=2))

        self.assertEqual([memory.text for memory in recent], ["m2", "m1"])
        self.assertEqual(asyncio.run(store.get_memories(ROOM, count=0)), [])
        self.assertEqual(asyncio.run(store.get_memories("missing", count=5)), [])

    def test_ordered_by_creation_time(self):
        store = InMemoryMessageStore()
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        late = Memory(room_id=ROOM, content=Content(text="late"), created_at=start + timedelta(minutes=2))
        early = Memory(room_id=ROOM, content=Content(text="early"), created_at=start)
        middle = Memory(room_id=ROOM, content=Content(text="middle"), created_at=start + timedelta(minutes=1))

        async def add_all():
            for memory in (late, early, middle):
                await store.add_memory(memory)
        asyncio.run(add_all())

        recent = asyncio.run(store.get_memories(ROOM, count=3))
        self.assertEqual([memory.text for memory in recent], ["late", "middle", "early"])

    def test_same_memory_is_stored_once(self):
        store = InMemoryMessageStore()
        memory = Memory(room_id=ROOM, content=Content(text="hi"))

        asyncio.run(store.add_memory(memory))
        asyncio.run(store.add_memory(memory))

        self.assertEqual(store.room_size(ROOM), 1)
