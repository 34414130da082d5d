# =============================================================================
# core/memory.py  —  In-Memory Message Store
# =============================================================================
#
# The host runtime normally owns conversation history.  When the plugin runs
# on its own (main.py, the MCP server, tests) this store stands in for it.
# The provider only needs one read operation: "the last N messages of a
# room, newest first".
#
# ORDERING:
#   History is kept sorted by Memory.created_at; messages with equal
#   timestamps keep their insertion order.  Adding a memory whose id is
#   already stored is a no-op.
# =============================================================================

import bisect
from collections import defaultdict

from core.models import Memory


def _created_at(memory: Memory):
    return memory.created_at


class InMemoryMessageStore:
    """Per-room message history, ordered by creation time."""

    def __init__(self):
        self._rooms: dict[str, list[Memory]] = defaultdict(list)
        self._ids: set[str] = set()

    async def add_memory(self, memory: Memory) -> Memory:
        if memory.id in self._ids:
            return memory
        self._ids.add(memory.id)
        bisect.insort_right(self._rooms[memory.room_id], memory, key=_created_at)
        return memory

    async def get_memories(self, room_id: str, count: int = 5) -> list[Memory]:
        """The `count` most recent messages of `room_id`, newest first."""
        if count <= 0:
            return []
        history = self._rooms.get(room_id, [])
        return list(reversed(history[-count:]))

    def room_size(self, room_id: str) -> int:
        return len(self._rooms.get(room_id, []))
