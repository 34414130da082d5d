# =============================================================================
# plugin/api_data.py  —  The API_DATA Context Provider
# =============================================================================
#
# Before the agent reasons about a reply, the host asks every provider for
# context.  This one looks at the last few messages of the room and tells the
# agent whether API data was fetched recently (a message tagged
# FETCH_API_DATA), so it can offer a refresh instead of a first fetch.
#
# Read-only: it never writes to the message store.
# =============================================================================

import logging
from typing import Any, Optional, Protocol

from core.api_service import ApiService
from core.models import FETCH_API_ACTION, Memory, ProviderResult
from core.settings import Settings

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_TEXT = (
    "I recently fetched some API data in our conversation. "
    "I can get updated information if needed."
)
CAPABILITIES_TEXT = (
    "I can fetch real-time data from various APIs like weather, "
    "cryptocurrency prices, and news."
)
AVAILABLE_APIS = ("weather", "crypto", "news")


class MessageStore(Protocol):
    async def get_memories(self, room_id: str, count: int = 5) -> list[Memory]: ...


class ApiDataProvider:
    """Surfaces whether the conversation recently included an API fetch."""

    name = "API_DATA"
    description = "Provides context about recently fetched API data"

    def __init__(
        self,
        service: Optional[ApiService],
        store: Optional[MessageStore],
        settings: Optional[Settings] = None,
    ):
        self.service = service
        self.store = store
        self.settings = settings or (service.settings if service is not None else Settings())

    async def get(self, message: Memory, state: Any = None) -> ProviderResult:
        if self.service is None or self.store is None:
            logger.debug("%s provider has no service or store; returning empty context", self.name)
            return ProviderResult(text="", values={})

        recent = await self.store.get_memories(
            room_id=message.room_id,
            count=self.settings.recent_message_window,
        )
        # The store may hand back more than asked; only the window counts.
        recent = recent[: self.settings.recent_message_window]

        if any(memory.content.action == FETCH_API_ACTION for memory in recent):
            return ProviderResult(
                text=RECENT_ACTIVITY_TEXT,
                values={"has_recent_api_data": True, "can_fetch_more": True},
            )

        return ProviderResult(
            text=CAPABILITIES_TEXT,
            values={"has_recent_api_data": False, "available_apis": list(AVAILABLE_APIS)},
        )
