# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the plugin)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# crosses the boundary between the plugin and its host runtime.  They carry
# almost no behavior.
#
# WHAT IS NOT MODELLED HERE:
#   Weather, crypto and news payloads stay plain dicts/lists.  Their shape is
#   dictated by the external APIs, they are never persisted, and the
#   formatters (core/formatters.py) are the only code that reads them.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
import uuid


# The marker an action stamps on the content it emits.  The context provider
# looks for it in recent messages to decide whether data was fetched lately.
FETCH_API_ACTION = "FETCH_API_DATA"
ERROR_ACTION = "ERROR"


class Intent(str, Enum):
    """Which data domain a user message is asking about."""

    WEATHER = "weather"
    CRYPTO = "crypto"
    NEWS = "news"
    NONE = "none"


# -----------------------------------------------------------------------------
# Content — one piece of text emitted by an action (or typed by a user)
# -----------------------------------------------------------------------------
@dataclass
class Content:
    """Text plus the name of the action that produced it, if any."""

    text: str = ""
    action: Optional[str] = None


# -----------------------------------------------------------------------------
# Memory — a single stored conversation message
# -----------------------------------------------------------------------------
# The host runtime keeps these per room (conversation).  The provider reads
# the most recent ones; nothing in the plugin writes to the host's store
# except through the runtime.
# -----------------------------------------------------------------------------
@dataclass
class Memory:
    """A message in a conversation room."""

    room_id: str
    content: Content
    entity_id: str = "user"
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def text(self) -> str:
        return self.content.text or ""


@dataclass
class ProviderResult:
    """What a provider hands to the agent's reasoning step."""

    text: str = ""
    values: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# CacheEntry — one cached JSON response
# -----------------------------------------------------------------------------
# key       = URL + serialized request options (see core/api_service.py)
# timestamp = clock reading when the response was stored; the entry is fresh
#             while (now - timestamp) < ttl
# -----------------------------------------------------------------------------
@dataclass
class CacheEntry:
    key: str
    data: Any
    timestamp: float
