# =============================================================================
# plugin/runtime.py  —  Minimal Local Host for the Plugin
# =============================================================================
#
# WHAT THIS IS:
#   Just enough of an agent runtime to drive the plugin from a console or an
#   MCP tool: store the user's message, offer it to each action's validate(),
#   run the first handler that accepts, and store everything it emits.
#
# WHAT THIS IS NOT:
#   A general agent runtime.  Messages no action accepts are left to the
#   caller (main.py hands them to the LLM agent, together with the
#   providers' context from compose_context()).
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from core.memory import InMemoryMessageStore
from core.models import Content, Memory
from plugin.registry import Plugin

AGENT_ENTITY = "agent"

Emit = Callable[[Content], Awaitable[Any]]


@dataclass
class DispatchResult:
    """Outcome of offering one message to the plugin's actions."""

    handled: bool
    success: Optional[bool] = None
    action: Optional[str] = None
    replies: list[Content] = field(default_factory=list)


class PluginRuntime:
    def __init__(self, plugin: Plugin, store: Optional[InMemoryMessageStore] = None):
        self.plugin = plugin
        if store is None:
            store = plugin.message_store if plugin.message_store is not None else InMemoryMessageStore()
        self.store = store

    async def handle_message(
        self,
        room_id: str,
        text: str,
        emit: Optional[Emit] = None,
        entity_id: str = "user",
    ) -> DispatchResult:
        """Store `text` and run the first action that accepts it."""
        message = await self.store.add_memory(
            Memory(room_id=room_id, content=Content(text=text), entity_id=entity_id)
        )

        for action in self.plugin.actions:
            if not await action.validate(message):
                continue

            replies: list[Content] = []

            async def callback(content: Content) -> None:
                replies.append(content)
                await self.store.add_memory(
                    Memory(room_id=room_id, content=content, entity_id=AGENT_ENTITY)
                )
                if emit is not None:
                    await emit(content)

            success = await action.handler(message, callback)
            return DispatchResult(handled=True, success=success, action=action.name, replies=replies)

        return DispatchResult(handled=False)

    async def compose_context(self, room_id: str) -> str:
        """Concatenate every provider's text for the latest message of `room_id`."""
        latest = await self.store.get_memories(room_id, count=1)
        message = latest[0] if latest else Memory(room_id=room_id, content=Content())

        texts = []
        for provider in self.plugin.providers:
            result = await provider.get(message)
            if result.text:
                texts.append(result.text)
        return "\n".join(texts)
