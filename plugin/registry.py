# =============================================================================
# plugin/registry.py  —  Plugin Assembly
# =============================================================================
#
# Builds the "hello-world-api" plugin: one service, one action, one provider.
#
# DEPENDENCY INJECTION INSTEAD OF A SERVICE REGISTRY:
#   The action and provider receive the ApiService instance directly when
#   they are constructed.  There is no runtime lookup by a string key, so a
#   test (or another host) can hand in a fake service and a fake store.
# =============================================================================

from dataclasses import dataclass, field
import logging
from typing import Any, Optional

from core.api_service import ApiService
from core.memory import InMemoryMessageStore
from core.settings import Settings
from plugin.api_data import ApiDataProvider, MessageStore
from plugin.fetch_api import FetchApiAction

logger = logging.getLogger(__name__)

PLUGIN_NAME = "hello-world-api"
PLUGIN_DESCRIPTION = "API fetching capabilities for HelloBot"


@dataclass
class Plugin:
    name: str
    description: str
    services: list[Any] = field(default_factory=list)
    actions: list[Any] = field(default_factory=list)
    providers: list[Any] = field(default_factory=list)
    message_store: Any = None   # history the providers read

    async def start(self) -> None:
        """Start every service; safe to call more than once."""
        for service in self.services:
            await service.on_start()
        logger.info("Plugin %s started", self.name)

    async def stop(self) -> None:
        """Stop every service (clears the API cache)."""
        for service in self.services:
            await service.stop()
        logger.info("Plugin %s stopped", self.name)


def create_api_plugin(
    settings: Optional[Settings] = None,
    service: Optional[ApiService] = None,
    store: Optional[MessageStore] = None,
) -> Plugin:
    """Wire the service, action and provider together.

    Args:
        settings: Configuration; read from the environment when omitted.
        service: Pre-built ApiService (tests pass one with a fake opener).
        store: Message history the provider reads; an in-memory store is
            created when omitted.
    """
    if settings is None:
        settings = service.settings if service is not None else Settings.from_env()
    if service is None:
        service = ApiService(settings)
    if store is None:
        store = InMemoryMessageStore()

    return Plugin(
        name=PLUGIN_NAME,
        description=PLUGIN_DESCRIPTION,
        services=[service],
        actions=[FetchApiAction(service, settings)],
        providers=[ApiDataProvider(service, store, settings)],
        message_store=store,
    )
