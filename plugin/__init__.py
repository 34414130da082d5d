# =============================================================================
# plugin/__init__.py
# =============================================================================
# This package holds the units a conversational-agent runtime plugs in:
#
#   FetchApiAction   (fetch_api.py)  validate(message) -> bool
#                                    handler(message, callback) -> bool
#   ApiDataProvider  (api_data.py)   get(message) -> ProviderResult
#   ApiService       (core/)         fetch_api(url, options) -> JSON
#
# These three shapes are the whole boundary with the host.  Dependencies are
# passed in explicitly (see registry.create_api_plugin); nothing here looks
# a service up by name at runtime.
# =============================================================================

from plugin.api_data import ApiDataProvider
from plugin.fetch_api import FetchApiAction
from plugin.registry import Plugin, create_api_plugin
from plugin.runtime import DispatchResult, PluginRuntime

__all__ = [
    "ApiDataProvider",
    "DispatchResult",
    "FetchApiAction",
    "Plugin",
    "PluginRuntime",
    "create_api_plugin",
]
