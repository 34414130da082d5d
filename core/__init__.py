# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the business logic for the HelloBot API plugin:
# intent matching, the fetch-with-cache service, and response formatting.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any agent
#   runtime.  Every module here is plain Python and can be exercised in a
#   bare REPL (network calls aside).
#
# The host-facing units (action, provider, plugin assembly) live in plugin/.
# The MCP wrappers live in tools/.  The agent lives in agent/.
# =============================================================================
