# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration for HelloBot.
#
# ARCHITECTURAL ROLE:
#   The agent answers everything the keyword action (plugin/fetch_api.py)
#   does not catch: greetings, small talk, and data questions phrased in ways
#   the keyword patterns miss.  For the latter it calls the MCP tools in
#   tools/mcp_server.py, which reuse the same fetch/cache/format code.
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the fetch or formatting logic (that's in core/)
#   - It is NOT the host-facing action/provider (that's in plugin/)
# =============================================================================
