# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ translates between the agent framework and the plugin.  Each
#   tool:
#     1. Calls into core/ or plugin/ (fetch, format, dispatch)
#     2. Returns a small dict the LLM can read, never a raw API payload
#        (unless the caller explicitly asks for raw JSON)
#     3. Converts failures into an "error" field instead of raising
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain fetch or formatting logic (that's in core/)
#   - They do NOT know about Google ADK
# =============================================================================
