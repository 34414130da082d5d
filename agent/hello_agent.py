# =============================================================================
# agent/hello_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the HelloBot agent: an ADK Agent whose reasoning engine is any
#   LiteLLM-supported model, and whose tools come from our FastMCP server.
#
#   ┌───────────────────────────┐        stdio        ┌──────────────────────┐
#   │  ADK Agent "hellobot"     │ ──────────────────▶ │ FastMCP server       │
#   │  prompt: agent/prompt.py  │                     │ (tools/mcp_server)   │
#   │  model:  LiteLlm(...)     │ ◀────────────────── │ weather/crypto/news  │
#   └───────────────────────────┘                     └──────────────────────┘
#
# MODEL CHOICE:
#   LLM_MODEL defaults to "openrouter/openai/gpt-4o".  LiteLlm reads the
#   matching provider key (OPENROUTER_API_KEY, OPENAI_API_KEY, ...) from the
#   environment.  Any LiteLLM model string works; nothing else changes.
#
# MCP CONNECTION:
#   ADK spawns the server as a subprocess with the current interpreter
#   ("python -m tools.mcp_server", run from the project root) so it shares
#   this virtual environment and this .env.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_hellobot_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def create_agent(model: str | None = None) -> Agent:
    """Create the HelloBot agent wired to the API tool server.

    Args:
        model: LiteLLM model string.  Falls back to $LLM_MODEL, then to
            DEFAULT_MODEL.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
        ),
    )

    return Agent(
        name="hellobot",
        model=LiteLlm(model=model or os.environ.get("LLM_MODEL") or DEFAULT_MODEL),
        instruction=get_hellobot_prompt(),
        tools=[mcp_tools],
    )
