# =============================================================================
# main.py  —  Entry Point for the HelloBot Console
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS ON EACH MESSAGE:
#   1. The message is offered to the plugin (plugin/runtime.py).
#      If it matches a weather / crypto / news keyword pattern, the
#      FETCH_API_DATA action answers it directly: a progress line, then the
#      formatted data.  No LLM call is made.
#   2. Otherwise the message goes to the ADK agent, prefixed with the
#      API_DATA provider's context ("I recently fetched some API data...").
#      The agent may still call the MCP data tools on its own.
#
# CONFIGURATION (.env or environment):
#   OPEN_WEATHER_API_KEY   weather lookups
#   NEWS_API_KEY           optional; live headlines instead of placeholders
#   LLM_MODEL              LiteLLM model string for the agent
#   OPENROUTER_API_KEY     (or the key your LLM_MODEL's provider needs)
#   LOG_LEVEL              default INFO
# =============================================================================

import asyncio
import logging

from dotenv import load_dotenv

# Load .env BEFORE anything reads the environment (Settings, LiteLlm).
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.hello_agent import create_agent
from agent.prompt import AGENT_NAME, GREETING
from core.models import Content, Memory
from core.settings import Settings
from plugin.registry import create_api_plugin
from plugin.runtime import AGENT_ENTITY, PluginRuntime

APP_NAME = "hellobot"
USER_ID = "demo_user"
ROOM_ID = "console"

logger = logging.getLogger("main")


async def _print_content(content: Content) -> None:
    print(f"\n🤖 {AGENT_NAME}: {content.text}")


async def _ask_agent(runner: Runner, session_id: str, text: str) -> str:
    """Send one message to the ADK agent and return its final text."""
    user_message = types.Content(role="user", parts=[types.Part(text=text)])

    final_response = ""
    async for event in runner.run_async(
        user_id=USER_ID,
        session_id=session_id,
        new_message=user_message,
    ):
        if event.content and event.content.parts:
            for part in event.content.parts:
                if getattr(part, "text", None):
                    final_response = part.text
                if getattr(part, "function_call", None):
                    print(f"  🔧 Calling tool: {part.function_call.name}")
    return final_response


async def run_console() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    print("=" * 70)
    print(f"  {AGENT_NAME.upper()}  —  weather, crypto prices and news")
    print("=" * 70)

    # =========================================================================
    # Step 1: The plugin (action + provider + fetch service)
    # =========================================================================
    plugin = create_api_plugin(settings)
    await plugin.start()
    runtime = PluginRuntime(plugin)
    if not settings.open_weather_api_key:
        print("⚠️  OPEN_WEATHER_API_KEY is not set; weather lookups will fail politely.")

    # =========================================================================
    # Step 2: The LLM agent for everything the plugin doesn't handle
    # =========================================================================
    print("\n🔧 Initializing agent...")
    session_service = InMemorySessionService()
    runner = Runner(agent=create_agent(), app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)
    print("✅ Ready!\n")
    print(f"🤖 {AGENT_NAME}: {GREETING}")
    print("   (Type 'quit' to exit)")
    print("-" * 70)

    try:
        while True:
            try:
                user_input = input("\n🧑 You: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\n\n👋 Goodbye!")
                break

            if user_input.lower() in ("quit", "exit", "q"):
                print("\n👋 Goodbye!")
                break
            if not user_input:
                continue

            # -----------------------------------------------------------------
            # Keyword action first
            # -----------------------------------------------------------------
            result = await runtime.handle_message(ROOM_ID, user_input, emit=_print_content)
            if result.handled:
                continue

            # -----------------------------------------------------------------
            # Fall back to the agent, with provider context attached
            # -----------------------------------------------------------------
            context = await runtime.compose_context(ROOM_ID)
            prompt = f"{user_input}\n\n[Context: {context}]" if context else user_input

            try:
                reply = await _ask_agent(runner, session.id, prompt)
            except Exception:
                logger.exception("Agent call failed")
                reply = ""

            if reply:
                await runtime.store.add_memory(
                    Memory(room_id=ROOM_ID, content=Content(text=reply), entity_id=AGENT_ENTITY)
                )
                print(f"\n🤖 {AGENT_NAME}:\n\n{reply}")
            else:
                print("\n⚠️  No response generated. The agent may have encountered an error.")
    finally:
        await plugin.stop()


if __name__ == "__main__":
    asyncio.run(run_console())
