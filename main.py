# =============================================================================
# main.py  —  Entry Point for the UseGrant Administrator Agent
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads settings from the environment / .env (core/config.py)
#   2. Creates the Google ADK agent (agent/admin_agent.py)
#   3. Sets up an interactive session
#   4. Streams the agent's response, showing each tool it calls
#
# REQUIRED ENVIRONMENT:
#   USEGRANT_API_KEY          UseGrant API key
#   USEGRANT_CLIENT_FACTORY   "module:attribute" building the SDK client
#   OPENROUTER_API_KEY        (or whichever key AGENT_MODEL needs)
# =============================================================================

import asyncio

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.admin_agent import create_agent
from core.config import load_settings

APP_NAME = "usegrant_admin"
USER_ID = "admin"


async def run_agent():
    """Run the UseGrant administrator agent interactively."""

    # load_settings() also loads .env, which must happen before LiteLlm
    # looks for its provider key.
    settings = load_settings()

    print("=" * 70)
    print("  USEGRANT ADMINISTRATOR AGENT")
    print(f"  Powered by Google ADK + {settings.agent_model} + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent(settings)

    # =========================================================================
    # Runner + Session
    # =========================================================================
    # InMemorySessionService keeps the conversation in RAM; one session per
    # console run.
    # =========================================================================
    session_service = InMemorySessionService()

    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )

    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask the agent to manage providers, clients, tenants or policies.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

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

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        # =====================================================================
        # Stream the agent's response
        # =====================================================================
        # Events carry either text (the agent talking) or function calls
        # (the agent invoking a UseGrant tool).  We echo tool names as they
        # happen and keep the last text part as the final answer.
        # =====================================================================
        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text

                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
