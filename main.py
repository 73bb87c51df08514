# =============================================================================
# main.py  -  Interactive console for the Pulumi stack assistant
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (agent/stack_agent.py), which starts
#      tools/mcp_server.py as an MCP subprocess
#   2. Sets up an in-memory session
#   3. Reads a request from the console ("create stack prod in acme/infra")
#   4. Streams the agent's events, printing each tool call
#   5. Prints the agent's final answer
#
# ENVIRONMENT (.env is loaded first):
#   PULUMI_ACCESS_TOKEN   used by the MCP server subprocess
#   OPENROUTER_API_KEY    used by LiteLlm for the default model
#   PULUMI_AGENT_MODEL    optional LiteLlm model override
#
# To serve the tools to some other MCP client instead, run one of:
#   python -m tools.mcp_server
#   python -m tools.lowlevel_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm reads its API key from the environment when the agent is built,
# so the .env file must be loaded before the agent import.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.stack_agent import create_agent

APP_NAME = "pulumi_stack_assistant"
USER_ID = "console_user"


def summarize_parts(parts) -> tuple[str, list[str]]:
    """Split an event's parts into (last text, names of tools called)."""
    text = ""
    tool_calls = []
    for part in parts or []:
        if getattr(part, "text", None):
            text = part.text
        function_call = getattr(part, "function_call", None)
        if function_call:
            tool_calls.append(function_call.name)
    return text, tool_calls


async def run_agent():
    """Run the stack assistant until the user types quit."""
    print("=" * 70)
    print("  PULUMI STACK ASSISTANT")
    print("  Google ADK + FastMCP + Pulumi Cloud REST API")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask the agent to list or create stacks.")
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

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if not event.content:
                continue
            text, tool_calls = summarize_parts(event.content.parts)
            for tool_name in tool_calls:
                print(f"  🔧 Calling tool: {tool_name}")
            if text:
                final_response = text

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
