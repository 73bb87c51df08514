# =============================================================================
# agent/stack_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent that manages Pulumi stacks by talking to our
#   FastMCP server (tools/mcp_server.py).
#
#   ┌────────────────────────┐   stdio (MCP)   ┌───────────────────────────┐
#   │  ADK Agent (LiteLlm)   │ ──────────────▶ │  tools/mcp_server.py      │
#   │                        │                 │   • create-stack          │
#   │  tools:                │                 │   • stacks://{org}        │
#   │   • MCPToolset         │                 └─────────────┬─────────────┘
#   │   • list_stacks()      │                               │ httpx
#   └────────────────────────┘                               ▼
#                                                   api.pulumi.com
#
# WHY TWO TOOL SOURCES?
#   MCPToolset only surfaces MCP *tools*.  The stack listing is an MCP
#   *resource*, so list_stacks() reads it with a fastmcp Client over the
#   same stdio server command.
#
# MODEL:
#   PULUMI_AGENT_MODEL selects the LiteLlm model string
#   (default "openrouter/openai/gpt-4o", which reads OPENROUTER_API_KEY).
# =============================================================================

import json
import os

from fastmcp import Client
from fastmcp.client.transports import StdioTransport
from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool.mcp_toolset import MCPToolset, StdioServerParameters
from mcp.shared.exceptions import McpError

from agent import STACKS_RESOURCE
from agent.prompt import STACK_ASSISTANT_PROMPT

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# "uv run" makes the subprocess use the project's .venv, and "-m" from the
# project root keeps the core/ and tools/ imports resolvable.
SERVER_COMMAND = "uv"
SERVER_ARGS = ["run", "python", "-m", "tools.mcp_server"]


def _server_transport() -> StdioTransport:
    return StdioTransport(command=SERVER_COMMAND, args=SERVER_ARGS, cwd=PROJECT_ROOT)


async def list_stacks(organization: str) -> dict:
    """List the Pulumi stacks of an organization.

    Args:
        organization: The Pulumi organization name (e.g., "acme").

    Returns:
        The listing as {"stacks": [...]}; each stack has orgName,
        projectName and stackName.  On failure, {"error": "<message>"}.
    """
    uri = STACKS_RESOURCE.format(organization=organization)
    try:
        async with Client(_server_transport()) as client:
            contents = await client.read_resource(uri)
    except McpError as exc:
        return {"error": str(exc)}

    data = json.loads(contents[0].text)
    return data if data is not None else {"stacks": []}


def create_agent() -> Agent:
    """Create the Pulumi stack assistant.

    Returns:
        A configured Google ADK Agent with the MCP tools and the stack
        listing tool attached.
    """
    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=SERVER_COMMAND,
            args=SERVER_ARGS,
            cwd=PROJECT_ROOT,
        ),
    )

    return Agent(
        name="pulumi_stack_assistant",
        model=LiteLlm(model=os.environ.get("PULUMI_AGENT_MODEL", DEFAULT_MODEL)),
        instruction=STACK_ASSISTANT_PROMPT,
        tools=[mcp_tools, list_stacks],
    )
