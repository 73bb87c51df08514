# =============================================================================
# tools/lowlevel_server.py  -  Low-level MCP server (manual binding)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes the same capabilities as tools/mcp_server.py, but through the
#   low-level mcp.server.Server API: every request type gets an explicit
#   handler, and tool calls are dispatched by name.
#
#     list_resource_templates  -> pulumi://{organization}
#     read_resource            -> organization parsed out of the URI
#     list_tools               -> create_pulumi_stack (hand-written schema)
#     call_tool                -> StackCapabilities.invoke(name, arguments)
#
# ERROR POLICY (differs from the FastMCP binding!):
#   call_tool never fails at the protocol level.  Every outcome, including
#   unknown tools, missing arguments, validation and API errors, comes back
#   as a normal result with one text block.  On failure that block is
#   {"error": "<message>"}, so callers must look at the payload, not at
#   isError.  Unexpected exceptions are logged with a traceback first.
#
# RUNNING THIS SERVER:
#   python -m tools.lowlevel_server   (stdio transport)
# =============================================================================

import asyncio
import json
import logging
from typing import Any, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from core.config import load_settings
from core.errors import CapabilityError, PulumiError, error_envelope
from core.pulumi_client import PulumiClient
from tools.capabilities import (
    CREATE_STACK_DESCRIPTION,
    CREATE_STACK_INPUT_SCHEMA,
    StackCapabilities,
    organization_from_uri,
)
from tools.log import configure_logging, log_status

logger = logging.getLogger(__name__)

SERVER_NAME = "Pulumi MCP Server"
SERVER_VERSION = "1.0.0"
CREATE_STACK_TOOL = "create_pulumi_stack"
STACKS_URI_TEMPLATE = "pulumi://{organization}"


class StackRequestHandlers:
    """One coroutine per MCP request type, all backed by StackCapabilities."""

    def __init__(self, client: PulumiClient):
        self.capabilities = StackCapabilities(client, create_stack_tool=CREATE_STACK_TOOL)

    async def list_resource_templates(self) -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                name="Pulumi Stacks",
                uriTemplate=STACKS_URI_TEMPLATE,
                mimeType="application/json",
            )
        ]

    async def read_resource(self, uri: Any) -> str:
        organization = organization_from_uri(str(uri))
        return await self.capabilities.list_stacks(organization)

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=CREATE_STACK_TOOL,
                description=CREATE_STACK_DESCRIPTION,
                inputSchema=CREATE_STACK_INPUT_SCHEMA,
            )
        ]

    async def call_tool(self, name: str, arguments: Optional[dict]) -> list[types.TextContent]:
        try:
            text = await self.capabilities.invoke(name, arguments)
        except (PulumiError, CapabilityError) as exc:
            log_status(f"{name} failed: {exc}")
            text = json.dumps(error_envelope(exc))
        except Exception as exc:
            logger.exception("unexpected failure in tool %s", name)
            text = json.dumps(error_envelope(exc))
        return [types.TextContent(type="text", text=text)]


def create_lowlevel_server(client: Optional[PulumiClient] = None) -> Server:
    """Build the low-level server and register every handler on it."""
    if client is None:
        client = PulumiClient.from_settings(load_settings())
    handlers = StackRequestHandlers(client)

    app = Server(SERVER_NAME, version=SERVER_VERSION)
    app.list_resource_templates()(handlers.list_resource_templates)
    app.read_resource()(handlers.read_resource)
    app.list_tools()(handlers.list_tools)
    # Input validation is ours: a bad call must still produce the error
    # payload, not a protocol-level rejection.
    app.call_tool(validate_input=False)(handlers.call_tool)
    return app


async def serve() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_lowlevel_server(PulumiClient.from_settings(settings))

    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
