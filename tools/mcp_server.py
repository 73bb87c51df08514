# =============================================================================
# tools/mcp_server.py  -  FastMCP server (declarative binding)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes the stack capabilities with FastMCP decorators:
#
#     tool      create-stack              organization, project, stackName
#     resource  stacks://{organization}   JSON list of the org's stacks
#
#   Each handler is a one-liner into tools/capabilities.py.  FastMCP derives
#   the input schema from the signature and validates arguments with
#   pydantic before the handler runs.
#
# ERROR POLICY:
#   Nothing is caught here.  A ValidationFailed or UpstreamFailed raised by
#   the client propagates to FastMCP, which reports it as an MCP error
#   (isError on tool results, a JSON-RPC error on resource reads).  Compare
#   tools/lowlevel_server.py, which wraps every failure in a normal result.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server        (stdio transport)
#   fastmcp run tools/mcp_server.py
# =============================================================================

from typing import Optional

from fastmcp import FastMCP
from pydantic import Field

from core.config import load_settings
from core.pulumi_client import PulumiClient
from tools.capabilities import CREATE_STACK_DESCRIPTION, StackCapabilities
from tools.log import configure_logging

SERVER_NAME = "Pulumi MCP Server"
CREATE_STACK_TOOL = "create-stack"
STACKS_RESOURCE = "stacks://{organization}"


def create_server(client: Optional[PulumiClient] = None) -> FastMCP:
    """Build the FastMCP server around ``client``.

    Without a client, one is built from the environment (PULUMI_ACCESS_TOKEN
    and friends, see core/config.py).
    """
    if client is None:
        client = PulumiClient.from_settings(load_settings())
    capabilities = StackCapabilities(client, create_stack_tool=CREATE_STACK_TOOL)

    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(name=CREATE_STACK_TOOL, description=CREATE_STACK_DESCRIPTION)
    async def create_stack(
        organization: str = Field(min_length=1, description="Organization name to create the stack in"),
        project: str = Field(min_length=1, description="Project name"),
        stackName: str = Field(min_length=1, description="Stack name"),
    ) -> str:
        """Create a new Pulumi stack.

        WHEN TO CALL THIS: only once the user has given all three names.
        Do not invent an organization or project.

        Returns:
            "Stack <project>/<stackName> created in <organization>".
        """
        return await capabilities.create_stack(organization, project, stackName)

    @mcp.resource(
        STACKS_RESOURCE,
        name="stacks",
        description="Stacks in a Pulumi organization",
        mime_type="application/json",
    )
    async def stacks(organization: str) -> str:
        return await capabilities.list_stacks(organization)

    return mcp


# The module-level instance is what `fastmcp run` and the agent pick up.
mcp = create_server()


def main() -> None:
    configure_logging(load_settings().log_level)
    mcp.run()


if __name__ == "__main__":
    main()
