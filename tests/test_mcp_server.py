"""
Tests for the FastMCP (declarative) server, driven through an in-memory
fastmcp Client.
"""
import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError

from tools.mcp_server import CREATE_STACK_TOOL, STACKS_RESOURCE, create_server

from tests.conftest import make_stack

VALID_ARGS = {"organization": "acme", "project": "infra", "stackName": "prod"}


@pytest.fixture
def server(client):
    return create_server(client)


async def test_publishes_tool_and_resource_template(server):
    async with Client(server) as mcp_client:
        tools = await mcp_client.list_tools()
        templates = await mcp_client.list_resource_templates()

    assert [t.name for t in tools] == [CREATE_STACK_TOOL]
    schema = tools[0].inputSchema
    assert sorted(schema["required"]) == ["organization", "project", "stackName"]
    assert schema["properties"]["stackName"]["minLength"] == 1
    assert [t.uriTemplate for t in templates] == [STACKS_RESOURCE]


async def test_create_stack(server, api):
    async with Client(server) as mcp_client:
        result = await mcp_client.call_tool(CREATE_STACK_TOOL, VALID_ARGS)

    assert result.content[0].text == "Stack infra/prod created in acme"
    assert api.last.url.path == "/api/stacks/acme/infra"
    assert api.last_json() == {"stackName": "prod"}


async def test_create_stack_rejects_empty_field(server, api):
    async with Client(server) as mcp_client:
        with pytest.raises(ToolError):
            await mcp_client.call_tool(CREATE_STACK_TOOL, {**VALID_ARGS, "organization": ""})

    assert api.requests == []


async def test_create_stack_upstream_error_is_a_tool_error(server, api):
    api.respond(409, {"code": 409, "message": "Stack 'prod' already exists"})

    async with Client(server) as mcp_client:
        with pytest.raises(ToolError, match="Stack 'prod' already exists"):
            await mcp_client.call_tool(CREATE_STACK_TOOL, VALID_ARGS)


async def test_read_stacks_resource(server, api):
    api.respond(200, {"stacks": [make_stack()]})

    async with Client(server) as mcp_client:
        contents = await mcp_client.read_resource("stacks://acme")

    assert json.loads(contents[0].text) == {"stacks": [make_stack()]}
    assert api.last.url.params["organization"] == "acme"


async def test_read_stacks_resource_empty(server, api):
    api.respond(200, {"stacks": []})

    async with Client(server) as mcp_client:
        contents = await mcp_client.read_resource("stacks://acme")

    assert json.loads(contents[0].text) == {"stacks": []}


async def test_read_stacks_resource_upstream_error(server, api):
    api.respond(404, {"code": 404, "message": "Organization 'nope' not found"})

    async with Client(server) as mcp_client:
        with pytest.raises(McpError):
            await mcp_client.read_resource("stacks://nope")
