"""
Tests for the low-level (manual dispatch) MCP server.
"""
import json

import pytest
from mcp import types

from tools.lowlevel_server import (
    CREATE_STACK_TOOL,
    StackRequestHandlers,
    create_lowlevel_server,
)

from tests.conftest import make_stack

VALID_ARGS = {"organization": "acme", "project": "infra", "stackName": "prod"}


@pytest.fixture
def handlers(client):
    return StackRequestHandlers(client)


def _text(result: list[types.TextContent]) -> str:
    assert len(result) == 1
    assert result[0].type == "text"
    return result[0].text


def test_registers_every_request_type(client):
    app = create_lowlevel_server(client)

    for request_type in (
        types.ListResourceTemplatesRequest,
        types.ReadResourceRequest,
        types.ListToolsRequest,
        types.CallToolRequest,
    ):
        assert request_type in app.request_handlers
    assert app.name == "Pulumi MCP Server"


async def test_list_resource_templates(handlers):
    templates = await handlers.list_resource_templates()

    assert [(t.name, t.uriTemplate) for t in templates] == [("Pulumi Stacks", "pulumi://{organization}")]


async def test_list_tools(handlers):
    tools = await handlers.list_tools()

    assert [t.name for t in tools] == ["create_pulumi_stack"]
    assert tools[0].description == "Create a new Pulumi stack"
    assert tools[0].inputSchema["required"] == ["organization", "project", "stackName"]


async def test_read_resource_lists_the_org(handlers, api):
    api.respond(200, {"stacks": [make_stack(stack="dev"), make_stack(stack="prod")]})

    text = await handlers.read_resource("pulumi://acme")

    assert api.last.url.params["organization"] == "acme"
    assert [s["stackName"] for s in json.loads(text)["stacks"]] == ["dev", "prod"]


async def test_read_resource_empty(handlers, api):
    api.respond(200, {"stacks": []})

    assert json.loads(await handlers.read_resource("pulumi://acme")) == {"stacks": []}


async def test_call_tool_success(handlers, api):
    result = await handlers.call_tool(CREATE_STACK_TOOL, VALID_ARGS)

    assert _text(result) == "Stack infra/prod created in acme"
    assert api.last_json() == {"stackName": "prod"}


async def test_call_tool_upstream_error_is_enveloped(handlers, api):
    api.respond(404, {"code": 404, "message": "Organization 'acme' not found"})

    result = await handlers.call_tool(CREATE_STACK_TOOL, VALID_ARGS)

    assert json.loads(_text(result)) == {"error": "Organization 'acme' not found"}


async def test_call_tool_validation_error_is_enveloped(handlers, api):
    result = await handlers.call_tool(CREATE_STACK_TOOL, {**VALID_ARGS, "project": ""})

    assert json.loads(_text(result)) == {"error": "Validation error: Project name is required"}
    assert api.requests == []


async def test_call_tool_unknown_name(handlers):
    result = await handlers.call_tool("delete_stack", VALID_ARGS)

    assert json.loads(_text(result)) == {"error": "Tool not found: delete_stack"}


@pytest.mark.parametrize("arguments", [None, {}])
async def test_call_tool_without_arguments(handlers, arguments):
    result = await handlers.call_tool(CREATE_STACK_TOOL, arguments)

    assert json.loads(_text(result)) == {"error": "No arguments provided"}


async def test_call_tool_unexpected_error_is_enveloped_and_logged(handlers, monkeypatch, caplog):
    async def explode(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(handlers.capabilities.client, "create_stack", explode)

    with caplog.at_level("ERROR"):
        result = await handlers.call_tool(CREATE_STACK_TOOL, VALID_ARGS)

    assert json.loads(_text(result)) == {"error": "connection reset"}
    assert "unexpected failure in tool create_pulumi_stack" in caplog.text


async def test_each_call_is_independent(handlers, api):
    api.respond(500, {"code": 500, "message": "boom"})

    first = await handlers.call_tool(CREATE_STACK_TOOL, VALID_ARGS)
    second = await handlers.call_tool(CREATE_STACK_TOOL, VALID_ARGS)

    assert json.loads(_text(first)) == {"error": "boom"}
    assert _text(second) == "Stack infra/prod created in acme"
