# =============================================================================
# tools/capabilities.py  -  What the MCP servers can do, independent of binding
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Holds the request-to-client mapping shared by both MCP bindings:
#     - tools/mcp_server.py       (FastMCP, declarative decorators)
#     - tools/lowlevel_server.py  (mcp.server.Server, manual request handlers)
#
#   The bindings only decide HOW a capability is exposed (names, URI scheme,
#   error policy).  WHAT happens when it is called lives here, once.
#
# CAPABILITIES:
#   create stack  -> PulumiClient.create_stack, answers with a confirmation
#   list stacks   -> PulumiClient.list_stacks, answers with the JSON listing
#
# ARGUMENT PARSING:
#   Raw tool arguments arrive as an untyped dict.  They go through
#   parse_create_stack_arguments(), which returns either ParsedArguments or
#   RejectedArguments.  Nothing is unpacked from the dict before that.
# =============================================================================

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from core.errors import (
    CapabilityError,
    MissingArguments,
    PulumiError,
    ToolNotFound,
    ValidationFailed,
)
from core.models import CreateStackInput, validation_messages
from core.pulumi_client import PulumiClient
from tools.log import log_request, log_response, log_status

CREATE_STACK_DESCRIPTION = "Create a new Pulumi stack"

# JSON schema advertised by the manual binding's list-tools handler.
CREATE_STACK_INPUT_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "organization": {
            "type": "string",
            "description": "Organization name to create the stack in",
        },
        "project": {
            "type": "string",
            "description": "Project name",
        },
        "stackName": {
            "type": "string",
            "description": "Stack name",
        },
    },
    "required": ["organization", "project", "stackName"],
}


def confirmation_text(organization: str, project: str, stack_name: str) -> str:
    return f"Stack {project}/{stack_name} created in {organization}"


def organization_from_uri(uri: str) -> str:
    """``pulumi://acme`` -> ``acme``."""
    _, _, rest = str(uri).partition("://")
    return rest.strip("/")


# -----------------------------------------------------------------------------
# Typed argument parsing
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ParsedArguments:
    value: CreateStackInput
    ok: bool = True


@dataclass(frozen=True)
class RejectedArguments:
    error: Union[CapabilityError, PulumiError]
    ok: bool = False


ParseResult = Union[ParsedArguments, RejectedArguments]


def parse_create_stack_arguments(arguments: Optional[Mapping[str, Any]]) -> ParseResult:
    if not arguments:
        return RejectedArguments(MissingArguments())
    try:
        return ParsedArguments(CreateStackInput.model_validate(dict(arguments)))
    except ValidationError as exc:
        return RejectedArguments(ValidationFailed(validation_messages(exc)))


# -----------------------------------------------------------------------------
# The shared adapter
# -----------------------------------------------------------------------------
class StackCapabilities:
    """Maps protocol-level requests onto a PulumiClient.

    Args:
        client: The API client every capability delegates to.
        create_stack_tool: The name the create-stack tool is published
            under; it is the key ``invoke`` dispatches on.
    """

    def __init__(self, client: PulumiClient, *, create_stack_tool: str = "create-stack"):
        self.client = client
        self._tools: dict[str, Callable[[Mapping[str, Any]], Awaitable[str]]] = {
            create_stack_tool: self._call_create_stack,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    async def create_stack(self, organization: str, project: str, stack_name: str) -> str:
        log_request("create_stack", organization=organization, project=project, stackName=stack_name)
        await self.client.create_stack(
            {"organization": organization, "project": project, "stackName": stack_name}
        )
        return log_response("create_stack", confirmation_text(organization, project, stack_name))

    async def list_stacks(self, organization: str) -> str:
        log_request("list_stacks", organization=organization)
        listing = await self.client.list_stacks({"organization": organization})
        if listing is None:
            log_status("API answered 204, no listing")
            return log_response("list_stacks", json.dumps(None))
        log_status(f"Found {len(listing.stacks)} stacks")
        return log_response("list_stacks", json.dumps(listing.to_wire()))

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]]) -> str:
        """Dispatch a tool call by name.

        Raises:
            MissingArguments: the call carried no arguments at all.
            ToolNotFound: no tool is published under ``name``.
        """
        if not arguments:
            raise MissingArguments()
        handler = self._tools.get(name)
        if handler is None:
            raise ToolNotFound(name)
        return await handler(arguments)

    async def _call_create_stack(self, arguments: Mapping[str, Any]) -> str:
        parsed = parse_create_stack_arguments(arguments)
        if not parsed.ok:
            raise parsed.error
        params = parsed.value
        return await self.create_stack(params.organization, params.project, params.stack_name)
