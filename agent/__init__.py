# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent that consumes the Pulumi MCP
# server.
#
# ARCHITECTURAL ROLE:
#   The agent is a client of tools/mcp_server.py.  It starts the server as a
#   subprocess, discovers the create-stack tool and the stacks:// resource,
#   and lets the LLM decide when to call them.
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the API client (that's in core/)
#   - It is NOT the MCP binding (that's in tools/)
# =============================================================================

# Names the agent's prompt refers to; they must match tools/mcp_server.py.
CREATE_STACK_TOOL = "create-stack"
STACKS_RESOURCE = "stacks://{organization}"
