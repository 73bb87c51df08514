# =============================================================================
# tools/__init__.py
# =============================================================================
# MCP bindings for the Pulumi stack capabilities.
#
#   capabilities.py     what a create/list request does (shared)
#   mcp_server.py       FastMCP binding: create-stack, stacks://{organization}
#   lowlevel_server.py  mcp.server.Server binding: create_pulumi_stack,
#                       pulumi://{organization}
#   log.py              stderr logging (stdout is the MCP transport)
#
# The two servers are interchangeable front-ends over the same client.  They
# differ only in names and in how failures are reported: the FastMCP server
# lets errors surface as MCP errors, the low-level server returns them as an
# {"error": ...} payload inside a normal result.
# =============================================================================
