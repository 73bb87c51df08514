# =============================================================================
# core/__init__.py
# =============================================================================
# The Pulumi Cloud side of the server: settings, models, errors and the
# REST API client.
#
# Nothing in this package imports FastMCP, the mcp SDK or Google ADK.  The
# client can be used (and tested) without any protocol machinery; tools/
# wraps it for MCP, agent/ consumes the wrapped tools.
# =============================================================================
