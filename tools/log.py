# =============================================================================
# tools/log.py  -  Logging for the MCP servers
# =============================================================================
#
# We log to STDERR because both servers talk MCP over STDOUT (stdin/stdout is
# the transport).  A log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#   - CYAN for incoming requests (tool/resource name + parameters)
#   - GREEN for responses
#   - YELLOW for intermediate status messages
# =============================================================================

import json
import logging
import sys

_CYAN = "\033[36m"     # Requests
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"

logger = logging.getLogger("pulumi_mcp")


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr in the server's format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def log_request(name: str, **params) -> None:
    """Log an incoming tool call or resource read in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(name: str, result):
    """Log the response in GREEN, then return it unchanged."""
    text = result if isinstance(result, str) else json.dumps(result, separators=(",", ":"))
    logger.info(f"{_GREEN}  ← {name} response: {text}{_RESET}")
    return result
