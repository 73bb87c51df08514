# =============================================================================
# core/config.py  -  Settings read from the environment
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Collects every knob the server has into one immutable Settings object.
#   Values come from the process environment, optionally pre-loaded from a
#   .env file in the working directory (python-dotenv).
#
# VARIABLES:
#   PULUMI_ACCESS_TOKEN   Pulumi Cloud access token (sent as "token <TOKEN>")
#   PULUMI_API_URL        Base URL of the REST API (default api.pulumi.com)
#   PULUMI_HTTP_TIMEOUT   Per-request timeout in seconds (unset = wait forever)
#   PULUMI_MCP_LOG_LEVEL  Logging level for the MCP servers (default INFO)
#
# THE TOKEN IS NOT VALIDATED HERE.
#   A missing token only produces a warning.  The first request then fails
#   upstream with an authorization error, which is reported like any other
#   API error.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.pulumi.com"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration shared by the API client and both servers."""

    access_token: str = ""
    api_url: str = DEFAULT_API_URL
    http_timeout: Optional[float] = None
    log_level: str = "INFO"


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring PULUMI_HTTP_TIMEOUT=%r (not a number)", raw)
        return None
    return value if value > 0 else None


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load settings from the environment (and a .env file, if present).

    Variables already set in the environment win over the .env file, which
    is python-dotenv's default behavior.
    """
    load_dotenv(env_file)

    token = os.environ.get("PULUMI_ACCESS_TOKEN", "")
    if not token:
        logger.warning("PULUMI_ACCESS_TOKEN is not set; API calls will be rejected upstream")

    return Settings(
        access_token=token,
        api_url=os.environ.get("PULUMI_API_URL", DEFAULT_API_URL).rstrip("/"),
        http_timeout=_parse_timeout(os.environ.get("PULUMI_HTTP_TIMEOUT")),
        log_level=os.environ.get("PULUMI_MCP_LOG_LEVEL", "INFO").upper(),
    )
