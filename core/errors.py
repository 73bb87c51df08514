# =============================================================================
# core/errors.py  -  Error taxonomy
# =============================================================================
#
# Every failure the server can report is one of a small, closed set:
#
#   PulumiError                 code + message, the canonical error shape
#     ├── ValidationFailed      input rejected locally (code 400)
#     └── UpstreamFailed        the REST API answered with status >= 400
#
#   CapabilityError             request could not be mapped to a tool call
#     ├── ToolNotFound          unknown tool name
#     └── MissingArguments      tool call carried no arguments
#
# error_envelope() is the ONLY place an exception becomes the outward-facing
# {"error": <message>} payload.  Servers never format errors themselves.
# =============================================================================

from typing import Any, Iterable


class PulumiError(Exception):
    """Base class for errors that carry a Pulumi-style (code, message) pair."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationFailed(PulumiError):
    """Input failed schema validation before any network call was made."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(400, f"Validation error: {', '.join(self.fields)}")


class UpstreamFailed(PulumiError):
    """The Pulumi API returned an error response.

    ``body`` is the parsed response body exactly as the API sent it.  The
    code and message are lifted from it when the API used its usual
    ``{"code": ..., "message": ...}`` shape.
    """

    def __init__(self, code: int, message: str, body: Any = None):
        super().__init__(code, message)
        self.body = body

    @classmethod
    def from_body(cls, status: int, body: Any, fallback_message: str = "") -> "UpstreamFailed":
        code, message = status, fallback_message
        if isinstance(body, dict):
            if isinstance(body.get("code"), int):
                code = body["code"]
            if body.get("message") is not None:
                message = str(body["message"])
        elif body is not None:
            message = str(body)
        return cls(code, message or f"HTTP {status}", body)


class CapabilityError(Exception):
    """A protocol request could not be turned into a client call."""


class ToolNotFound(CapabilityError):
    def __init__(self, name: str):
        super().__init__(f"Tool not found: {name}")
        self.name = name


class MissingArguments(CapabilityError):
    def __init__(self):
        super().__init__("No arguments provided")


def error_message(exc: BaseException) -> str:
    if isinstance(exc, PulumiError):
        return exc.message
    return str(exc)


def error_envelope(exc: BaseException) -> dict:
    """Convert any exception to the ``{"error": <message>}`` payload."""
    return {"error": error_message(exc)}
