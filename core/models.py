# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Inputs are validated with pydantic before anything touches the network.
# Outputs mirror the Pulumi Cloud REST API payloads.
#
# NAMING:
#   Python attributes are snake_case; the wire format is camelCase.  Every
#   camelCase name is declared as an alias, and populate_by_name lets
#   callers use either spelling.
#
# PASS-THROUGH:
#   Stack and ListStacksResponse allow extra fields.  Whatever the API adds
#   (lastUpdate, resourceCount, tags, ...) survives into the JSON we hand
#   back to the agent.
# =============================================================================

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


# -----------------------------------------------------------------------------
# Inputs
# -----------------------------------------------------------------------------
class CreateStackInput(BaseModel):
    """Parameters for POST /api/stacks/{organization}/{project}."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    organization: str = Field(..., min_length=1)
    project: str = Field(..., min_length=1)
    stack_name: str = Field(..., min_length=1, alias="stackName")


class ListStacksInput(BaseModel):
    """Filters for GET /api/user/stacks.  Every field is optional."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    organization: Optional[str] = None
    project: Optional[str] = None
    tag_name: Optional[str] = Field(default=None, alias="tagName")
    tag_value: Optional[str] = Field(default=None, alias="tagValue")
    continuation_token: Optional[str] = Field(default=None, alias="continuationToken")

    def query_params(self) -> dict[str, str]:
        """Only the filters that were actually supplied, with wire names.

        Empty strings count as "not supplied": they never reach the query.
        """
        pairs = (
            ("organization", self.organization),
            ("project", self.project),
            ("continuationToken", self.continuation_token),
            ("tagName", self.tag_name),
            ("tagValue", self.tag_value),
        )
        return {key: value for key, value in pairs if value}


# -----------------------------------------------------------------------------
# Outputs
# -----------------------------------------------------------------------------
class Stack(BaseModel):
    """One stack as reported by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    org_name: Optional[str] = Field(default=None, alias="orgName")
    project_name: Optional[str] = Field(default=None, alias="projectName")
    stack_name: Optional[str] = Field(default=None, alias="stackName")
    links: dict[str, Any] = Field(default_factory=dict)

    @property
    def self_link(self) -> Optional[str]:
        return self.links.get("self")


class ListStacksResponse(BaseModel):
    """Envelope returned by the list-stacks endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    stacks: list[Stack] = Field(default_factory=list)
    continuation_token: Optional[str] = Field(default=None, alias="continuationToken")

    def to_wire(self) -> dict[str, Any]:
        # exclude_unset keeps the payload as close as possible to what the
        # API sent; "stacks" is always present.
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        data.setdefault("stacks", [])
        return data


# -----------------------------------------------------------------------------
# Validation messages
# -----------------------------------------------------------------------------
# One human-readable message per violated field.  A missing or empty
# required field reads "<Field> name is required"; anything else falls back
# to pydantic's own message, prefixed with the field name.
_REQUIRED_MESSAGES = {
    "organization": "Organization name is required",
    "project": "Project name is required",
    "stackName": "Stack name is required",
    "stack_name": "Stack name is required",
}

_EMPTY_ERROR_TYPES = {"missing", "string_too_short"}


def validation_messages(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else ""
        if error["type"] in _EMPTY_ERROR_TYPES and field in _REQUIRED_MESSAGES:
            messages.append(_REQUIRED_MESSAGES[field])
        elif field:
            messages.append(f"{field}: {error['msg']}")
        else:
            messages.append(error["msg"])
    return messages
