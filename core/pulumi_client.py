# =============================================================================
# core/pulumi_client.py  -  Pulumi Cloud REST API client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns two operations (create stack, list stacks) into HTTP calls against
#   the Pulumi Cloud REST API and maps the responses back.
#
#   https://www.pulumi.com/docs/pulumi-cloud/reference/cloud-rest-api/
#
# THE FLOW OF ONE CALL:
#   1. Validate the input with its pydantic model (core/models.py).
#      A bad input raises ValidationFailed BEFORE any request is sent.
#   2. Build method + path + query + body.
#   3. _request() attaches the fixed headers and sends it (httpx, async).
#   4. status >= 400  -> UpstreamFailed carrying the parsed body unchanged
#      status == 204  -> None
#      otherwise      -> parsed JSON
#
# WHAT THIS CLIENT DOES NOT DO:
#   No retries, no pagination (continuation tokens are passed through), no
#   caching.  It holds only the base URL and the token, both fixed at
#   construction, so concurrent calls never share mutable state.  Each call
#   opens its own httpx.AsyncClient.
# =============================================================================

import json
import logging
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.config import DEFAULT_API_URL, Settings
from core.errors import UpstreamFailed, ValidationFailed
from core.models import (
    CreateStackInput,
    ListStacksInput,
    ListStacksResponse,
    validation_messages,
)

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.pulumi+8"


def _validate(model: type, data: Any):
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data or {}))
    except ValidationError as exc:
        raise ValidationFailed(validation_messages(exc)) from exc


class PulumiClient:
    """Async client for the subset of the Pulumi Cloud API this server exposes."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        # Only used by tests (httpx.MockTransport); None means real network.
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "PulumiClient":
        return cls(
            settings.access_token,
            settings.api_url,
            timeout=settings.http_timeout,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # -------------------------------------------------------------------------
    # POST /api/stacks/{organization}/{project}
    # -------------------------------------------------------------------------
    async def create_stack(self, input: Union[CreateStackInput, Mapping[str, Any]]) -> bool:
        """Create a new stack in the given organization and project.

        Args:
            input: A CreateStackInput, or a mapping with ``organization``,
                ``project`` and ``stackName`` (``stack_name`` also accepted).

        Returns:
            True once the API accepted the request.

        Raises:
            ValidationFailed: a required field is missing or empty.
            UpstreamFailed: the API answered with an error status.
        """
        params = _validate(CreateStackInput, input)

        path = f"/api/stacks/{quote(params.organization, safe='')}/{quote(params.project, safe='')}"
        await self._request(path, method="POST", body={"stackName": params.stack_name})
        return True

    # -------------------------------------------------------------------------
    # GET /api/user/stacks
    # -------------------------------------------------------------------------
    async def list_stacks(
        self, input: Union[ListStacksInput, Mapping[str, Any], None] = None
    ) -> Optional[ListStacksResponse]:
        """List the stacks visible to the token, optionally filtered.

        Only non-empty filters are sent.  A continuation token, if given, is
        forwarded as-is; following further pages is up to the caller.

        Returns:
            The parsed listing, or None if the API answered 204.
        """
        params = _validate(ListStacksInput, input)

        data = await self._request("/api/user/stacks", query=params.query_params())
        if data is None:
            return None
        return ListStacksResponse.model_validate(data)

    # -------------------------------------------------------------------------
    # Shared request execution
    # -------------------------------------------------------------------------
    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": ACCEPT_HEADER,
            "Authorization": f"token {self._token}",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        path: str,
        *,
        method: str = "GET",
        query: Optional[Mapping[str, str]] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        content = json.dumps(body) if body is not None else None

        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(
                method,
                path,
                params=query or None,
                content=content,
                headers=self._headers(headers),
            )

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if response.status_code >= 400:
            raise UpstreamFailed.from_body(
                response.status_code,
                _parse_error_body(response),
                response.reason_phrase or response.text,
            )
        if response.status_code == 204:
            return None
        return response.json()


def _parse_error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
