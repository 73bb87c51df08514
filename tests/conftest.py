"""
Shared fixtures for the Pulumi MCP server tests.

No test touches the network: every PulumiClient is built on an
``httpx.MockTransport`` backed by FakePulumiAPI, which records the requests
it receives and answers with queued responses.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from core.pulumi_client import PulumiClient

TEST_TOKEN = "pul-test-token"
TEST_BASE_URL = "https://api.pulumi.test"


class FakePulumiAPI:
    """Stand-in for api.pulumi.com.

    Responses are returned in the order they were queued; once the queue
    is empty every request gets a 200 with ``default_payload``.
    """

    def __init__(self, default_payload: Any = None):
        self.requests: list[httpx.Request] = []
        self._queue: list[httpx.Response] = []
        self.default_payload = {"stacks": []} if default_payload is None else default_payload

    def respond(self, status: int = 200, payload: Any = None, **kwargs) -> "FakePulumiAPI":
        if payload is not None:
            kwargs["json"] = payload
        self._queue.append(httpx.Response(status, **kwargs))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._queue:
            return self._queue.pop(0)
        return httpx.Response(200, json=self.default_payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def make_stack(org: str = "acme", project: str = "infra", stack: str = "prod", **extra) -> dict:
    """A stack exactly as the list endpoint returns it."""
    return {
        "orgName": org,
        "projectName": project,
        "stackName": stack,
        "links": {"self": f"https://app.pulumi.com/{org}/{project}/{stack}"},
        **extra,
    }


@pytest.fixture
def api() -> FakePulumiAPI:
    return FakePulumiAPI()


@pytest.fixture
def client(api: FakePulumiAPI) -> PulumiClient:
    return PulumiClient(TEST_TOKEN, TEST_BASE_URL, transport=httpx.MockTransport(api))
