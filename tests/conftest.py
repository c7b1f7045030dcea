"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from untappd_client.client import UntappdClient

TEST_API_KEY = "test-key"


class FakeUntappd:
    """Stand-in for the Untappd API that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.body = json.dumps({"http_code": 200, "response": {}})
        self.error: str | None = None

    def reply(self, payload: Any) -> None:
        self.body = payload if isinstance(payload, str) else json.dumps(payload)

    def fail(self, message: str) -> None:
        self.error = message

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise httpx.ConnectError(self.error, request=request)
        return httpx.Response(200, text=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_api():
    """Provide a fresh fake API per test."""
    return FakeUntappd()


@pytest.fixture
def client(fake_api):
    """Unauthenticated client wired to the fake API."""
    with UntappdClient(TEST_API_KEY, transport=httpx.MockTransport(fake_api.handler)) as api:
        yield api


@pytest.fixture
def auth_client(fake_api):
    """Client authenticated as alice/secret, wired to the fake API."""
    with UntappdClient(
        TEST_API_KEY,
        "alice",
        "secret",
        transport=httpx.MockTransport(fake_api.handler),
    ) as api:
        yield api
