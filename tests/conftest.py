"""Root pytest fixtures for nylas-client tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from nylas_client.batch import HttpMethod, Task
from nylas_client.transport import RawResponse

TEST_SERVER = "https://api.nylas.test"
TEST_TOKEN = "test-access-token"


class FakeTransport:
    """In-memory transport recording calls and concurrency.

    Responses are looked up by request path; unknown paths answer
    ``200 {"ok": true}``. A response may be an exception to raise.
    """

    base_url = TEST_SERVER

    def __init__(
        self,
        responses: Mapping[str, RawResponse | Exception] | None = None,
        delays: Mapping[str, float] | None = None,
        default_delay: float = 0.0,
    ) -> None:
        self.responses = dict(responses or {})
        self.delays = dict(delays or {})
        self.default_delay = default_delay
        self.calls: list[dict[str, Any]] = []
        self.started: list[str] = []
        self.finished: list[str] = []
        self.active = 0
        self.peak = 0

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        self.calls.append(
            {"method": method, "path": path, "params": params, "headers": headers, "json": json}
        )
        self.started.append(path)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delays.get(path, self.default_delay))
        finally:
            self.active -= 1
            self.finished.append(path)

        response = self.responses.get(path, RawResponse(200, '{"ok": true}'))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header used by test Tasks."""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def event_task(auth_headers: dict[str, str]) -> Callable[[str], Task]:
    """Build a GET /events/<id> Task."""

    def build(event_id: str) -> Task:
        return Task(HttpMethod.GET, "/events/%s", event_id, headers=auth_headers)

    return build


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def server() -> str:
    """Base URL of the mocked API."""
    return TEST_SERVER


@pytest.fixture
def access_token() -> str:
    """Access token configured on test clients."""
    return TEST_TOKEN
