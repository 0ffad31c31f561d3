"""Pytest configuration and fixtures for the Geotab client tests."""

import json
from typing import Any, Callable

import httpx
import pytest

from geotab import Connection, GeotabClient


class FakeGeotab:
    """Serves queued JSON bodies and records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, body: Any, status_code: int = 200) -> None:
        self.responses.append(httpx.Response(status_code, json=body))

    def reply_raw(self, content: bytes, status_code: int = 200) -> None:
        self.responses.append(httpx.Response(status_code, content=content))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def fake_geotab() -> FakeGeotab:
    return FakeGeotab()


@pytest.fixture
def client(fake_geotab):
    client = GeotabClient(transport=httpx.MockTransport(fake_geotab))
    yield client
    client.close()


@pytest.fixture
def connection(client) -> Connection:
    return Connection(
        username="user@example.com",
        database="demo_db",
        session_id="s3ss10n",
        path="my3.geotab.com",
        client=client,
    )


@pytest.fixture
def make_connection(client) -> Callable[..., Connection]:
    def factory(**kwargs: Any) -> Connection:
        kwargs.setdefault("username", "user@example.com")
        kwargs.setdefault("database", "demo_db")
        return Connection(client=client, **kwargs)

    return factory
