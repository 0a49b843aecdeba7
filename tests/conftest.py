"""
Shared test fixtures for the MCP server test suite.

Nothing here talks to a real authentik instance. The AuthentikClient is
built on an httpx.MockTransport that answers from a route table and records
every request, so tests can assert on exactly what went over the wire.

Key fixtures:
- secrets: the RedactionSecrets matching TEST_TOKEN / TEST_URL
- make_settings: factory for Settings that ignores the real environment
- fake_api: the mock authentik (route table + request log)
- client: an AuthentikClient wired to fake_api
- make_server: factory building the FastMCP server for a given tier/categories
"""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from authentik_mcp.client import AuthentikClient
from authentik_mcp.config import RedactionSecrets, Settings
from authentik_mcp.server import create_server

TEST_TOKEN = "ak-test-token-0123456789abcdef"
TEST_HOST = "https://auth.example.test"
TEST_URL = f"{TEST_HOST}/api/v3"

CONFIG_VARS = (
    "AUTHENTIK_URL",
    "AUTHENTIK_TOKEN",
    "AUTHENTIK_ACCESS_TIER",
    "AUTHENTIK_CATEGORIES",
    "AUTHENTIK_TIMEOUT",
    "MCP_TRANSPORT",
    "MCP_HOST",
    "MCP_PORT",
    "MCP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's own AUTHENTIK_* / MCP_* variables out of the tests."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def secrets() -> RedactionSecrets:
    return RedactionSecrets(token=TEST_TOKEN, base_url=TEST_URL)


@pytest.fixture
def make_settings():
    """
    Factory fixture for Settings.

    Usage in tests:
        def test_something(make_settings):
            settings = make_settings(authentik_access_tier="read-only")
    """

    def _make_settings(**overrides: Any) -> Settings:
        values: dict[str, Any] = {"authentik_url": TEST_HOST, "authentik_token": TEST_TOKEN}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make_settings


# ---------------------------------------------------------------------------
# Mock authentik
# ---------------------------------------------------------------------------


@dataclass
class RecordedRequest:
    method: str
    path: str
    raw_path: str
    params: dict[str, str]
    headers: httpx.Headers
    content: bytes

    def json(self) -> Any:
        return json.loads(self.content) if self.content else None


@dataclass
class FakeAuthentik:
    """
    Route table for httpx.MockTransport.

    Routes are keyed by (method, path) with the path relative to /api/v3,
    e.g. ("GET", "/core/users/"). Unknown routes answer 404.
    """

    routes: dict[tuple[str, str], httpx.Response] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)

    def add(self, method: str, path: str, status: int = 200, json: Any = None, **kwargs: Any) -> None:
        if json is not None:
            kwargs["json"] = json
        self.routes[method, path] = httpx.Response(status, **kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v3")
        # Still percent-encoded, as the backend sees it.
        raw_path = request.url.raw_path.split(b"?")[0].decode("ascii").removeprefix("/api/v3")
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=path,
                raw_path=raw_path,
                params=dict(request.url.params),
                headers=request.headers,
                content=request.read(),
            )
        )
        response = self.routes.get((request.method, path))
        if response is None:
            return httpx.Response(404, json={"detail": "Not found."})
        return response

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def fake_api() -> FakeAuthentik:
    api = FakeAuthentik()
    api.add("GET", "/admin/version/", json={"version_current": "2025.2.1"})
    return api


@pytest.fixture
async def client(fake_api):
    async with AuthentikClient(
        TEST_URL, TEST_TOKEN, transport=httpx.MockTransport(fake_api.handler)
    ) as api_client:
        yield api_client


@pytest.fixture
def make_server(make_settings, client):
    """
    Factory fixture returning (FastMCP server, ToolRegistry) for a configuration.

    Usage in tests:
        async def test_something(make_server):
            mcp, registry = make_server(authentik_access_tier="read-only")
    """

    def _make_server(**overrides: Any):
        return create_server(make_settings(**overrides), client)

    return _make_server
