"""
Tests for tool registration and the error-redacting execution guard
(authentik_mcp/registry.py).

Tools are registered on a bare FastMCP server and called through FastMCP's
in-memory Client, so the results are exactly what an MCP client receives:
a CallToolResult whose is_error flag and text content we can inspect.
"""

from typing import Annotated

import httpx
import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from authentik_mcp.config import RuntimeConfig
from authentik_mcp.dispatch import PROVIDERS
from authentik_mcp.errors import TOKEN_MARKER, UNKNOWN_ERROR
from authentik_mcp.registry import ERROR_PREFIX, ToolDescriptor, ToolRegistry, guard, render_error

from conftest import TEST_TOKEN, TEST_URL


async def ok_handler() -> str:
    return "ok"


def make_registry(secrets, access_tier="full", categories=None) -> ToolRegistry:
    server = FastMCP(name="registry-test")
    return ToolRegistry(server, RuntimeConfig(access_tier, categories), secrets)


async def call(server: FastMCP, name: str, arguments: dict | None = None):
    async with Client(server) as mcp_client:
        return await mcp_client.call_tool(name, arguments or {}, raise_on_error=False)


async def list_tools(server: FastMCP):
    async with Client(server) as mcp_client:
        return {tool.name: tool for tool in await mcp_client.list_tools()}


class TestRegistration:
    async def test_visible_tool_is_registered(self, secrets):
        registry = make_registry(secrets)

        registered = registry.register(ToolDescriptor("t_read", "Reads.", "read-only", "core", ok_handler))

        assert registered is True
        assert registry.registered == ["t_read"]
        assert "t_read" in await list_tools(registry.server)

    async def test_hidden_tool_does_not_exist(self, secrets):
        registry = make_registry(secrets, access_tier="read-only")

        registered = registry.register(ToolDescriptor("t_write", "Writes.", "full", "core", ok_handler))

        assert registered is False
        assert registry.registered == []
        assert await list_tools(registry.server) == {}

    async def test_hidden_tool_cannot_be_called_by_name(self, secrets):
        registry = make_registry(secrets, categories=frozenset({"flows"}))
        registry.register(ToolDescriptor("t_core", "Core.", "read-only", "core", ok_handler))

        async with Client(registry.server) as mcp_client:
            with pytest.raises(ToolError):
                await mcp_client.call_tool("t_core", {})

    async def test_annotations_follow_descriptor(self, secrets):
        registry = make_registry(secrets)
        registry.register(ToolDescriptor("t_read", "Reads.", "read-only", "core", ok_handler))
        registry.register(ToolDescriptor("t_write", "Writes.", "full", "core", ok_handler))
        registry.register(
            ToolDescriptor("t_delete", "Deletes.", "full", "core", ok_handler, destructive=True)
        )

        tools = await list_tools(registry.server)

        assert tools["t_read"].annotations.readOnlyHint is True
        assert tools["t_read"].annotations.destructiveHint is False
        assert tools["t_write"].annotations.readOnlyHint is False
        assert tools["t_write"].annotations.destructiveHint is False
        assert tools["t_delete"].annotations.destructiveHint is True

    async def test_decorator_keeps_handler_signature(self, secrets):
        registry = make_registry(secrets)

        @registry.tool("t_echo", "Echoes a name.", category="core")
        async def echo(name: Annotated[str, Field(description="Name to echo")]) -> str:
            return f"hello {name}"

        tools = await list_tools(registry.server)
        schema = tools["t_echo"].inputSchema

        assert schema["required"] == ["name"]
        assert schema["properties"]["name"]["description"] == "Name to echo"
        assert tools["t_echo"].description == "Echoes a name."

        result = await call(registry.server, "t_echo", {"name": "world"})
        assert result.is_error is False
        assert result.content[0].text == "hello world"


class TestExecutionGuard:
    async def _failing_tool(self, secrets, error):
        registry = make_registry(secrets)

        @registry.tool("t_fail", "Always fails.", category="core")
        async def fail() -> str:
            raise error

        return await call(registry.server, "t_fail")

    async def test_structured_backend_error(self, secrets):
        request = httpx.Request("POST", f"{TEST_URL}/core/users/")
        response = httpx.Response(400, request=request, json={"name": ["This field is required."]})
        error = httpx.HTTPStatusError("400", request=request, response=response)

        result = await self._failing_tool(secrets, error)

        assert result.is_error is True
        assert result.content[0].text == "Error: 400 Bad Request: name: This field is required."

    async def test_transport_error(self, secrets):
        error = httpx.ConnectError(
            f"cannot reach {TEST_URL}", request=httpx.Request("GET", f"{TEST_URL}/core/users/")
        )

        result = await self._failing_tool(secrets, error)

        assert result.is_error is True
        assert result.content[0].text == "Error: cannot reach [AUTHENTIK_URL]"

    async def test_generic_error_with_token(self, secrets):
        result = await self._failing_tool(secrets, RuntimeError(f"bad token {TEST_TOKEN}"))

        assert result.is_error is True
        assert result.content[0].text == f"Error: bad token {TOKEN_MARKER}"
        assert TEST_TOKEN not in result.content[0].text

    async def test_invalid_discriminator_is_surfaced_verbatim(self, secrets):
        registry = make_registry(secrets)

        @registry.tool("t_dispatch", "Resolves a provider type.", category="providers")
        async def dispatch(provider_type: str) -> str:
            return PROVIDERS.resolve(provider_type, "get").name

        result = await call(registry.server, "t_dispatch", {"provider_type": "bogus_type"})

        assert result.is_error is True
        assert result.content[0].text.startswith('Error: Invalid provider_type "bogus_type". Valid types:')
        assert "microsoft_entra" in result.content[0].text

    async def test_guard_does_not_chain_original_exception(self, secrets):
        async def leaky() -> str:
            raise RuntimeError(f"token={TEST_TOKEN}")

        with pytest.raises(ToolError) as exc_info:
            await guard(leaky, secrets)()

        assert str(exc_info.value) == f"Error: token={TOKEN_MARKER}"
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__context__ is None

    async def test_guard_passes_results_through(self, secrets):
        assert await guard(ok_handler, secrets)() == "ok"


class TestRenderError:
    def test_prefix(self, secrets):
        assert render_error(ValueError("nope"), secrets) == ERROR_PREFIX + "nope"

    def test_unrenderable_error(self, secrets):
        class Exploding(Exception):
            def __str__(self):
                raise RuntimeError("cannot render")

        assert render_error(Exploding(), secrets) == ERROR_PREFIX + UNKNOWN_ERROR
