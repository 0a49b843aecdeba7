"""
Tests for the complete tool catalog (authentik_mcp/tools/).

The first group checks catalog-wide invariants: size, unique names, the
closed category set and how the access tier shapes what is registered.
The second group calls a sample of tools through FastMCP's in-memory Client
against the mock authentik and checks the requests they produce.
"""

import json

import pytest
from fastmcp import Client

from authentik_mcp.config import CATEGORIES

from conftest import TEST_TOKEN

CATALOG_SIZE = 245


async def tools_of(mcp):
    return await mcp.get_tools()


async def call(mcp, name: str, arguments: dict | None = None):
    async with Client(mcp) as mcp_client:
        return await mcp_client.call_tool(name, arguments or {}, raise_on_error=False)


class TestCatalogShape:
    async def test_full_catalog_size(self, make_server):
        _, registry = make_server()

        assert len(registry.registered) == CATALOG_SIZE

    async def test_names_are_unique_and_prefixed(self, make_server):
        _, registry = make_server()

        assert len(set(registry.registered)) == len(registry.registered)
        assert all(name.startswith("authentik_") for name in registry.registered)

    async def test_every_category_is_known_and_used(self, make_server):
        mcp, _ = make_server()

        used = set()
        for tool in (await tools_of(mcp)).values():
            assert len(tool.tags) == 1
            used |= tool.tags

        assert used == set(CATEGORIES)

    async def test_every_tool_is_described(self, make_server):
        mcp, _ = make_server()

        for tool in (await tools_of(mcp)).values():
            assert tool.description

    async def test_destructive_tools_need_full_tier(self, make_server):
        mcp, _ = make_server()

        for tool in (await tools_of(mcp)).values():
            if tool.annotations.destructiveHint:
                assert tool.annotations.readOnlyHint is False, tool.name


class TestTierFiltering:
    async def test_read_only_tier_registers_only_read_only_tools(self, make_server):
        mcp, registry = make_server(authentik_access_tier="read-only")

        tools = await tools_of(mcp)

        assert 0 < len(tools) < CATALOG_SIZE
        assert all(tool.annotations.readOnlyHint for tool in tools.values())
        assert "authentik_users_list" in tools
        assert "authentik_users_delete" not in tools
        assert "authentik_crypto_view_private_key" not in tools
        assert "authentik_tokens_view_key" not in tools

    async def test_read_only_is_subset_of_full(self, make_server):
        _, full = make_server()
        _, read_only = make_server(authentik_access_tier="read-only")

        assert set(read_only.registered) < set(full.registered)

    async def test_category_allowlist(self, make_server):
        mcp, registry = make_server(authentik_categories="core,flows")

        tools = await tools_of(mcp)

        assert {tag for tool in tools.values() for tag in tool.tags} == {"core", "flows"}
        assert "authentik_flows_import" in tools
        assert "authentik_providers_list" not in tools

    async def test_tier_and_categories_combine(self, make_server):
        mcp, _ = make_server(authentik_access_tier="read-only", authentik_categories="ssf")

        assert set(await tools_of(mcp)) == {"authentik_ssf_streams_list", "authentik_ssf_streams_get"}


class TestToolCalls:
    async def test_list_tool_returns_json(self, make_server, fake_api):
        fake_api.add("GET", "/core/users/", json={"results": [{"pk": 1, "username": "akadmin"}]})
        mcp, _ = make_server()

        result = await call(mcp, "authentik_users_list", {"username": "akadmin", "is_active": True})

        assert result.is_error is False
        assert json.loads(result.content[0].text) == {"results": [{"pk": 1, "username": "akadmin"}]}
        assert fake_api.last.params == {"username": "akadmin", "is_active": "true"}

    async def test_by_type_create(self, make_server, fake_api):
        fake_api.add("POST", "/providers/oauth2/", status=201, json={"pk": 3})
        mcp, _ = make_server()

        result = await call(
            mcp,
            "authentik_providers_by_type_create",
            {
                "provider_type": "oauth2",
                "name": "grafana",
                "authorization_flow": "flow-uuid",
                "config": {"client_type": "confidential", "name": "ignored"},
            },
        )

        assert result.is_error is False
        assert fake_api.last.json() == {
            "client_type": "confidential",
            "name": "grafana",
            "authorization_flow": "flow-uuid",
        }

    async def test_by_type_rejects_unknown_type(self, make_server, fake_api):
        mcp, _ = make_server()

        result = await call(mcp, "authentik_sources_by_type_list", {"source_type": "bogus_type"})

        assert result.is_error is True
        assert [r for r in fake_api.requests if r.path.startswith("/sources/")] == []

    async def test_delete_message(self, make_server, fake_api):
        fake_api.add("DELETE", "/oauth2/access_tokens/12/", status=204)
        mcp, _ = make_server()

        result = await call(mcp, "authentik_oauth2_access_tokens_delete", {"id": 12})

        assert result.content[0].text == "OAuth2 access token 12 deleted successfully."

    async def test_device_delete_by_type(self, make_server, fake_api):
        fake_api.add("DELETE", "/authenticators/admin/totp/4/", status=204)
        mcp, _ = make_server()

        result = await call(
            mcp, "authentik_authenticators_admin_by_type_delete", {"device_type": "totp", "id": 4}
        )

        assert result.is_error is False
        assert result.content[0].text == "Authenticator device (totp) 4 deleted successfully."

    async def test_flow_import_uploads_yaml(self, make_server, fake_api):
        fake_api.add("POST", "/flows/instances/import/", json={"success": True, "logs": []})
        mcp, _ = make_server()

        result = await call(
            mcp, "authentik_flows_import", {"content": "version: 1\nentries: []\n", "clear": True}
        )

        assert result.is_error is False
        assert fake_api.last.headers["content-type"].startswith("multipart/form-data")
        assert b"entries: []" in fake_api.last.content

    async def test_icon_requires_url_or_clear(self, make_server, fake_api):
        mcp, _ = make_server()

        result = await call(mcp, "authentik_apps_set_icon_url", {"slug": "grafana"})

        assert result.is_error is True
        assert result.content[0].text == 'Error: Either "url" or "clear: true" must be provided.'
        assert fake_api.requests == []

    async def test_unassign_twice_succeeds_twice(self, make_server, fake_api):
        fake_api.add("PATCH", "/rbac/permissions/assigned_by_roles/r1/unassign/", status=204)
        mcp, _ = make_server()
        arguments = {"uuid": "r1", "permissions": ["authentik_core.view_user"]}

        first = await call(mcp, "authentik_rbac_permissions_by_role_unassign", arguments)
        second = await call(mcp, "authentik_rbac_permissions_by_role_unassign", arguments)

        assert first.is_error is second.is_error is False
        assert first.content[0].text == second.content[0].text

    async def test_backend_error_is_redacted(self, make_server, fake_api):
        fake_api.add(
            "POST",
            "/core/users/",
            status=400,
            json={"username": ["This field is required."], "detail": f"token {TEST_TOKEN}"},
        )
        mcp, _ = make_server()

        result = await call(mcp, "authentik_users_create", {"username": "", "name": "x"})

        assert result.is_error is True
        text = result.content[0].text
        assert text.startswith("Error: 400 Bad Request: username: This field is required.")
        assert TEST_TOKEN not in text

    @pytest.mark.parametrize("tier", ["read-only", "full"])
    async def test_read_tools_work_in_every_tier(self, make_server, fake_api, tier):
        fake_api.add("GET", "/root/config/", json={"capabilities": []})
        mcp, _ = make_server(authentik_access_tier=tier)

        result = await call(mcp, "authentik_root_config")

        assert result.is_error is False
