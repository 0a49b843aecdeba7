"""
Wire-level tests for the authentik client (authentik_mcp/client.py).

Every request goes through httpx.MockTransport; the fake records method,
path, query string, headers and body so the tests can check exactly what
authentik would receive.
"""

import httpx
import pytest

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import Operation

from conftest import TEST_TOKEN, TEST_URL


class TestRequests:
    async def test_auth_and_accept_headers(self, client, fake_api):
        fake_api.add("GET", "/core/users/", json={"results": []})

        await client.core.list("users")

        assert fake_api.last.headers["authorization"] == f"Bearer {TEST_TOKEN}"
        assert fake_api.last.headers["accept"] == "application/json"

    async def test_none_filters_are_dropped(self, client, fake_api):
        fake_api.add("GET", "/core/users/", json={"results": []})

        await client.core.list("users", username="akadmin", is_active=False, search=None, page=None)

        assert fake_api.last.params == {"username": "akadmin", "is_active": "false"}

    async def test_paths_end_with_slash(self, client, fake_api):
        fake_api.add("POST", "/core/users/42/set_password/", status=204)

        await client.core.post("users", 42, "set_password", body={"password": "s3cret"})

        assert fake_api.last.path == "/core/users/42/set_password/"
        assert fake_api.last.json() == {"password": "s3cret"}

    async def test_post_with_query(self, client, fake_api):
        fake_api.add("POST", "/core/users/5/recovery_email/", status=204)

        await client.core.post("users", 5, "recovery_email", email_stage="abc")

        assert fake_api.last.params == {"email_stage": "abc"}
        assert fake_api.last.content == b""

    async def test_partial_update_and_update_verbs(self, client, fake_api):
        fake_api.add("PATCH", "/core/groups/g1/", json={})
        fake_api.add("PUT", "/core/groups/g1/", json={})

        await client.core.partial_update("groups", "g1", {"name": "a"})
        await client.core.update("groups", "g1", {"name": "b"})

        assert [r.method for r in fake_api.requests] == ["PATCH", "PUT"]

    async def test_post_form_sends_multipart(self, client, fake_api):
        fake_api.add("POST", "/flows/instances/import/", json={"success": True})

        await client.flows.post_form(
            "instances",
            "import",
            form={"clear": True},
            files={"file": ("flow.yaml", "version: 1\n", "application/x-yaml")},
        )

        request = fake_api.last
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="clear"' in request.content
        assert b"True" in request.content
        assert b'filename="flow.yaml"' in request.content
        assert b"version: 1" in request.content


class TestPathSegments:
    async def test_lookup_cannot_climb_out_of_its_resource(self, client, fake_api):
        fake_api.add("GET", "/core/tokens/admin-token/view_key/", json={"key": "secret"})

        with pytest.raises(httpx.HTTPStatusError):
            await client.flows.retrieve("instances", "../../core/tokens/admin-token/view_key")

        assert fake_api.last.raw_path == "/flows/instances/..%2F..%2Fcore%2Ftokens%2Fadmin-token%2Fview_key/"
        assert not any(r.path.startswith("/core/") for r in fake_api.requests)

    async def test_lookup_is_one_segment(self, client, fake_api):
        with pytest.raises(httpx.HTTPStatusError):
            await client.core.post("users", "a/b?c#d", "set_password", body={})

        assert fake_api.last.raw_path == "/core/users/a%2Fb%3Fc%23d/set_password/"
        assert fake_api.last.params == {}

    @pytest.mark.parametrize("lookup", ["", ".", ".."])
    async def test_empty_and_dot_lookups_are_rejected(self, client, fake_api, lookup):
        with pytest.raises(ValueError, match="Invalid path segment"):
            await client.core.destroy("users", lookup)

        assert [r for r in fake_api.requests if r.method == "DELETE"] == []

    async def test_resource_may_span_segments(self, client, fake_api):
        fake_api.add("GET", "/stages/invitation/invitations/", json={"results": []})

        await client.stages.list("invitation/invitations")

        assert fake_api.last.raw_path == "/stages/invitation/invitations/"


class TestResponses:
    async def test_json_is_decoded(self, client, fake_api):
        fake_api.add("GET", "/core/users/1/", json={"pk": 1})

        assert await client.core.retrieve("users", 1) == {"pk": 1}

    async def test_no_content_is_none(self, client, fake_api):
        fake_api.add("DELETE", "/core/users/1/", status=204)

        assert await client.core.destroy("users", 1) is None

    async def test_text_is_returned_as_is(self, client, fake_api):
        fake_api.add(
            "GET",
            "/flows/instances/default-auth/export/",
            text="version: 1\nentries: []\n",
            headers={"content-type": "application/x-yaml"},
        )

        assert await client.flows.get("instances", "default-auth", "export") == (
            "version: 1\nentries: []\n"
        )

    async def test_error_status_raises_with_response(self, client, fake_api):
        fake_api.add("POST", "/core/users/", status=400, json={"username": ["Required."]})

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.core.create("users", {})

        assert exc_info.value.response.status_code == 400

    async def test_unknown_route_is_404(self, client):
        with pytest.raises(httpx.HTTPStatusError):
            await client.core.retrieve("users", 999)


class TestExecute:
    async def test_requires_named_body(self, client):
        operation = Operation("core_users_create", "create", "users", body_key="user_request")

        with pytest.raises(TypeError, match="missing request body 'user_request'"):
            await client.core.execute(operation)

    async def test_rejects_unexpected_keywords(self, client):
        operation = Operation("core_users_list", "list", "users")

        with pytest.raises(TypeError, match="unexpected arguments: user_request"):
            await client.core.execute(operation, user_request={})

    async def test_lookup_required_for_get(self, client):
        operation = Operation("core_users_retrieve", "get", "users")

        with pytest.raises(TypeError, match="requires a lookup value"):
            await client.core.execute(operation)


class TestClientLifecycle:
    async def test_facets_are_cached(self, client):
        assert client.core is client.core
        assert client.core is not client.flows
        assert client.propertymappings.family == "propertymappings"

    async def test_only_families_with_tools_have_facets(self, client):
        assert not hasattr(client, "schema")

    async def test_validate_connection_returns_version(self, client):
        assert await client.validate_connection() == "2025.2.1"

    async def test_transport_failure_is_request_error(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with AuthentikClient(TEST_URL, TEST_TOKEN, transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(httpx.RequestError):
                await client.validate_connection()
