"""
Unit tests for the type dispatch tables (authentik_mcp/dispatch.py).

The tables are pure data built at import time, so most of these tests walk
every row. The invoke() tests go through a real ApiFacet on the mock
transport to check that the resolved operation becomes the right request.
"""

from typing import get_args

import pytest

from authentik_mcp.dispatch import (
    AUTHENTICATOR_DEVICES_ADMIN,
    AUTHENTICATOR_DEVICES_USER,
    OPERATION_KINDS,
    POLICIES,
    PROPERTY_MAPPINGS,
    PROVIDERS,
    SOURCES,
    STAGES,
    DeviceType,
    DispatchEntry,
    InvalidDiscriminatorError,
    PolicyType,
    PropertyMappingType,
    ProviderType,
    SourceType,
    StageType,
    TypeDispatchTable,
)

FULL_TABLES = {
    "stages": (STAGES, StageType, 24),
    "providers": (PROVIDERS, ProviderType, 9),
    "policies": (POLICIES, PolicyType, 8),
    "sources": (SOURCES, SourceType, 6),
    "property_mappings": (PROPERTY_MAPPINGS, PropertyMappingType, 14),
}


class TestTableCompleteness:
    @pytest.mark.parametrize("family", sorted(FULL_TABLES))
    def test_types_match_literal_alias(self, family):
        table, alias, size = FULL_TABLES[family]

        assert table.types == get_args(alias)
        assert len(table) == size

    @pytest.mark.parametrize("family", sorted(FULL_TABLES))
    def test_every_type_resolves_every_kind(self, family):
        table, _, _ = FULL_TABLES[family]

        for value in table.types:
            for kind in OPERATION_KINDS:
                operation = table.resolve(value, kind)
                assert operation.name
                assert operation.kind == kind
                if kind in ("create", "update"):
                    assert operation.body_key
                else:
                    assert operation.body_key is None

    @pytest.mark.parametrize("family", sorted(FULL_TABLES))
    def test_operation_names_are_unique(self, family):
        table, _, _ = FULL_TABLES[family]

        names = [table.resolve(value, kind).name for value in table.types for kind in OPERATION_KINDS]

        assert len(names) == len(set(names))

    def test_device_tables(self):
        devices = get_args(DeviceType)

        assert AUTHENTICATOR_DEVICES_ADMIN.types == devices
        assert AUTHENTICATOR_DEVICES_USER.types == devices
        assert AUTHENTICATOR_DEVICES_ADMIN.kinds == ("list", "get", "delete")
        assert AUTHENTICATOR_DEVICES_USER.kinds == ("list",)
        assert AUTHENTICATOR_DEVICES_ADMIN.resolve("totp", "get").resource == "admin/totp"
        assert AUTHENTICATOR_DEVICES_USER.resolve("totp", "list").resource == "totp"


class TestResolve:
    def test_oauth2_provider_create(self):
        operation = PROVIDERS.resolve("oauth2", "create")

        assert operation.name == "providers_oauth2_create"
        assert operation.resource == "oauth2"
        assert operation.body_key == "oauth2_provider_request"

    def test_update_uses_patched_request(self):
        operation = STAGES.resolve("authenticator_webauthn", "update")

        assert operation.name == "stages_authenticator_webauthn_partial_update"
        assert operation.resource == "authenticator/webauthn"
        assert operation.body_key == "patched_authenticator_web_authn_stage_request"

    def test_nested_resource_path(self):
        operation = PROPERTY_MAPPINGS.resolve("provider_scope", "get")

        assert operation.name == "propertymappings_provider_scope_retrieve"
        assert operation.resource == "provider/scope"

    def test_bogus_provider_lists_all_nine(self):
        with pytest.raises(InvalidDiscriminatorError) as exc_info:
            PROVIDERS.resolve("bogus_type", "create")

        error = exc_info.value
        assert error.valid == get_args(ProviderType)
        assert str(error) == (
            'Invalid provider_type "bogus_type". Valid types: oauth2, saml, ldap, proxy, '
            "radius, scim, rac, google_workspace, microsoft_entra"
        )

    def test_unsupported_kind(self):
        with pytest.raises(ValueError, match="does not support 'create'"):
            AUTHENTICATOR_DEVICES_USER.resolve("totp", "create")

    def test_contains(self):
        assert "saml" in SOURCES
        assert "bogus" not in SOURCES


class TestTableConstruction:
    def test_duplicate_discriminator_is_rejected(self):
        with pytest.raises(ValueError, match="duplicate widget_type 'a'"):
            TypeDispatchTable(
                "widgets",
                "widget_type",
                [DispatchEntry.for_request("a", "a", "a"), DispatchEntry.for_request("a", "b", "b")],
            )

    def test_missing_body_key_is_rejected(self):
        with pytest.raises(ValueError, match="has no create body key"):
            TypeDispatchTable("widgets", "widget_type", [DispatchEntry("a", "a")])

    def test_body_keys_not_needed_without_mutations(self):
        table = TypeDispatchTable("widgets", "widget_type", [DispatchEntry("a", "a")], kinds=("list",))

        assert table.resolve("a", "list").name == "widgets_a_list"

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValueError, match="unknown operation kinds"):
            TypeDispatchTable("widgets", "widget_type", [], kinds=("list", "explode"))


class TestInvoke:
    async def test_create_posts_payload_to_variant(self, client, fake_api):
        fake_api.add("POST", "/providers/oauth2/", status=201, json={"pk": 7, "name": "grafana"})

        result = await PROVIDERS.invoke(
            client.providers,
            "oauth2",
            "create",
            payload={"name": "grafana", "client_type": "confidential"},
        )

        assert result == {"pk": 7, "name": "grafana"}
        assert fake_api.last.method == "POST"
        assert fake_api.last.path == "/providers/oauth2/"
        assert fake_api.last.json() == {"name": "grafana", "client_type": "confidential"}

    async def test_update_patches_lookup(self, client, fake_api):
        fake_api.add("PATCH", "/stages/prompt/stages/abc/", json={"pk": "abc"})

        await STAGES.invoke(client.stages, "prompt", "update", lookup="abc", payload={"name": "x"})

        assert fake_api.last.method == "PATCH"
        assert fake_api.last.json() == {"name": "x"}

    async def test_list_passes_query(self, client, fake_api):
        fake_api.add("GET", "/authenticators/admin/webauthn/", json={"results": []})

        await AUTHENTICATOR_DEVICES_ADMIN.invoke(
            client.authenticators, "webauthn", "list", query={"name": "yubikey", "page": None}
        )

        assert fake_api.last.params == {"name": "yubikey"}

    async def test_delete(self, client, fake_api):
        fake_api.add("DELETE", "/sources/ldap/corp/", status=204)

        assert await SOURCES.invoke(client.sources, "ldap", "delete", lookup="corp") is None
        assert fake_api.last.method == "DELETE"

    async def test_invalid_discriminator_sends_nothing(self, client, fake_api):
        with pytest.raises(InvalidDiscriminatorError):
            await POLICIES.invoke(client.policies, "bogus_type", "list")

        assert fake_api.requests == []
