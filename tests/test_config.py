"""
Unit tests for configuration loading (authentik_mcp/config.py).

Configuration errors must abort startup before a single tool is registered,
so every invalid value is expected to raise pydantic's ValidationError with
a message an operator can act on.
"""

import pytest
from pydantic import ValidationError

from authentik_mcp.config import CATEGORIES, RuntimeConfig, Settings, normalize_url

from conftest import TEST_TOKEN


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://auth.example.com",
            "https://auth.example.com/",
            "https://auth.example.com/api",
            "https://auth.example.com/api/v3",
            "https://auth.example.com/api/v3/",
            "  https://auth.example.com/  ",
        ],
    )
    def test_always_points_at_api_root(self, url):
        assert normalize_url(url) == "https://auth.example.com/api/v3"

    def test_suffix_is_appended_once(self):
        once = normalize_url("https://auth.example.com")
        assert normalize_url(once) == once

    def test_keeps_subpath(self):
        assert normalize_url("https://example.com/authentik/") == "https://example.com/authentik/api/v3"


class TestSettingsFromEnvironment:
    def test_reads_required_variables(self, monkeypatch):
        monkeypatch.setenv("AUTHENTIK_URL", "https://auth.example.com/")
        monkeypatch.setenv("AUTHENTIK_TOKEN", TEST_TOKEN)

        settings = Settings(_env_file=None)

        assert settings.authentik_url == "https://auth.example.com/api/v3"
        assert settings.authentik_token == TEST_TOKEN

    def test_defaults(self, make_settings):
        settings = make_settings()

        assert settings.authentik_access_tier == "full"
        assert settings.authentik_categories is None
        assert settings.authentik_timeout == 30.0
        assert settings.mcp_transport == "stdio"
        assert settings.mcp_port == 3000

    def test_missing_url_fails(self, monkeypatch):
        monkeypatch.setenv("AUTHENTIK_TOKEN", TEST_TOKEN)
        with pytest.raises(ValidationError, match="authentik_url"):
            Settings(_env_file=None)

    def test_empty_token_fails(self, make_settings):
        with pytest.raises(ValidationError, match="authentik_token"):
            make_settings(authentik_token="")

    def test_blank_url_fails(self, make_settings):
        with pytest.raises(ValidationError, match="AUTHENTIK_URL must not be empty"):
            make_settings(authentik_url="   ")

    def test_port_out_of_range_fails(self, make_settings):
        with pytest.raises(ValidationError):
            make_settings(mcp_port=70000)

    def test_unknown_transport_fails(self, make_settings):
        with pytest.raises(ValidationError):
            make_settings(mcp_transport="sse")


class TestAccessTier:
    @pytest.mark.parametrize("value", ["read-only", "full"])
    def test_valid_values(self, make_settings, value):
        assert make_settings(authentik_access_tier=value).authentik_access_tier == value

    def test_empty_means_full(self, monkeypatch, make_settings):
        monkeypatch.setenv("AUTHENTIK_ACCESS_TIER", "")
        assert make_settings().authentik_access_tier == "full"

    @pytest.mark.parametrize("value", ["readonly", "READ-ONLY", "admin"])
    def test_invalid_value_is_descriptive(self, make_settings, value):
        with pytest.raises(ValidationError) as exc_info:
            make_settings(authentik_access_tier=value)

        message = str(exc_info.value)
        assert f'Invalid AUTHENTIK_ACCESS_TIER value: "{value}"' in message
        assert 'Must be "read-only" or "full"' in message


class TestCategories:
    def test_comma_separated_from_environment(self, monkeypatch, make_settings):
        monkeypatch.setenv("AUTHENTIK_CATEGORIES", "core, flows ,,admin")

        settings = make_settings()

        assert settings.authentik_categories == frozenset({"core", "flows", "admin"})

    def test_blank_means_all(self, monkeypatch, make_settings):
        monkeypatch.setenv("AUTHENTIK_CATEGORIES", " , ")
        assert make_settings().authentik_categories is None

    def test_unknown_category_lists_valid_set(self, make_settings):
        with pytest.raises(ValidationError) as exc_info:
            make_settings(authentik_categories="core,widgets,gadgets")

        message = str(exc_info.value)
        assert "Unknown AUTHENTIK_CATEGORIES value(s): gadgets, widgets" in message
        for category in CATEGORIES:
            assert category in message

    def test_category_set_is_closed(self):
        assert len(CATEGORIES) == 20
        assert "property-mappings" in CATEGORIES


class TestDerivedConfig:
    def test_runtime_config(self, make_settings):
        settings = make_settings(authentik_access_tier="read-only", authentik_categories="core")

        assert settings.runtime_config() == RuntimeConfig(
            access_tier="read-only", categories=frozenset({"core"})
        )

    def test_redaction_secrets_use_normalized_url(self, make_settings):
        secrets = make_settings(authentik_url="https://auth.example.com/").redaction_secrets()

        assert secrets.token == TEST_TOKEN
        assert secrets.base_url == "https://auth.example.com/api/v3"
