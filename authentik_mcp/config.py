"""
Application configuration loaded from environment variables.

Uses pydantic-settings to define typed configuration that automatically reads
from environment variables. All config comes from the environment (or a local
.env file), never hardcoded in source code.

Two groups of variables are read:
- AUTHENTIK_* describe the authentik instance and what the agent may do with it
- MCP_* describe how the MCP server itself is exposed (transport, bind address)

The core of the server never sees Settings directly. It receives two small,
immutable objects derived from it at startup:
- RuntimeConfig: access tier and category allowlist (drives tool visibility)
- RedactionSecrets: token and base URL (drives error redaction)
"""

import re
from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

AccessTier = Literal["read-only", "full"]

# The closed set of tool categories. AUTHENTIK_CATEGORIES may only name these.
CATEGORIES: frozenset[str] = frozenset(
    {
        "admin",
        "authenticators",
        "core",
        "crypto",
        "enterprise",
        "events",
        "flows",
        "managed",
        "oauth2",
        "outposts",
        "policies",
        "property-mappings",
        "providers",
        "rac",
        "rbac",
        "root",
        "sources",
        "ssf",
        "stages",
        "tenants",
    }
)

API_SUFFIX = "/api/v3"


def normalize_url(url: str) -> str:
    """
    Normalize an authentik URL so it always points at the v3 API root.

    "https://auth.example.com/"        -> "https://auth.example.com/api/v3"
    "https://auth.example.com/api"     -> "https://auth.example.com/api/v3"
    "https://auth.example.com/api/v3/" -> "https://auth.example.com/api/v3"
    """
    normalized = url.strip().rstrip("/")
    if not normalized.endswith(API_SUFFIX):
        normalized = re.sub(r"/api(/v3)?$", "", normalized) + API_SUFFIX
    return normalized


@dataclass(frozen=True)
class RuntimeConfig:
    """
    The two visibility filters, fixed for the lifetime of the process.

    Attributes:
        access_tier: "read-only" hides every mutating tool; "full" hides none
        categories: Allowed tool categories, or None for all of them
    """

    access_tier: AccessTier = "full"
    categories: frozenset[str] | None = None


@dataclass(frozen=True)
class RedactionSecrets:
    """Values that must never appear in text returned to the agent."""

    token: str
    base_url: str


class Settings(BaseSettings):
    """
    Server configuration with environment variable bindings.

    Field names match the environment variable names (case-insensitive),
    so `authentik_url` reads from AUTHENTIK_URL and `mcp_port` from MCP_PORT.
    Invalid values raise pydantic's ValidationError, which aborts startup
    before any tool is registered.
    """

    # --- authentik connection ---

    # Base URL of the authentik instance. "/api/v3" is appended if missing.
    authentik_url: str

    # API token of an authentik user or service account. Every tool call is
    # made with this identity, so its permissions bound what the agent can do.
    authentik_token: str = Field(min_length=1)

    # Per-request timeout for calls to authentik, in seconds.
    authentik_timeout: float = Field(default=30.0, gt=0)

    # --- Tool exposure ---

    # "read-only" exposes only tools that do not modify authentik.
    authentik_access_tier: AccessTier = "full"

    # Comma-separated allowlist of categories, e.g. "core,flows". Empty = all.
    # NoDecode keeps pydantic-settings from parsing the value as JSON.
    authentik_categories: Annotated[frozenset[str] | None, NoDecode] = None

    # --- MCP server settings ---

    # "stdio" for local agents that spawn the server, "http" for the
    # streamable HTTP transport.
    mcp_transport: Literal["stdio", "http"] = "stdio"

    # Only used by the HTTP transport.
    mcp_host: str = "0.0.0.0"
    mcp_port: int = Field(default=3000, ge=1, le=65535)

    # Logging verbosity. Maps to Python's logging levels.
    mcp_log_level: str = "info"

    model_config = {
        # No prefix: the field names already carry AUTHENTIK_ / MCP_.
        "env_prefix": "",
        # Also read from .env file if it exists (useful for local development).
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("authentik_url")
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("AUTHENTIK_URL must not be empty")
        return normalize_url(value)

    @field_validator("authentik_access_tier", mode="before")
    @classmethod
    def _parse_access_tier(cls, value: object) -> object:
        if value is None or value == "":
            return "full"
        if value not in ("read-only", "full"):
            raise ValueError(
                f'Invalid AUTHENTIK_ACCESS_TIER value: "{value}". '
                'Must be "read-only" or "full".'
            )
        return value

    @field_validator("authentik_categories", mode="before")
    @classmethod
    def _parse_categories(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            value = [item.strip() for item in value.split(",")]
        categories = frozenset(item for item in value if item)
        if not categories:
            return None
        unknown = sorted(categories - CATEGORIES)
        if unknown:
            raise ValueError(
                f"Unknown AUTHENTIK_CATEGORIES value(s): {', '.join(unknown)}. "
                f"Valid categories: {', '.join(sorted(CATEGORIES))}"
            )
        return categories

    def runtime_config(self) -> RuntimeConfig:
        return RuntimeConfig(
            access_tier=self.authentik_access_tier,
            categories=self.authentik_categories,
        )

    def redaction_secrets(self) -> RedactionSecrets:
        return RedactionSecrets(token=self.authentik_token, base_url=self.authentik_url)
