"""API, recovery and app-password token tools (category: core)."""

from typing import Annotated, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

Identifier = Annotated[str, Field(description="Token identifier")]
Intent = Literal["api", "app_password", "recovery", "verification"]


def register_token_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_tokens_list",
        "List tokens with optional filters for identifier, intent, managed status, and search.",
        category="core",
    )
    async def tokens_list(
        identifier: Annotated[str | None, Field(description="Filter by exact token identifier")] = None,
        intent: Annotated[Intent | None, Field(description="Filter by token intent")] = None,
        managed: Annotated[str | None, Field(description="Filter by managed status")] = None,
        description: Annotated[str | None, Field(description="Filter by description")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.core.list(
            "tokens",
            identifier=identifier,
            intent=intent,
            managed=managed,
            description=description,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_tokens_get", "Get a single token by its identifier.", category="core")
    async def tokens_get(identifier: Identifier) -> str:
        return to_json(await client.core.retrieve("tokens", identifier))

    @tool(
        "authentik_tokens_create",
        "Create a new token with an identifier, optional intent, description, and expiration settings.",
        category="core",
        access="full",
    )
    async def tokens_create(
        identifier: Annotated[str, Field(description="Unique token identifier")],
        intent: Annotated[Intent | None, Field(description="Token intent/purpose")] = None,
        description: Annotated[str | None, Field(description="Token description")] = None,
        expiring: Annotated[bool | None, Field(description="Whether the token expires")] = None,
        expires: Annotated[str | None, Field(description="Expiration date (ISO 8601)")] = None,
        user: Annotated[int | None, Field(description="User ID to associate the token with")] = None,
    ) -> str:
        body = fields(
            identifier=identifier,
            intent=intent,
            description=description,
            expiring=expiring,
            expires=expires,
            user=user,
        )
        return to_json(await client.core.create("tokens", body))

    @tool(
        "authentik_tokens_update",
        "Update an existing token. Only provided fields are modified (partial update).",
        category="core",
        access="full",
    )
    async def tokens_update(
        identifier: Identifier,
        description: Annotated[str | None, Field(description="New description")] = None,
        expiring: Annotated[bool | None, Field(description="Whether the token expires")] = None,
        expires: Annotated[str | None, Field(description="New expiration date (ISO 8601)")] = None,
        user: Annotated[int | None, Field(description="User ID to associate")] = None,
        intent: Annotated[Intent | None, Field(description="Token intent/purpose")] = None,
    ) -> str:
        body = fields(
            description=description, expiring=expiring, expires=expires, user=user, intent=intent
        )
        return to_json(await client.core.partial_update("tokens", identifier, body))

    @tool(
        "authentik_tokens_delete",
        "Delete a token by its identifier. This action is irreversible.",
        category="core",
        access="full",
        destructive=True,
    )
    async def tokens_delete(identifier: Identifier) -> str:
        await client.core.destroy("tokens", identifier)
        return f'Token "{identifier}" deleted successfully.'

    @tool(
        "authentik_tokens_view_key",
        "View the raw key value of a token. This is a privileged operation that is logged.",
        category="core",
        access="full",
    )
    async def tokens_view_key(identifier: Identifier) -> str:
        return to_json(await client.core.get("tokens", identifier, "view_key"))

    @tool(
        "authentik_tokens_set_key",
        "Set a custom key value for a token. Requires authentik_core.set_token_key permission.",
        category="core",
        access="full",
    )
    async def tokens_set_key(
        identifier: Identifier,
        key: Annotated[str, Field(description="New key value to set")],
    ) -> str:
        await client.core.post("tokens", identifier, "set_key", body={"key": key})
        return f'Key set successfully for token "{identifier}".'
