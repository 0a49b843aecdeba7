"""
OAuth2 grant tools (category: oauth2).

Access tokens, authorization codes and refresh tokens are issued by
authentik itself; they can be inspected and revoked, never created. The
three resources share one shape, so their tools are generated from a table.
"""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, to_json

# (tool prefix, API resource, label, "delete" verb shown to the agent)
GRANTS = (
    ("access_tokens", "access_tokens", "access token", "Delete (revoke)"),
    ("auth_codes", "authorization_codes", "authorization code", "Delete"),
    ("refresh_tokens", "refresh_tokens", "refresh token", "Delete (revoke)"),
)


def _register_grant(
    registry: ToolRegistry,
    client: AuthentikClient,
    prefix: str,
    resource: str,
    label: str,
    delete_verb: str,
) -> None:
    plural = "codes" if resource == "authorization_codes" else "tokens"
    GrantId = Annotated[int, Field(description=f"{label.capitalize()} ID")]

    @registry.tool(
        f"authentik_oauth2_{prefix}_list",
        f"List OAuth2 {label}s with optional filters. {plural.capitalize()} are system-managed.",
        category="oauth2",
    )
    async def grant_list(
        user: Annotated[int | None, Field(description="Filter by user ID")] = None,
        provider: Annotated[int | None, Field(description="Filter by provider ID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.oauth2.list(
            resource,
            user=user,
            provider=provider,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @registry.tool(
        f"authentik_oauth2_{prefix}_get",
        f"Get a single OAuth2 {label} by its numeric ID.",
        category="oauth2",
    )
    async def grant_get(id: GrantId) -> str:
        return to_json(await client.oauth2.retrieve(resource, id))

    @registry.tool(
        f"authentik_oauth2_{prefix}_delete",
        f"{delete_verb} an OAuth2 {label} by its ID. This action is irreversible.",
        category="oauth2",
        access="full",
        destructive=True,
    )
    async def grant_delete(id: GrantId) -> str:
        await client.oauth2.destroy(resource, id)
        return f"OAuth2 {label} {id} deleted successfully."


def register_oauth2_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    for prefix, resource, label, delete_verb in GRANTS:
        _register_grant(registry, client, prefix, resource, label, delete_verb)
