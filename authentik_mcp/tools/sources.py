"""Federation and directory source tools (category: sources)."""

from typing import Annotated, Any

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import SOURCES, SourceType
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

VALID_TYPES = ", ".join(SOURCES.types)

SourceSlug = Annotated[str, Field(description="Source slug")]
SourceTypeArg = Annotated[SourceType, Field(description=f"Source type: {VALID_TYPES}")]


def register_source_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_sources_list",
        "List all sources across all types (OAuth, SAML, LDAP, Plex, Kerberos, SCIM).",
        category="sources",
    )
    async def sources_list(
        name: Annotated[str | None, Field(description="Filter by exact source name")] = None,
        slug: Annotated[str | None, Field(description="Filter by exact source slug")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.sources.list(
            "all",
            name=name,
            slug=slug,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_sources_get", "Get a single source by its slug (cross-type).", category="sources")
    async def sources_get(slug: SourceSlug) -> str:
        return to_json(await client.sources.retrieve("all", slug))

    @tool(
        "authentik_sources_delete",
        "Delete a source by its slug. This action is irreversible.",
        category="sources",
        access="full",
        destructive=True,
    )
    async def sources_delete(slug: SourceSlug) -> str:
        await client.sources.destroy("all", slug)
        return f'Source "{slug}" deleted successfully.'

    @tool(
        "authentik_sources_types_list",
        "List all available source types that can be created.",
        category="sources",
    )
    async def sources_types_list() -> str:
        return to_json(await client.sources.get("all", "types"))

    # --- By type ---

    @tool(
        "authentik_sources_by_type_list",
        f"List sources of a specific type. Valid types: {VALID_TYPES}.",
        category="sources",
    )
    async def sources_by_type_list(
        source_type: SourceTypeArg,
        name: Annotated[str | None, Field(description="Filter by name")] = None,
        slug: Annotated[str | None, Field(description="Filter by slug")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(
            name=name, slug=slug, search=search, ordering=ordering, page=page, page_size=page_size
        )
        return to_json(await SOURCES.invoke(client.sources, source_type, "list", query=query))

    @tool(
        "authentik_sources_by_type_get",
        f"Get a single source by type and slug. Valid types: {VALID_TYPES}.",
        category="sources",
    )
    async def sources_by_type_get(source_type: SourceTypeArg, slug: SourceSlug) -> str:
        return to_json(await SOURCES.invoke(client.sources, source_type, "get", lookup=slug))

    @tool(
        "authentik_sources_by_type_create",
        f"Create a new source of a specific type. Valid types: {VALID_TYPES}. Pass the "
        'source-specific configuration as a JSON object in the "config" parameter.',
        category="sources",
        access="full",
    )
    async def sources_by_type_create(
        source_type: SourceTypeArg,
        config: Annotated[
            dict[str, Any],
            Field(
                description='Source configuration (fields depend on source_type). Must include "name" and "slug".'
            ),
        ],
    ) -> str:
        return to_json(await SOURCES.invoke(client.sources, source_type, "create", payload=config))

    @tool(
        "authentik_sources_by_type_update",
        "Update an existing source by type and slug. Only provided fields are modified "
        f"(partial update). Valid types: {VALID_TYPES}.",
        category="sources",
        access="full",
    )
    async def sources_by_type_update(
        source_type: SourceTypeArg,
        slug: Annotated[str, Field(description="Source slug (used as identifier)")],
        config: Annotated[dict[str, Any], Field(description="Fields to update (partial update)")],
    ) -> str:
        result = await SOURCES.invoke(client.sources, source_type, "update", lookup=slug, payload=config)
        return to_json(result)

    @tool(
        "authentik_sources_by_type_delete",
        f"Delete a source by type and slug. This action is irreversible. Valid types: {VALID_TYPES}.",
        category="sources",
        access="full",
        destructive=True,
    )
    async def sources_by_type_delete(source_type: SourceTypeArg, slug: SourceSlug) -> str:
        await SOURCES.invoke(client.sources, source_type, "delete", lookup=slug)
        return f'Source "{slug}" (type: {source_type}) deleted successfully.'

    @tool(
        "authentik_sources_user_connections_list",
        "List user-source connections across all source types.",
        category="sources",
    )
    async def sources_user_connections_list(
        user: Annotated[int | None, Field(description="Filter by user ID")] = None,
        source_slug: Annotated[str | None, Field(description="Filter by source slug")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.sources.list(
            "user_connections/all",
            user=user,
            source__slug=source_slug,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)
