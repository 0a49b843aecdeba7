"""
Remote Access Control tools (category: rac).

Connection tokens are minted by authentik when a user opens an endpoint,
so they can only be listed, inspected and revoked.
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

Protocol = Literal["rdp", "vnc", "ssh"]
AuthMode = Literal["static", "prompt"]

EndpointUuid = Annotated[str, Field(description="RAC endpoint UUID")]
TokenUuid = Annotated[str, Field(description="Connection token UUID")]


def register_rac_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_rac_endpoints_list",
        "List RAC (Remote Access Control) endpoints with optional filters.",
        category="rac",
    )
    async def rac_endpoints_list(
        name: Annotated[str | None, Field(description="Filter by endpoint name")] = None,
        provider: Annotated[int | None, Field(description="Filter by provider ID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.rac.list(
            "endpoints",
            name=name,
            provider=provider,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_rac_endpoints_get", "Get a single RAC endpoint by its UUID.", category="rac")
    async def rac_endpoints_get(pbm_uuid: EndpointUuid) -> str:
        return to_json(await client.rac.retrieve("endpoints", pbm_uuid))

    @tool(
        "authentik_rac_endpoints_create",
        "Create a new RAC endpoint for remote access.",
        category="rac",
        access="full",
    )
    async def rac_endpoints_create(
        name: Annotated[str, Field(description="Endpoint name")],
        provider: Annotated[int, Field(description="RAC provider ID")],
        protocol: Annotated[Protocol, Field(description="Connection protocol")],
        host: Annotated[str, Field(description="Target host address")],
        auth_mode: Annotated[AuthMode, Field(description="Authentication mode")],
        settings: Annotated[
            dict[str, Any] | None, Field(description="Additional endpoint settings")
        ] = None,
        property_mappings: Annotated[
            list[str] | None, Field(description="List of property mapping UUIDs")
        ] = None,
        maximum_connections: Annotated[
            int | None, Field(description="Maximum concurrent connections")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            provider=provider,
            protocol=protocol,
            host=host,
            auth_mode=auth_mode,
            settings=settings,
            property_mappings=property_mappings,
            maximum_connections=maximum_connections,
        )
        return to_json(await client.rac.create("endpoints", body))

    @tool(
        "authentik_rac_endpoints_update",
        "Update an existing RAC endpoint. Only provided fields are modified (partial update).",
        category="rac",
        access="full",
    )
    async def rac_endpoints_update(
        pbm_uuid: EndpointUuid,
        name: Annotated[str | None, Field(description="New endpoint name")] = None,
        provider: Annotated[int | None, Field(description="New RAC provider ID")] = None,
        protocol: Annotated[Protocol | None, Field(description="New connection protocol")] = None,
        host: Annotated[str | None, Field(description="New target host address")] = None,
        auth_mode: Annotated[AuthMode | None, Field(description="New authentication mode")] = None,
        settings: Annotated[dict[str, Any] | None, Field(description="New endpoint settings")] = None,
        property_mappings: Annotated[
            list[str] | None, Field(description="New list of property mapping UUIDs")
        ] = None,
        maximum_connections: Annotated[
            int | None, Field(description="New maximum concurrent connections")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            provider=provider,
            protocol=protocol,
            host=host,
            auth_mode=auth_mode,
            settings=settings,
            property_mappings=property_mappings,
            maximum_connections=maximum_connections,
        )
        return to_json(await client.rac.partial_update("endpoints", pbm_uuid, body))

    @tool(
        "authentik_rac_endpoints_delete",
        "Delete a RAC endpoint by its UUID. This action is irreversible.",
        category="rac",
        access="full",
        destructive=True,
    )
    async def rac_endpoints_delete(pbm_uuid: EndpointUuid) -> str:
        await client.rac.destroy("endpoints", pbm_uuid)
        return f'RAC endpoint "{pbm_uuid}" deleted successfully.'

    @tool(
        "authentik_rac_connection_tokens_list",
        "List RAC connection tokens with optional filters. Tokens are system-managed (no create).",
        category="rac",
    )
    async def rac_connection_tokens_list(
        endpoint: Annotated[str | None, Field(description="Filter by endpoint UUID")] = None,
        provider: Annotated[int | None, Field(description="Filter by provider ID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.rac.list(
            "connection_tokens",
            endpoint=endpoint,
            provider=provider,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_rac_connection_tokens_get",
        "Get a single RAC connection token by its UUID.",
        category="rac",
    )
    async def rac_connection_tokens_get(connection_token_uuid: TokenUuid) -> str:
        return to_json(await client.rac.retrieve("connection_tokens", connection_token_uuid))

    @tool(
        "authentik_rac_connection_tokens_delete",
        "Delete a RAC connection token by its UUID. This action is irreversible.",
        category="rac",
        access="full",
        destructive=True,
    )
    async def rac_connection_tokens_delete(connection_token_uuid: TokenUuid) -> str:
        await client.rac.destroy("connection_tokens", connection_token_uuid)
        return f'RAC connection token "{connection_token_uuid}" deleted successfully.'
