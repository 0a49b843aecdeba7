"""
Provider tools (category: providers).

A provider is the protocol side of an application (OAuth2, SAML, LDAP, ...).
Cross-type tools work on /providers/all/; the by-type tools resolve the
concrete endpoint for provider_type through authentik_mcp.dispatch.PROVIDERS.
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import PROVIDERS, ProviderType
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, merge, to_json

ProviderId = Annotated[int, Field(description="Provider ID")]

SamlBinding = Literal[
    "urn:oasis:names:tc:SAML:2.0:bindings:HTTP-POST",
    "urn:oasis:names:tc:SAML:2.0:bindings:HTTP-Redirect",
]


def register_provider_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_providers_list",
        "List all providers across all types with optional filters.",
        category="providers",
    )
    async def providers_list(
        application__isnull: Annotated[
            bool | None, Field(description="Filter by whether application is null")
        ] = None,
        backchannel: Annotated[bool | None, Field(description="Filter by backchannel status")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.providers.list(
            "all",
            application__isnull=application__isnull,
            backchannel=backchannel,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_providers_get",
        "Get a single provider by its numeric ID (cross-type).",
        category="providers",
    )
    async def providers_get(id: ProviderId) -> str:
        return to_json(await client.providers.retrieve("all", id))

    @tool(
        "authentik_providers_delete",
        "Delete a provider by its numeric ID (cross-type). This action is irreversible.",
        category="providers",
        access="full",
        destructive=True,
    )
    async def providers_delete(id: ProviderId) -> str:
        await client.providers.destroy("all", id)
        return f"Provider {id} deleted successfully."

    @tool("authentik_providers_types_list", "List all available provider types.", category="providers")
    async def providers_types_list() -> str:
        return to_json(await client.providers.get("all", "types"))

    # --- By type ---

    @tool(
        "authentik_providers_by_type_list",
        "List providers of a specific type with optional filters.",
        category="providers",
    )
    async def providers_by_type_list(
        provider_type: Annotated[ProviderType, Field(description="Provider type to list")],
        name: Annotated[str | None, Field(description="Filter by provider name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(name=name, search=search, ordering=ordering, page=page, page_size=page_size)
        return to_json(await PROVIDERS.invoke(client.providers, provider_type, "list", query=query))

    @tool(
        "authentik_providers_by_type_get",
        "Get a single provider of a specific type by its numeric ID.",
        category="providers",
    )
    async def providers_by_type_get(
        provider_type: Annotated[ProviderType, Field(description="Provider type")],
        id: ProviderId,
    ) -> str:
        return to_json(await PROVIDERS.invoke(client.providers, provider_type, "get", lookup=id))

    @tool(
        "authentik_providers_by_type_create",
        "Create a new provider of a specific type. Pass type-specific fields in the config object.",
        category="providers",
        access="full",
    )
    async def providers_by_type_create(
        provider_type: Annotated[ProviderType, Field(description="Provider type to create")],
        name: Annotated[str, Field(description="Provider name")],
        authorization_flow: Annotated[str, Field(description="Authorization flow UUID")],
        config: Annotated[
            dict[str, Any] | None,
            Field(description="Type-specific configuration fields (snake_case API field names)"),
        ] = None,
    ) -> str:
        payload = merge({}, config)
        payload.update(name=name, authorization_flow=authorization_flow)
        result = await PROVIDERS.invoke(client.providers, provider_type, "create", payload=payload)
        return to_json(result)

    @tool(
        "authentik_providers_by_type_update",
        "Update an existing provider of a specific type. Pass type-specific fields in the config object.",
        category="providers",
        access="full",
    )
    async def providers_by_type_update(
        provider_type: Annotated[ProviderType, Field(description="Provider type")],
        id: ProviderId,
        config: Annotated[
            dict[str, Any] | None,
            Field(description="Type-specific fields to update (snake_case API field names)"),
        ] = None,
    ) -> str:
        result = await PROVIDERS.invoke(
            client.providers, provider_type, "update", lookup=id, payload=config
        )
        return to_json(result)

    @tool(
        "authentik_providers_by_type_delete",
        "Delete a provider of a specific type by its numeric ID. This action is irreversible.",
        category="providers",
        access="full",
        destructive=True,
    )
    async def providers_by_type_delete(
        provider_type: Annotated[ProviderType, Field(description="Provider type")],
        id: ProviderId,
    ) -> str:
        await PROVIDERS.invoke(client.providers, provider_type, "delete", lookup=id)
        return f"Provider {id} (type: {provider_type}) deleted successfully."

    # --- Protocol specifics ---

    @tool(
        "authentik_providers_oauth2_setup_urls",
        "Get OAuth2 provider setup URLs (authorize, token, userinfo, etc.).",
        category="providers",
    )
    async def providers_oauth2_setup_urls(
        id: Annotated[int, Field(description="OAuth2 provider ID")],
    ) -> str:
        return to_json(await client.providers.get("oauth2", id, "setup_urls"))

    @tool(
        "authentik_providers_saml_metadata",
        "Get SAML provider metadata XML.",
        category="providers",
    )
    async def providers_saml_metadata(
        id: Annotated[int, Field(description="SAML provider ID")],
        download: Annotated[bool | None, Field(description="Whether to force download")] = None,
        force_binding: Annotated[
            SamlBinding | None, Field(description="Force a specific SAML binding")
        ] = None,
    ) -> str:
        result = await client.providers.get(
            "saml", id, "metadata", download=download, force_binding=force_binding
        )
        return to_json(result)
