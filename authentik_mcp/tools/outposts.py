"""Outpost and service connection tools (category: outposts)."""

from typing import Annotated, Any, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

OutpostType = Literal["proxy", "ldap", "radius", "rac"]

OutpostUuid = Annotated[str, Field(description="Outpost UUID")]
ConnectionUuid = Annotated[str, Field(description="Service connection UUID")]


def register_outpost_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    # --- Outpost instances ---

    @tool("authentik_outposts_list", "List outpost instances with optional filters.", category="outposts")
    async def outposts_list(
        name: Annotated[
            str | None, Field(description="Filter by name (case-insensitive contains)")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.outposts.list(
            "instances",
            name__icontains=name,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_outposts_get", "Get a single outpost instance by its UUID.", category="outposts")
    async def outposts_get(uuid: OutpostUuid) -> str:
        return to_json(await client.outposts.retrieve("instances", uuid))

    @tool("authentik_outposts_create", "Create a new outpost instance.", category="outposts", access="full")
    async def outposts_create(
        name: Annotated[str, Field(description="Outpost name")],
        type: Annotated[OutpostType, Field(description="Outpost type")],
        providers: Annotated[list[int], Field(description="Provider IDs to associate")],
        service_connection: Annotated[
            str | None, Field(description="Service connection UUID (leave empty for unmanaged)")
        ] = None,
        config: Annotated[
            dict[str, Any] | None, Field(description="Outpost configuration object")
        ] = None,
        managed: Annotated[str | None, Field(description="Managed identifier string")] = None,
    ) -> str:
        body = fields(
            name=name,
            type=type,
            providers=providers,
            service_connection=service_connection,
            config=config or {},
            managed=managed,
        )
        return to_json(await client.outposts.create("instances", body))

    @tool(
        "authentik_outposts_update",
        "Update an existing outpost instance. Only provided fields are modified (partial update).",
        category="outposts",
        access="full",
    )
    async def outposts_update(
        uuid: OutpostUuid,
        name: Annotated[str | None, Field(description="New outpost name")] = None,
        type: Annotated[OutpostType | None, Field(description="New outpost type")] = None,
        providers: Annotated[list[int] | None, Field(description="New list of provider IDs")] = None,
        service_connection: Annotated[
            str | None, Field(description="New service connection UUID")
        ] = None,
        config: Annotated[
            dict[str, Any] | None, Field(description="New outpost configuration object")
        ] = None,
        managed: Annotated[str | None, Field(description="New managed identifier string")] = None,
    ) -> str:
        body = fields(
            name=name,
            type=type,
            providers=providers,
            service_connection=service_connection,
            config=config,
            managed=managed,
        )
        return to_json(await client.outposts.partial_update("instances", uuid, body))

    @tool(
        "authentik_outposts_delete",
        "Delete an outpost instance by its UUID. This action is irreversible.",
        category="outposts",
        access="full",
        destructive=True,
    )
    async def outposts_delete(uuid: OutpostUuid) -> str:
        await client.outposts.destroy("instances", uuid)
        return f'Outpost "{uuid}" deleted successfully.'

    @tool("authentik_outposts_health", "Get the current health status of an outpost.", category="outposts")
    async def outposts_health(uuid: OutpostUuid) -> str:
        return to_json(await client.outposts.get("instances", uuid, "health"))

    @tool(
        "authentik_outposts_default_settings",
        "Get the global default outpost configuration.",
        category="outposts",
    )
    async def outposts_default_settings() -> str:
        return to_json(await client.outposts.get("instances", "default_settings"))

    # --- Service connections ---

    @tool(
        "authentik_outposts_service_connections_list",
        "List all service connections (Docker and Kubernetes) with optional filters.",
        category="outposts",
    )
    async def outposts_service_connections_list(
        name: Annotated[str | None, Field(description="Filter by name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.outposts.list(
            "service_connections/all",
            name=name,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_outposts_service_connections_state",
        "Get the current state of a service connection.",
        category="outposts",
    )
    async def outposts_service_connections_state(uuid: ConnectionUuid) -> str:
        return to_json(await client.outposts.get("service_connections/all", uuid, "state"))

    @tool(
        "authentik_outposts_service_connections_types",
        "List all available service connection types that can be created.",
        category="outposts",
    )
    async def outposts_service_connections_types() -> str:
        return to_json(await client.outposts.get("service_connections/all", "types"))

    @tool(
        "authentik_outposts_docker_create",
        "Create a new Docker service connection.",
        category="outposts",
        access="full",
    )
    async def outposts_docker_create(
        name: Annotated[str, Field(description="Connection name")],
        url: Annotated[
            str,
            Field(description="Docker URL, e.g. unix:///var/run/docker.sock or https://host:2376"),
        ],
        local: Annotated[bool | None, Field(description="Use local Docker socket")] = None,
        tls_verification: Annotated[
            str | None, Field(description="CA certificate keypair UUID for TLS verification")
        ] = None,
        tls_authentication: Annotated[
            str | None, Field(description="Client certificate keypair UUID for TLS authentication")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            url=url,
            local=local,
            tls_verification=tls_verification,
            tls_authentication=tls_authentication,
        )
        return to_json(await client.outposts.create("service_connections/docker", body))

    @tool(
        "authentik_outposts_docker_update",
        "Update an existing Docker service connection. Only provided fields are modified (partial update).",
        category="outposts",
        access="full",
    )
    async def outposts_docker_update(
        uuid: Annotated[str, Field(description="Docker service connection UUID")],
        name: Annotated[str | None, Field(description="New connection name")] = None,
        url: Annotated[str | None, Field(description="New Docker URL")] = None,
        local: Annotated[bool | None, Field(description="Use local Docker socket")] = None,
        tls_verification: Annotated[
            str | None, Field(description="New CA certificate keypair UUID")
        ] = None,
        tls_authentication: Annotated[
            str | None, Field(description="New client certificate keypair UUID")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            url=url,
            local=local,
            tls_verification=tls_verification,
            tls_authentication=tls_authentication,
        )
        return to_json(await client.outposts.partial_update("service_connections/docker", uuid, body))

    @tool(
        "authentik_outposts_kubernetes_create",
        "Create a new Kubernetes service connection.",
        category="outposts",
        access="full",
    )
    async def outposts_kubernetes_create(
        name: Annotated[str, Field(description="Connection name")],
        local: Annotated[bool | None, Field(description="Use local Kubernetes integration")] = None,
        kubeconfig: Annotated[
            dict[str, Any] | None,
            Field(description="Kubeconfig object (uses currently selected context)"),
        ] = None,
        verify_ssl: Annotated[
            bool | None, Field(description="Verify SSL certificates of the Kubernetes API endpoint")
        ] = None,
    ) -> str:
        body = fields(name=name, local=local, kubeconfig=kubeconfig, verify_ssl=verify_ssl)
        return to_json(await client.outposts.create("service_connections/kubernetes", body))

    @tool(
        "authentik_outposts_kubernetes_update",
        "Update an existing Kubernetes service connection. Only provided fields are modified "
        "(partial update).",
        category="outposts",
        access="full",
    )
    async def outposts_kubernetes_update(
        uuid: Annotated[str, Field(description="Kubernetes service connection UUID")],
        name: Annotated[str | None, Field(description="New connection name")] = None,
        local: Annotated[bool | None, Field(description="Use local Kubernetes integration")] = None,
        kubeconfig: Annotated[
            dict[str, Any] | None, Field(description="New kubeconfig object")
        ] = None,
        verify_ssl: Annotated[bool | None, Field(description="Verify SSL certificates")] = None,
    ) -> str:
        body = fields(name=name, local=local, kubeconfig=kubeconfig, verify_ssl=verify_ssl)
        result = await client.outposts.partial_update("service_connections/kubernetes", uuid, body)
        return to_json(result)

    @tool(
        "authentik_outposts_service_connections_delete",
        "Delete a service connection by its UUID. This action is irreversible.",
        category="outposts",
        access="full",
        destructive=True,
    )
    async def outposts_service_connections_delete(uuid: ConnectionUuid) -> str:
        await client.outposts.destroy("service_connections/all", uuid)
        return f'Service connection "{uuid}" deleted successfully.'
