"""Tenant and tenant domain tools (category: tenants)."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

TenantUuid = Annotated[str, Field(description="Tenant UUID")]


def register_tenant_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool("authentik_tenants_list", "List tenants with optional filters.", category="tenants")
    async def tenants_list(
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.tenants.list(
            "tenants", search=search, ordering=ordering, page=page, page_size=page_size
        )
        return to_json(result)

    @tool("authentik_tenants_get", "Get a single tenant by its UUID.", category="tenants")
    async def tenants_get(tenant_uuid: TenantUuid) -> str:
        return to_json(await client.tenants.retrieve("tenants", tenant_uuid))

    @tool("authentik_tenants_create", "Create a new tenant.", category="tenants", access="full")
    async def tenants_create(
        schema_name: Annotated[
            str, Field(description="Database schema name (immutable after creation)")
        ],
        name: Annotated[str, Field(description="Tenant display name")],
        ready: Annotated[bool | None, Field(description="Whether the tenant is ready for use")] = None,
    ) -> str:
        body = fields(schema_name=schema_name, name=name, ready=ready)
        return to_json(await client.tenants.create("tenants", body))

    @tool(
        "authentik_tenants_update",
        "Update an existing tenant. Only provided fields are modified (partial update).",
        category="tenants",
        access="full",
    )
    async def tenants_update(
        tenant_uuid: TenantUuid,
        name: Annotated[str | None, Field(description="New tenant name")] = None,
        ready: Annotated[bool | None, Field(description="Whether the tenant is ready")] = None,
    ) -> str:
        body = fields(name=name, ready=ready)
        return to_json(await client.tenants.partial_update("tenants", tenant_uuid, body))

    @tool(
        "authentik_tenants_delete",
        "Delete a tenant by its UUID. This action is irreversible and removes all tenant data.",
        category="tenants",
        access="full",
        destructive=True,
    )
    async def tenants_delete(tenant_uuid: TenantUuid) -> str:
        await client.tenants.destroy("tenants", tenant_uuid)
        return f'Tenant "{tenant_uuid}" deleted successfully.'

    @tool(
        "authentik_tenants_create_admin_group",
        "Create an admin group for a tenant and add a user to it.",
        category="tenants",
        access="full",
    )
    async def tenants_create_admin_group(
        tenant_uuid: TenantUuid,
        user: Annotated[str, Field(description="User ID to add to the admin group")],
    ) -> str:
        await client.tenants.post("tenants", tenant_uuid, "create_admin_group", body={"user": user})
        return f'Admin group created for tenant "{tenant_uuid}" with user "{user}".'

    @tool(
        "authentik_tenants_create_recovery_key",
        "Create a recovery key for a user in a tenant.",
        category="tenants",
        access="full",
    )
    async def tenants_create_recovery_key(
        tenant_uuid: TenantUuid,
        user: Annotated[str, Field(description="User ID to create recovery key for")],
        duration_days: Annotated[int, Field(description="Number of days the recovery key is valid")],
    ) -> str:
        body = {"user": user, "duration_days": duration_days}
        return to_json(await client.tenants.post("tenants", tenant_uuid, "create_recovery_key", body=body))

    # --- Domains ---

    @tool("authentik_tenants_domains_list", "List tenant domains with optional filters.", category="tenants")
    async def tenants_domains_list(
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.tenants.list(
            "domains", search=search, ordering=ordering, page=page, page_size=page_size
        )
        return to_json(result)

    @tool(
        "authentik_tenants_domains_create",
        "Create a new domain for a tenant.",
        category="tenants",
        access="full",
    )
    async def tenants_domains_create(
        domain: Annotated[str, Field(description="Domain name")],
        tenant: Annotated[str, Field(description="Tenant UUID to associate the domain with")],
        is_primary: Annotated[bool | None, Field(description="Whether this is the primary domain")] = None,
    ) -> str:
        body = fields(domain=domain, tenant=tenant, is_primary=is_primary)
        return to_json(await client.tenants.create("domains", body))

    @tool(
        "authentik_tenants_domains_delete",
        "Delete a tenant domain by its numeric ID. This action is irreversible.",
        category="tenants",
        access="full",
        destructive=True,
    )
    async def tenants_domains_delete(id: Annotated[int, Field(description="Domain ID")]) -> str:
        await client.tenants.destroy("domains", id)
        return f"Tenant domain {id} deleted successfully."
