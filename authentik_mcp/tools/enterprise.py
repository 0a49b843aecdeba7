"""Enterprise license tools (category: enterprise)."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

LicenseUuid = Annotated[str, Field(description="License UUID")]


def register_enterprise_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_enterprise_license_list",
        "List enterprise licenses with optional filters.",
        category="enterprise",
    )
    async def enterprise_license_list(
        name: Annotated[str | None, Field(description="Filter by license name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.enterprise.list(
            "license", name=name, search=search, ordering=ordering, page=page, page_size=page_size
        )
        return to_json(result)

    @tool(
        "authentik_enterprise_license_get",
        "Get a single enterprise license by its UUID.",
        category="enterprise",
    )
    async def enterprise_license_get(license_uuid: LicenseUuid) -> str:
        return to_json(await client.enterprise.retrieve("license", license_uuid))

    @tool(
        "authentik_enterprise_license_create",
        "Install a new enterprise license key.",
        category="enterprise",
        access="full",
    )
    async def enterprise_license_create(
        key: Annotated[str, Field(description="License key string")],
    ) -> str:
        return to_json(await client.enterprise.create("license", {"key": key}))

    @tool(
        "authentik_enterprise_license_update",
        "Update an existing enterprise license. Only provided fields are modified (partial update).",
        category="enterprise",
        access="full",
    )
    async def enterprise_license_update(
        license_uuid: LicenseUuid,
        key: Annotated[str | None, Field(description="New license key string")] = None,
    ) -> str:
        result = await client.enterprise.partial_update("license", license_uuid, fields(key=key))
        return to_json(result)

    @tool(
        "authentik_enterprise_license_delete",
        "Delete an enterprise license by its UUID. This action is irreversible.",
        category="enterprise",
        access="full",
        destructive=True,
    )
    async def enterprise_license_delete(license_uuid: LicenseUuid) -> str:
        await client.enterprise.destroy("license", license_uuid)
        return f'Enterprise license "{license_uuid}" deleted successfully.'

    @tool(
        "authentik_enterprise_license_summary",
        "Get the total enterprise license status summary.",
        category="enterprise",
    )
    async def enterprise_license_summary() -> str:
        return to_json(await client.enterprise.get("license", "summary"))

    @tool(
        "authentik_enterprise_license_forecast",
        "Forecast how many users will be required in a year based on current growth.",
        category="enterprise",
    )
    async def enterprise_license_forecast() -> str:
        return to_json(await client.enterprise.get("license", "forecast"))

    @tool(
        "authentik_enterprise_install_id",
        "Get the authentik installation ID (used for license generation).",
        category="enterprise",
    )
    async def enterprise_install_id() -> str:
        return to_json(await client.enterprise.get("license", "install_id"))
