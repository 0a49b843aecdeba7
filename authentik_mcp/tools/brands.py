"""Brand tools (category: core). A brand binds a domain to branding and default flows."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

BrandUuid = Annotated[str, Field(description="Brand UUID")]
FlowUuid = Annotated[str | None, Field(description="Flow UUID")]


def register_brand_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_brands_list",
        "List brands with optional filters for UUID, domain, and search.",
        category="core",
    )
    async def brands_list(
        brand_uuid: Annotated[str | None, Field(description="Filter by brand UUID")] = None,
        domain: Annotated[str | None, Field(description="Filter by domain")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.core.list(
            "brands",
            brand_uuid=brand_uuid,
            domain=domain,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_brands_get", "Get a single brand by its UUID.", category="core")
    async def brands_get(brand_uuid: BrandUuid) -> str:
        return to_json(await client.core.retrieve("brands", brand_uuid))

    @tool(
        "authentik_brands_create",
        "Create a new brand with domain, branding settings, flow assignments, and optional attributes.",
        category="core",
        access="full",
    )
    async def brands_create(
        domain: Annotated[
            str,
            Field(
                description='Domain that activates this brand. Can be a superset, e.g. "a.b" '
                'matches "aa.b" and "ba.b".'
            ),
        ],
        is_default: Annotated[bool | None, Field(description="Whether this is the default brand")] = None,
        branding_title: Annotated[str | None, Field(description="Branding title displayed in the UI")] = None,
        branding_logo: Annotated[str | None, Field(description="URL or path to the branding logo")] = None,
        branding_favicon: Annotated[str | None, Field(description="URL or path to the favicon")] = None,
        flow_authentication: FlowUuid = None,
        flow_invalidation: FlowUuid = None,
        flow_recovery: FlowUuid = None,
        flow_unenrollment: FlowUuid = None,
        flow_user_settings: FlowUuid = None,
        flow_device_code: FlowUuid = None,
        default_application: Annotated[
            str | None,
            Field(description="Application slug to redirect external users to after authentication"),
        ] = None,
        web_certificate: Annotated[
            str | None, Field(description="Web certificate UUID for the authentik core webserver")
        ] = None,
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(
            domain=domain,
            default=is_default,
            branding_title=branding_title,
            branding_logo=branding_logo,
            branding_favicon=branding_favicon,
            flow_authentication=flow_authentication,
            flow_invalidation=flow_invalidation,
            flow_recovery=flow_recovery,
            flow_unenrollment=flow_unenrollment,
            flow_user_settings=flow_user_settings,
            flow_device_code=flow_device_code,
            default_application=default_application,
            web_certificate=web_certificate,
            attributes=attributes,
        )
        return to_json(await client.core.create("brands", body))

    @tool(
        "authentik_brands_update",
        "Update an existing brand. Only provided fields are modified (partial update).",
        category="core",
        access="full",
    )
    async def brands_update(
        brand_uuid: BrandUuid,
        domain: Annotated[str | None, Field(description="New domain")] = None,
        is_default: Annotated[bool | None, Field(description="Whether this is the default brand")] = None,
        branding_title: Annotated[str | None, Field(description="New branding title")] = None,
        branding_logo: Annotated[str | None, Field(description="New logo URL or path")] = None,
        branding_favicon: Annotated[str | None, Field(description="New favicon URL or path")] = None,
        flow_authentication: FlowUuid = None,
        flow_invalidation: FlowUuid = None,
        flow_recovery: FlowUuid = None,
        flow_unenrollment: FlowUuid = None,
        flow_user_settings: FlowUuid = None,
        flow_device_code: FlowUuid = None,
        default_application: Annotated[str | None, Field(description="Application slug")] = None,
        web_certificate: Annotated[str | None, Field(description="Web certificate UUID")] = None,
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(
            domain=domain,
            default=is_default,
            branding_title=branding_title,
            branding_logo=branding_logo,
            branding_favicon=branding_favicon,
            flow_authentication=flow_authentication,
            flow_invalidation=flow_invalidation,
            flow_recovery=flow_recovery,
            flow_unenrollment=flow_unenrollment,
            flow_user_settings=flow_user_settings,
            flow_device_code=flow_device_code,
            default_application=default_application,
            web_certificate=web_certificate,
            attributes=attributes,
        )
        return to_json(await client.core.partial_update("brands", brand_uuid, body))

    @tool(
        "authentik_brands_delete",
        "Delete a brand by its UUID. This action is irreversible.",
        category="core",
        access="full",
        destructive=True,
    )
    async def brands_delete(brand_uuid: BrandUuid) -> str:
        await client.core.destroy("brands", brand_uuid)
        return f"Brand {brand_uuid} deleted successfully."

    @tool("authentik_brands_current", "Get the brand configuration for the current domain.", category="core")
    async def brands_current() -> str:
        return to_json(await client.core.get("brands", "current"))
