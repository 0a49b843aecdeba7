"""Application and application entitlement tools (category: core)."""

from typing import Annotated, Any, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

Slug = Annotated[str, Field(description="Application slug")]
EntitlementUuid = Annotated[str, Field(description="Entitlement UUID")]
PolicyEngineMode = Annotated[
    Literal["all", "any"] | None,
    Field(description='Policy engine mode: "all" (all policies must pass) or "any" (any policy must pass)'),
]


def register_application_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    # --- Applications ---

    @tool(
        "authentik_apps_list",
        "List applications with optional filters for name, slug, group, search, and more.",
        category="core",
    )
    async def apps_list(
        name: Annotated[str | None, Field(description="Filter by exact application name")] = None,
        slug: Annotated[str | None, Field(description="Filter by exact slug")] = None,
        group: Annotated[str | None, Field(description="Filter by application group")] = None,
        superuser_full_list: Annotated[
            bool | None, Field(description="When true, return all apps regardless of policy")
        ] = None,
        for_user: Annotated[
            int | None, Field(description="Filter applications accessible by this user ID")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.core.list(
            "applications",
            name=name,
            slug=slug,
            group=group,
            superuser_full_list=superuser_full_list,
            for_user=for_user,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_apps_get", "Get a single application by its slug.", category="core")
    async def apps_get(slug: Slug) -> str:
        return to_json(await client.core.retrieve("applications", slug))

    @tool(
        "authentik_apps_create",
        "Create a new application with name, slug, and optional provider, group, and metadata.",
        category="core",
        access="full",
    )
    async def apps_create(
        name: Annotated[str, Field(description="Application display name")],
        slug: Annotated[str, Field(description="Internal application slug for URLs")],
        provider: Annotated[int | None, Field(description="Provider ID to associate")] = None,
        group: Annotated[str | None, Field(description="Application group name")] = None,
        meta_launch_url: Annotated[str | None, Field(description="Launch URL for the application")] = None,
        meta_description: Annotated[str | None, Field(description="Application description")] = None,
        meta_publisher: Annotated[str | None, Field(description="Application publisher")] = None,
        policy_engine_mode: PolicyEngineMode = None,
        open_in_new_tab: Annotated[
            bool | None, Field(description="Open launch URL in a new browser tab")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            slug=slug,
            provider=provider,
            group=group,
            meta_launch_url=meta_launch_url,
            meta_description=meta_description,
            meta_publisher=meta_publisher,
            policy_engine_mode=policy_engine_mode,
            open_in_new_tab=open_in_new_tab,
        )
        return to_json(await client.core.create("applications", body))

    @tool(
        "authentik_apps_update",
        "Update an existing application. Only provided fields are modified (partial update).",
        category="core",
        access="full",
    )
    async def apps_update(
        slug: Annotated[str, Field(description="Application slug (used as identifier)")],
        name: Annotated[str | None, Field(description="New display name")] = None,
        provider: Annotated[int | None, Field(description="New provider ID")] = None,
        group: Annotated[str | None, Field(description="New application group name")] = None,
        meta_launch_url: Annotated[str | None, Field(description="New launch URL")] = None,
        meta_description: Annotated[str | None, Field(description="New description")] = None,
        meta_publisher: Annotated[str | None, Field(description="New publisher")] = None,
        policy_engine_mode: PolicyEngineMode = None,
        open_in_new_tab: Annotated[
            bool | None, Field(description="Open launch URL in a new browser tab")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            provider=provider,
            group=group,
            meta_launch_url=meta_launch_url,
            meta_description=meta_description,
            meta_publisher=meta_publisher,
            policy_engine_mode=policy_engine_mode,
            open_in_new_tab=open_in_new_tab,
        )
        return to_json(await client.core.partial_update("applications", slug, body))

    @tool(
        "authentik_apps_set_icon_url",
        "Set an application icon from a URL. Provide a URL pointing to an image to use as the "
        "application icon, or set clear to true to remove the current icon.",
        category="core",
        access="full",
    )
    async def apps_set_icon_url(
        slug: Slug,
        url: Annotated[str | None, Field(description="URL pointing to the icon image")] = None,
        clear: Annotated[
            bool | None, Field(description="Set to true to remove the current icon")
        ] = None,
    ) -> str:
        if clear:
            await client.core.post_form("applications", slug, "set_icon", form={"clear": "true"})
            return f'Icon cleared for application "{slug}".'
        if not url:
            raise ValueError('Either "url" or "clear: true" must be provided.')
        await client.core.post("applications", slug, "set_icon_url", body={"url": url})
        return f'Icon set for application "{slug}" from URL: {url}'

    @tool(
        "authentik_apps_delete",
        "Delete an application by its slug. This action is irreversible.",
        category="core",
        access="full",
        destructive=True,
    )
    async def apps_delete(slug: Slug) -> str:
        await client.core.destroy("applications", slug)
        return f'Application "{slug}" deleted successfully.'

    @tool(
        "authentik_apps_check_access",
        "Check whether a specific user has access to an application.",
        category="core",
    )
    async def apps_check_access(
        slug: Slug,
        for_user: Annotated[int | None, Field(description="User ID to check access for")] = None,
    ) -> str:
        return to_json(await client.core.get("applications", slug, "check_access", for_user=for_user))

    @tool(
        "authentik_apps_update_transactional",
        "Create or update an application and its provider in a single atomic transaction. "
        "Useful for setting up an application with a new provider.",
        category="core",
        access="full",
    )
    async def apps_update_transactional(
        app: Annotated[
            dict[str, Any],
            Field(
                description="Application fields: name and slug are required; provider, group, "
                "meta_launch_url, meta_description and meta_publisher are optional"
            ),
        ],
        provider_model: Annotated[
            str,
            Field(description='Provider model identifier (e.g. "authentik_providers_oauth2.oauth2provider")'),
        ],
        provider: Annotated[
            dict[str, Any],
            Field(
                description="Provider configuration using snake_case API field names "
                "(e.g. authorization_flow, invalidation_flow, client_type). For OAuth2, "
                'redirect_uris must be a list of {"matching_mode": "strict", "url": "..."} objects.'
            ),
        ],
    ) -> str:
        body = {
            "app": app,
            "provider_model": provider_model,
            "provider": {**provider, "provider_model": provider_model},
        }
        return to_json(await client.core.put("transactional", "applications", body=body))

    # --- Application entitlements ---

    @tool(
        "authentik_app_entitlements_list",
        "List application entitlements with optional filters.",
        category="core",
    )
    async def app_entitlements_list(
        app: Annotated[str | None, Field(description="Filter by application slug")] = None,
        name: Annotated[str | None, Field(description="Filter by entitlement name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.core.list(
            "application_entitlements",
            app=app,
            name=name,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_app_entitlements_get",
        "Get a single application entitlement by its UUID.",
        category="core",
    )
    async def app_entitlements_get(pbm_uuid: EntitlementUuid) -> str:
        return to_json(await client.core.retrieve("application_entitlements", pbm_uuid))

    @tool(
        "authentik_app_entitlements_create",
        "Create a new application entitlement.",
        category="core",
        access="full",
    )
    async def app_entitlements_create(
        name: Annotated[str, Field(description="Entitlement name")],
        app: Annotated[str, Field(description="Application slug or UUID")],
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(name=name, app=app, attributes=attributes)
        return to_json(await client.core.create("application_entitlements", body))

    @tool(
        "authentik_app_entitlements_update",
        "Update an existing application entitlement. Only provided fields are modified (partial update).",
        category="core",
        access="full",
    )
    async def app_entitlements_update(
        pbm_uuid: EntitlementUuid,
        name: Annotated[str | None, Field(description="New entitlement name")] = None,
        app: Annotated[str | None, Field(description="New application slug or UUID")] = None,
        attributes: Annotated[dict | None, Field(description="New custom attributes")] = None,
    ) -> str:
        body = fields(name=name, app=app, attributes=attributes)
        return to_json(await client.core.partial_update("application_entitlements", pbm_uuid, body))

    @tool(
        "authentik_app_entitlements_delete",
        "Delete an application entitlement by its UUID. This action is irreversible.",
        category="core",
        access="full",
        destructive=True,
    )
    async def app_entitlements_delete(pbm_uuid: EntitlementUuid) -> str:
        await client.core.destroy("application_entitlements", pbm_uuid)
        return f"Application entitlement {pbm_uuid} deleted successfully."
