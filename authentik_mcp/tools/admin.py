"""System administration tools (category: admin)."""

from typing import Annotated, Any

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Search, fields, to_json


def register_admin_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_admin_system_info",
        "Get system information including HTTP host, runtime environment, server time, "
        "and embedded outpost status.",
        category="admin",
    )
    async def admin_system_info() -> str:
        return to_json(await client.admin.get("system"))

    @tool(
        "authentik_admin_version",
        "Get authentik version information including current version and build hash.",
        category="admin",
    )
    async def admin_version() -> str:
        return to_json(await client.admin.get("version"))

    @tool("authentik_admin_settings_get", "Get current system settings.", category="admin")
    async def admin_settings_get() -> str:
        return to_json(await client.admin.get("settings"))

    @tool(
        "authentik_admin_settings_update",
        "Update system settings (partial update).",
        category="admin",
        access="full",
    )
    async def admin_settings_update(
        avatars: Annotated[
            str | None, Field(description="Configure how authentik should show avatars for users")
        ] = None,
        default_user_change_name: Annotated[
            bool | None, Field(description="Enable the ability for users to change their name")
        ] = None,
        default_user_change_email: Annotated[
            bool | None, Field(description="Enable the ability for users to change their email address")
        ] = None,
        default_user_change_username: Annotated[
            bool | None, Field(description="Enable the ability for users to change their username")
        ] = None,
        event_retention: Annotated[
            str | None,
            Field(description="Events will be deleted after this duration (format: weeks=3;days=2;hours=3,seconds=2)"),
        ] = None,
        footer_links: Annotated[Any, Field(description="Footer links configuration (JSON)")] = None,
        gdpr_compliance: Annotated[
            bool | None,
            Field(description="When enabled, all events caused by a user will be deleted upon the user deletion"),
        ] = None,
        impersonation: Annotated[
            bool | None, Field(description="Globally enable/disable impersonation")
        ] = None,
        default_token_duration: Annotated[str | None, Field(description="Default token duration")] = None,
        default_token_length: Annotated[int | None, Field(description="Default token length")] = None,
    ) -> str:
        body = fields(
            avatars=avatars,
            default_user_change_name=default_user_change_name,
            default_user_change_email=default_user_change_email,
            default_user_change_username=default_user_change_username,
            event_retention=event_retention,
            footer_links=footer_links,
            gdpr_compliance=gdpr_compliance,
            impersonation=impersonation,
            default_token_duration=default_token_duration,
            default_token_length=default_token_length,
        )
        return to_json(await client.admin.patch("settings", body=body))

    @tool(
        "authentik_admin_apps",
        "List installed Django applications in the authentik instance.",
        category="admin",
    )
    async def admin_apps() -> str:
        return to_json(await client.admin.get("apps"))

    @tool(
        "authentik_admin_models",
        "List all data models available in the authentik instance.",
        category="admin",
    )
    async def admin_models() -> str:
        return to_json(await client.admin.get("models"))

    @tool("authentik_admin_version_history", "List authentik version history entries.", category="admin")
    async def admin_version_history(
        build: Annotated[str | None, Field(description="Filter by build hash")] = None,
        version: Annotated[str | None, Field(description="Filter by version string")] = None,
        search: Search = None,
        ordering: Ordering = None,
    ) -> str:
        result = await client.admin.get(
            "version", "history", build=build, version=version, search=search, ordering=ordering
        )
        return to_json(result)

    @tool(
        "authentik_admin_system_task_trigger",
        "Trigger all system tasks (e.g., cleanup, cache clear). Returns updated system info.",
        category="admin",
        access="full",
    )
    async def admin_system_task_trigger() -> str:
        return to_json(await client.admin.post("system"))
