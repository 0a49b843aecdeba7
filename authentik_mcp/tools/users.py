"""User management tools (category: core)."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

UserId = Annotated[int, Field(description="User ID")]


def register_user_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_users_list",
        "List users with optional filters for username, email, name, active status, "
        "superuser status, path, groups, and search.",
        category="core",
    )
    async def users_list(
        username: Annotated[str | None, Field(description="Filter by exact username")] = None,
        email: Annotated[str | None, Field(description="Filter by exact email")] = None,
        name: Annotated[str | None, Field(description="Filter by exact display name")] = None,
        is_active: Annotated[bool | None, Field(description="Filter by active status")] = None,
        is_superuser: Annotated[bool | None, Field(description="Filter by superuser status")] = None,
        path: Annotated[str | None, Field(description="Filter by exact user path")] = None,
        path_startswith: Annotated[str | None, Field(description="Filter by path prefix")] = None,
        groups_by_name: Annotated[
            list[str] | None, Field(description="Filter by group names")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.core.list(
            "users",
            username=username,
            email=email,
            name=name,
            is_active=is_active,
            is_superuser=is_superuser,
            path=path,
            path_startswith=path_startswith,
            groups_by_name=groups_by_name,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_users_get", "Get a single user by their numeric ID.", category="core")
    async def users_get(id: UserId) -> str:
        return to_json(await client.core.retrieve("users", id))

    @tool(
        "authentik_users_create",
        "Create a new user. Use authentik_users_set_password to set the password after creation.",
        category="core",
        access="full",
    )
    async def users_create(
        username: Annotated[str, Field(description="Username (must be unique)")],
        name: Annotated[str, Field(description="Display name")],
        email: Annotated[str | None, Field(description="Email address")] = None,
        path: Annotated[str | None, Field(description='User path (e.g. "users" or "admins")')] = None,
        is_active: Annotated[bool | None, Field(description="Whether the account is active")] = None,
        groups: Annotated[list[str] | None, Field(description="Group UUIDs to assign")] = None,
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(
            username=username,
            name=name,
            email=email,
            path=path,
            is_active=is_active,
            groups=groups,
            attributes=attributes,
        )
        return to_json(await client.core.create("users", body))

    @tool(
        "authentik_users_update",
        "Update an existing user. Only provided fields are modified (partial update).",
        category="core",
        access="full",
    )
    async def users_update(
        id: UserId,
        username: Annotated[str | None, Field(description="New username")] = None,
        name: Annotated[str | None, Field(description="New display name")] = None,
        email: Annotated[str | None, Field(description="New email address")] = None,
        path: Annotated[str | None, Field(description="New user path")] = None,
        is_active: Annotated[bool | None, Field(description="Whether the account is active")] = None,
        groups: Annotated[list[str] | None, Field(description="Group UUIDs")] = None,
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(
            username=username,
            name=name,
            email=email,
            path=path,
            is_active=is_active,
            groups=groups,
            attributes=attributes,
        )
        return to_json(await client.core.partial_update("users", id, body))

    @tool(
        "authentik_users_delete",
        "Delete a user by their numeric ID. This action is irreversible.",
        category="core",
        access="full",
        destructive=True,
    )
    async def users_delete(id: UserId) -> str:
        await client.core.destroy("users", id)
        return f"User {id} deleted successfully."

    @tool("authentik_users_me", "Get information about the currently authenticated user.", category="core")
    async def users_me() -> str:
        return to_json(await client.core.get("users", "me"))

    @tool("authentik_users_set_password", "Set a new password for a user.", category="core", access="full")
    async def users_set_password(
        id: UserId,
        password: Annotated[str, Field(description="New password to set")],
    ) -> str:
        await client.core.post("users", id, "set_password", body={"password": password})
        return f"Password set successfully for user {id}."

    @tool(
        "authentik_users_create_service_account",
        "Create a new service account user with an optional associated group and token.",
        category="core",
        access="full",
    )
    async def users_create_service_account(
        name: Annotated[str, Field(description="Service account name")],
        create_group: Annotated[
            bool | None, Field(description="Whether to create an associated group")
        ] = None,
        expiring: Annotated[bool | None, Field(description="Whether the token should expire")] = None,
        expires: Annotated[
            str | None,
            Field(description="Token expiration date (ISO 8601). If not provided, valid for 360 days."),
        ] = None,
    ) -> str:
        body = fields(name=name, create_group=create_group, expiring=expiring, expires=expires)
        return to_json(await client.core.post("users", "service_account", body=body))

    @tool(
        "authentik_users_generate_recovery_link",
        "Generate a temporary recovery link for a user to regain account access.",
        category="core",
        access="full",
    )
    async def users_generate_recovery_link(id: UserId) -> str:
        return to_json(await client.core.post("users", id, "recovery"))

    @tool(
        "authentik_users_send_recovery_email",
        "Send a recovery email to a user using a specified email stage.",
        category="core",
        access="full",
    )
    async def users_send_recovery_email(
        id: UserId,
        email_stage: Annotated[
            str, Field(description="UUID of the email stage used to send the recovery email")
        ],
    ) -> str:
        await client.core.post("users", id, "recovery_email", email_stage=email_stage)
        return f"Recovery email sent successfully to user {id}."

    @tool("authentik_users_list_paths", "List all user paths configured in the system.", category="core")
    async def users_list_paths(search: Search = None) -> str:
        return to_json(await client.core.get("users", "paths", search=search))
