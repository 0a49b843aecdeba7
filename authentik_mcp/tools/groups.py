"""Group management tools (category: core)."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

GroupUuid = Annotated[str, Field(description="Group UUID")]


def register_group_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_groups_list",
        "List groups with optional filters for name, superuser status, members, and search.",
        category="core",
    )
    async def groups_list(
        name: Annotated[str | None, Field(description="Filter by exact group name")] = None,
        members_by_pk: Annotated[
            list[int] | None, Field(description="Filter by member user IDs")
        ] = None,
        members_by_username: Annotated[
            list[str] | None, Field(description="Filter by member usernames")
        ] = None,
        is_superuser: Annotated[
            bool | None, Field(description="Filter by superuser group status")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.core.list(
            "groups",
            name=name,
            members_by_pk=members_by_pk,
            members_by_username=members_by_username,
            is_superuser=is_superuser,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_groups_get", "Get a single group by its UUID.", category="core")
    async def groups_get(group_uuid: GroupUuid) -> str:
        return to_json(await client.core.retrieve("groups", group_uuid))

    @tool(
        "authentik_groups_create",
        "Create a new group with optional parent, superuser status, users, and custom attributes.",
        category="core",
        access="full",
    )
    async def groups_create(
        name: Annotated[str, Field(description="Group name")],
        parent: Annotated[str | None, Field(description="Parent group UUID")] = None,
        is_superuser: Annotated[
            bool | None, Field(description="Whether members of this group are superusers")
        ] = None,
        users: Annotated[list[int] | None, Field(description="User IDs to add as members")] = None,
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(
            name=name, parent=parent, is_superuser=is_superuser, users=users, attributes=attributes
        )
        return to_json(await client.core.create("groups", body))

    @tool(
        "authentik_groups_update",
        "Update an existing group. Only provided fields are modified (partial update).",
        category="core",
        access="full",
    )
    async def groups_update(
        group_uuid: GroupUuid,
        name: Annotated[str | None, Field(description="New group name")] = None,
        parent: Annotated[str | None, Field(description="New parent group UUID")] = None,
        is_superuser: Annotated[bool | None, Field(description="Whether members are superusers")] = None,
        users: Annotated[list[int] | None, Field(description="User IDs")] = None,
        attributes: Annotated[dict | None, Field(description="Custom attributes")] = None,
    ) -> str:
        body = fields(
            name=name, parent=parent, is_superuser=is_superuser, users=users, attributes=attributes
        )
        return to_json(await client.core.partial_update("groups", group_uuid, body))

    @tool(
        "authentik_groups_delete",
        "Delete a group by its UUID. This action is irreversible.",
        category="core",
        access="full",
        destructive=True,
    )
    async def groups_delete(group_uuid: GroupUuid) -> str:
        await client.core.destroy("groups", group_uuid)
        return f"Group {group_uuid} deleted successfully."

    @tool(
        "authentik_groups_add_user",
        "Add a user to a group by group UUID and user ID.",
        category="core",
        access="full",
    )
    async def groups_add_user(
        group_uuid: GroupUuid,
        user_id: Annotated[int, Field(description="User ID to add to the group")],
    ) -> str:
        await client.core.post("groups", group_uuid, "add_user", body={"pk": user_id})
        return f"User {user_id} added to group {group_uuid} successfully."

    @tool(
        "authentik_groups_remove_user",
        "Remove a user from a group by group UUID and user ID.",
        category="core",
        access="full",
    )
    async def groups_remove_user(
        group_uuid: GroupUuid,
        user_id: Annotated[int, Field(description="User ID to remove from the group")],
    ) -> str:
        await client.core.post("groups", group_uuid, "remove_user", body={"pk": user_id})
        return f"User {user_id} removed from group {group_uuid} successfully."
