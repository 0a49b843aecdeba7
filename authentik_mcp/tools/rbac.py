"""
Role-based access control tools (category: rbac).

Permission assignment goes through /rbac/permissions/assigned_by_roles/ and
/rbac/permissions/assigned_by_users/. Unassigning a permission that is not
assigned succeeds, so the unassign tools can be repeated safely.
"""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

RoleUuid = Annotated[str, Field(description="Role UUID")]
Model = Annotated[str | None, Field(description="Model identifier for scoped permissions")]
ObjectPk = Annotated[
    str | None, Field(description="Object primary key for object-level permissions")
]


def _assignment(permissions: list[str], model: str | None, object_pk: str | None) -> dict:
    return fields(permissions=permissions, model=model, object_pk=object_pk)


def register_rbac_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    # --- Roles ---

    @tool("authentik_rbac_roles_list", "List RBAC roles with optional filters.", category="rbac")
    async def rbac_roles_list(
        group__name: Annotated[str | None, Field(description="Filter by group name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.rbac.list(
            "roles",
            group__name=group__name,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_rbac_roles_get", "Get a single RBAC role by its UUID.", category="rbac")
    async def rbac_roles_get(uuid: RoleUuid) -> str:
        return to_json(await client.rbac.retrieve("roles", uuid))

    @tool("authentik_rbac_roles_create", "Create a new RBAC role.", category="rbac", access="full")
    async def rbac_roles_create(name: Annotated[str, Field(description="Role name")]) -> str:
        return to_json(await client.rbac.create("roles", {"name": name}))

    @tool(
        "authentik_rbac_roles_update",
        "Update an existing RBAC role. Only provided fields are modified (partial update).",
        category="rbac",
        access="full",
    )
    async def rbac_roles_update(
        uuid: RoleUuid,
        name: Annotated[str | None, Field(description="New role name")] = None,
    ) -> str:
        return to_json(await client.rbac.partial_update("roles", uuid, fields(name=name)))

    @tool(
        "authentik_rbac_roles_delete",
        "Delete an RBAC role by its UUID. This action is irreversible.",
        category="rbac",
        access="full",
        destructive=True,
    )
    async def rbac_roles_delete(uuid: RoleUuid) -> str:
        await client.rbac.destroy("roles", uuid)
        return f'Role "{uuid}" deleted successfully.'

    # --- Permissions ---

    @tool(
        "authentik_rbac_permissions_list",
        "List all available permissions, filterable by model and app.",
        category="rbac",
    )
    async def rbac_permissions_list(
        codename: Annotated[str | None, Field(description="Filter by permission codename")] = None,
        content_type_model: Annotated[
            str | None, Field(description="Filter by content type model")
        ] = None,
        content_type_app_label: Annotated[
            str | None, Field(description="Filter by content type app label")
        ] = None,
        role: Annotated[str | None, Field(description="Filter by role UUID")] = None,
        user: Annotated[int | None, Field(description="Filter by user ID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.rbac.list(
            "permissions",
            codename=codename,
            content_type__model=content_type_model,
            content_type__app_label=content_type_app_label,
            role=role,
            user=user,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    # --- Assigned by role ---

    @tool(
        "authentik_rbac_permissions_by_role_list",
        "List object permissions assigned to a specific model, filterable by role.",
        category="rbac",
    )
    async def rbac_permissions_by_role_list(
        model: Annotated[str, Field(description='Model identifier (e.g. "authentik_core.application")')],
        object_pk: Annotated[
            str | None, Field(description="Object primary key to filter permissions for")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.rbac.list(
            "permissions/assigned_by_roles",
            model=model,
            object_pk=object_pk,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_rbac_permissions_by_role_assign",
        "Assign permission(s) to a role. When object_pk is set, permissions are only "
        "assigned to the specific object.",
        category="rbac",
        access="full",
    )
    async def rbac_permissions_by_role_assign(
        uuid: RoleUuid,
        permissions: Annotated[list[str], Field(description="Permission codenames to assign")],
        model: Model = None,
        object_pk: ObjectPk = None,
    ) -> str:
        result = await client.rbac.post(
            "permissions/assigned_by_roles",
            uuid,
            "assign",
            body=_assignment(permissions, model, object_pk),
        )
        return to_json(result)

    @tool(
        "authentik_rbac_permissions_by_role_unassign",
        "Unassign permission(s) from a role. When object_pk is set, permissions are only "
        "unassigned from the specific object.",
        category="rbac",
        access="full",
    )
    async def rbac_permissions_by_role_unassign(
        uuid: RoleUuid,
        permissions: Annotated[list[str], Field(description="Permission codenames to unassign")],
        model: Model = None,
        object_pk: ObjectPk = None,
    ) -> str:
        await client.rbac.patch(
            "permissions/assigned_by_roles",
            uuid,
            "unassign",
            body=_assignment(permissions, model, object_pk),
        )
        return f'Permissions unassigned from role "{uuid}" successfully.'

    # --- Assigned by user ---

    @tool(
        "authentik_rbac_permissions_by_user_list",
        "List object permissions assigned to a specific model, filterable by user.",
        category="rbac",
    )
    async def rbac_permissions_by_user_list(
        model: Annotated[str, Field(description='Model identifier (e.g. "authentik_core.user")')],
        object_pk: Annotated[
            str | None, Field(description="Object primary key to filter permissions for")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.rbac.list(
            "permissions/assigned_by_users",
            model=model,
            object_pk=object_pk,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_rbac_permissions_by_user_assign",
        "Assign permission(s) to a user.",
        category="rbac",
        access="full",
    )
    async def rbac_permissions_by_user_assign(
        id: Annotated[int, Field(description="User ID")],
        permissions: Annotated[list[str], Field(description="Permission codenames to assign")],
        model: Model = None,
        object_pk: ObjectPk = None,
    ) -> str:
        result = await client.rbac.post(
            "permissions/assigned_by_users",
            id,
            "assign",
            body=_assignment(permissions, model, object_pk),
        )
        return to_json(result)

    @tool(
        "authentik_rbac_permissions_by_user_unassign",
        "Unassign permission(s) from a user.",
        category="rbac",
        access="full",
    )
    async def rbac_permissions_by_user_unassign(
        id: Annotated[int, Field(description="User ID")],
        permissions: Annotated[list[str], Field(description="Permission codenames to unassign")],
        model: Model = None,
        object_pk: ObjectPk = None,
    ) -> str:
        await client.rbac.patch(
            "permissions/assigned_by_users",
            id,
            "unassign",
            body=_assignment(permissions, model, object_pk),
        )
        return f"Permissions unassigned from user {id} successfully."
