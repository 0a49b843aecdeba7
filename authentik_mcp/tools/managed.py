"""Blueprint instance tools (category: managed)."""

from typing import Annotated, Any

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

InstanceUuid = Annotated[str, Field(description="Blueprint instance UUID")]


def register_managed_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_blueprints_list",
        "List managed blueprint instances with optional filters.",
        category="managed",
    )
    async def blueprints_list(
        name: Annotated[str | None, Field(description="Filter by exact name")] = None,
        path: Annotated[str | None, Field(description="Filter by blueprint path")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.managed.list(
            "blueprints",
            name=name,
            path=path,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_blueprints_get", "Get a single blueprint instance by its UUID.", category="managed")
    async def blueprints_get(instance_uuid: InstanceUuid) -> str:
        return to_json(await client.managed.retrieve("blueprints", instance_uuid))

    @tool(
        "authentik_blueprints_create",
        "Create a new managed blueprint instance.",
        category="managed",
        access="full",
    )
    async def blueprints_create(
        name: Annotated[str, Field(description="Blueprint name")],
        path: Annotated[str | None, Field(description="Path to the blueprint file")] = None,
        context: Annotated[
            dict[str, Any] | None, Field(description="Context variables for the blueprint")
        ] = None,
        enabled: Annotated[bool | None, Field(description="Whether the blueprint is enabled")] = None,
        content: Annotated[str | None, Field(description="Inline blueprint content (YAML)")] = None,
    ) -> str:
        body = fields(name=name, path=path, context=context, enabled=enabled, content=content)
        return to_json(await client.managed.create("blueprints", body))

    @tool(
        "authentik_blueprints_update",
        "Update an existing blueprint instance. Only provided fields are modified (partial update).",
        category="managed",
        access="full",
    )
    async def blueprints_update(
        instance_uuid: InstanceUuid,
        name: Annotated[str | None, Field(description="New blueprint name")] = None,
        path: Annotated[str | None, Field(description="New blueprint file path")] = None,
        context: Annotated[dict[str, Any] | None, Field(description="New context variables")] = None,
        enabled: Annotated[bool | None, Field(description="Whether the blueprint is enabled")] = None,
        content: Annotated[str | None, Field(description="New inline blueprint content")] = None,
    ) -> str:
        body = fields(name=name, path=path, context=context, enabled=enabled, content=content)
        return to_json(await client.managed.partial_update("blueprints", instance_uuid, body))

    @tool(
        "authentik_blueprints_delete",
        "Delete a blueprint instance by its UUID. This action is irreversible.",
        category="managed",
        access="full",
        destructive=True,
    )
    async def blueprints_delete(instance_uuid: InstanceUuid) -> str:
        await client.managed.destroy("blueprints", instance_uuid)
        return f'Blueprint instance "{instance_uuid}" deleted successfully.'

    @tool(
        "authentik_blueprints_available",
        "List all available blueprint files that can be used to create blueprint instances.",
        category="managed",
    )
    async def blueprints_available() -> str:
        return to_json(await client.managed.get("blueprints", "available"))

    @tool(
        "authentik_blueprints_apply",
        "Apply a blueprint instance, executing its configuration. This may create, update, or delete objects.",
        category="managed",
        access="full",
        destructive=True,
    )
    async def blueprints_apply(instance_uuid: InstanceUuid) -> str:
        return to_json(await client.managed.post("blueprints", instance_uuid, "apply"))
