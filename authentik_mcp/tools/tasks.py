"""Background system task tools (category: events)."""

from typing import Annotated, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, to_json


def register_task_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_tasks_list",
        "List system tasks with optional filters by name, status, or UID.",
        category="events",
    )
    async def tasks_list(
        name: Annotated[str | None, Field(description="Filter by task name")] = None,
        status: Annotated[
            Literal["unknown", "successful", "warning", "error"] | None,
            Field(description="Filter by task status"),
        ] = None,
        uid: Annotated[str | None, Field(description="Filter by task UID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.events.list(
            "system_tasks",
            name=name,
            status=status,
            uid=uid,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_tasks_get", "Get details of a specific system task by UUID.", category="events")
    async def tasks_get(uuid: Annotated[str, Field(description="System task UUID")]) -> str:
        return to_json(await client.events.retrieve("system_tasks", uuid))

    @tool(
        "authentik_tasks_retry",
        "Retry a failed system task by UUID.",
        category="events",
        access="full",
    )
    async def tasks_retry(uuid: Annotated[str, Field(description="System task UUID to retry")]) -> str:
        await client.events.post("system_tasks", uuid, "run")
        return f"Task {uuid} retry triggered successfully."
