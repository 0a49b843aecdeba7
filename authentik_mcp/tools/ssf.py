"""Shared Signals Framework stream tools (category: ssf). The API is read-only."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, to_json


def register_ssf_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_ssf_streams_list",
        "List Shared Signals Framework (SSF) event streams with optional filters. Read-only.",
        category="ssf",
    )
    async def ssf_streams_list(
        endpoint_url: Annotated[str | None, Field(description="Filter by endpoint URL")] = None,
        provider: Annotated[int | None, Field(description="Filter by provider ID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.ssf.list(
            "streams",
            endpoint_url=endpoint_url,
            provider=provider,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_ssf_streams_get",
        "Get a single SSF event stream by its UUID. Read-only.",
        category="ssf",
    )
    async def ssf_streams_get(uuid: Annotated[str, Field(description="SSF stream UUID")]) -> str:
        return to_json(await client.ssf.retrieve("streams", uuid))
