"""
Authenticator device tools (category: authenticators).

Devices are enrolled through flows, so the API only lists, inspects and
removes them. The admin endpoints (/authenticators/admin/<type>/) see every
user's devices; the plain endpoints (/authenticators/<type>/) only the
calling user's. Endpoint devices are keyed by UUID, all others by numeric ID.
"""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import AUTHENTICATOR_DEVICES_ADMIN, AUTHENTICATOR_DEVICES_USER, DeviceType
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

VALID_TYPES = ", ".join(AUTHENTICATOR_DEVICES_ADMIN.types)

DeviceTypeArg = Annotated[DeviceType, Field(description="Authenticator device type")]
DeviceId = Annotated[
    int | str, Field(description="Device ID (number for most types, UUID string for endpoint)")
]


def register_authenticator_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_authenticators_list",
        "List all authenticator devices across all types for the current user.",
        category="authenticators",
    )
    async def authenticators_list() -> str:
        return to_json(await client.authenticators.get("all"))

    @tool(
        "authentik_authenticators_admin_by_type_list",
        f"List authenticator devices of a specific type (admin view). Supports: {VALID_TYPES}.",
        category="authenticators",
    )
    async def authenticators_admin_by_type_list(
        device_type: DeviceTypeArg,
        name: Annotated[str | None, Field(description="Filter by device name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(name=name, search=search, ordering=ordering, page=page, page_size=page_size)
        result = await AUTHENTICATOR_DEVICES_ADMIN.invoke(
            client.authenticators, device_type, "list", query=query
        )
        return to_json(result)

    @tool(
        "authentik_authenticators_admin_by_type_get",
        "Get a single authenticator device by type and ID (admin view). Use numeric id for most "
        "types, uuid string for endpoint type.",
        category="authenticators",
    )
    async def authenticators_admin_by_type_get(device_type: DeviceTypeArg, id: DeviceId) -> str:
        result = await AUTHENTICATOR_DEVICES_ADMIN.invoke(
            client.authenticators, device_type, "get", lookup=id
        )
        return to_json(result)

    @tool(
        "authentik_authenticators_admin_by_type_delete",
        "Delete an authenticator device by type and ID (admin view). This action is irreversible.",
        category="authenticators",
        access="full",
        destructive=True,
    )
    async def authenticators_admin_by_type_delete(device_type: DeviceTypeArg, id: DeviceId) -> str:
        await AUTHENTICATOR_DEVICES_ADMIN.invoke(client.authenticators, device_type, "delete", lookup=id)
        return f"Authenticator device ({device_type}) {id} deleted successfully."

    @tool(
        "authentik_authenticators_user_by_type_list",
        f"List authenticator devices of a specific type for the current user. Supports: {VALID_TYPES}.",
        category="authenticators",
    )
    async def authenticators_user_by_type_list(
        device_type: DeviceTypeArg,
        name: Annotated[str | None, Field(description="Filter by device name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(name=name, search=search, ordering=ordering, page=page, page_size=page_size)
        result = await AUTHENTICATOR_DEVICES_USER.invoke(
            client.authenticators, device_type, "list", query=query
        )
        return to_json(result)
