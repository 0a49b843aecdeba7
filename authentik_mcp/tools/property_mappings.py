"""
Property mapping tools (category: property-mappings).

Property mappings are Python expressions that shape the attributes a
provider emits or a source imports. The by-type tools resolve their
endpoint through authentik_mcp.dispatch.PROPERTY_MAPPINGS, whose API family
is "propertymappings".
"""

from typing import Annotated, Any

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import PROPERTY_MAPPINGS, PropertyMappingType
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

VALID_TYPES = ", ".join(PROPERTY_MAPPINGS.types)

MappingUuid = Annotated[str, Field(description="Property mapping UUID")]
MappingTypeArg = Annotated[PropertyMappingType, Field(description=f"Mapping type: {VALID_TYPES}")]


def register_property_mapping_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool
    api = client.propertymappings

    @tool(
        "authentik_property_mappings_list",
        "List all property mappings across all types.",
        category="property-mappings",
    )
    async def property_mappings_list(
        name: Annotated[str | None, Field(description="Filter by exact mapping name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await api.list(
            "all", name=name, search=search, ordering=ordering, page=page, page_size=page_size
        )
        return to_json(result)

    @tool(
        "authentik_property_mappings_get",
        "Get a single property mapping by its UUID (cross-type).",
        category="property-mappings",
    )
    async def property_mappings_get(pm_uuid: MappingUuid) -> str:
        return to_json(await api.retrieve("all", pm_uuid))

    @tool(
        "authentik_property_mappings_delete",
        "Delete a property mapping by its UUID. This action is irreversible.",
        category="property-mappings",
        access="full",
        destructive=True,
    )
    async def property_mappings_delete(pm_uuid: MappingUuid) -> str:
        await api.destroy("all", pm_uuid)
        return f'Property mapping "{pm_uuid}" deleted successfully.'

    @tool(
        "authentik_property_mappings_types_list",
        "List all available property mapping types that can be created.",
        category="property-mappings",
    )
    async def property_mappings_types_list() -> str:
        return to_json(await api.get("all", "types"))

    @tool(
        "authentik_property_mappings_test",
        "Test a property mapping by UUID. Optionally provide user, context, and format_result.",
        category="property-mappings",
        access="full",
    )
    async def property_mappings_test(
        pm_uuid: MappingUuid,
        user: Annotated[int | None, Field(description="User ID to use as test context")] = None,
        context: Annotated[
            dict[str, Any] | None, Field(description="Additional context for the test")
        ] = None,
        format_result: Annotated[bool | None, Field(description="Whether to format the result")] = None,
    ) -> str:
        body = fields(user=user, context=context) or None
        result = await api.post("all", pm_uuid, "test", body=body, format_result=format_result)
        return to_json(result)

    # --- By type ---

    @tool(
        "authentik_property_mappings_by_type_list",
        f"List property mappings of a specific type. Valid types: {VALID_TYPES}.",
        category="property-mappings",
    )
    async def property_mappings_by_type_list(
        mapping_type: MappingTypeArg,
        name: Annotated[str | None, Field(description="Filter by name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(name=name, search=search, ordering=ordering, page=page, page_size=page_size)
        return to_json(await PROPERTY_MAPPINGS.invoke(api, mapping_type, "list", query=query))

    @tool(
        "authentik_property_mappings_by_type_get",
        f"Get a single property mapping by type and UUID. Valid types: {VALID_TYPES}.",
        category="property-mappings",
    )
    async def property_mappings_by_type_get(mapping_type: MappingTypeArg, pm_uuid: MappingUuid) -> str:
        return to_json(await PROPERTY_MAPPINGS.invoke(api, mapping_type, "get", lookup=pm_uuid))

    @tool(
        "authentik_property_mappings_by_type_create",
        f"Create a new property mapping of a specific type. Valid types: {VALID_TYPES}. Pass the "
        'type-specific configuration as a JSON object in the "config" parameter.',
        category="property-mappings",
        access="full",
    )
    async def property_mappings_by_type_create(
        mapping_type: MappingTypeArg,
        config: Annotated[
            dict[str, Any],
            Field(
                description='Mapping configuration (fields depend on mapping_type). Must include "name" and "expression".'
            ),
        ],
    ) -> str:
        return to_json(await PROPERTY_MAPPINGS.invoke(api, mapping_type, "create", payload=config))

    @tool(
        "authentik_property_mappings_by_type_update",
        "Update an existing property mapping by type and UUID. Only provided fields are modified "
        f"(partial update). Valid types: {VALID_TYPES}.",
        category="property-mappings",
        access="full",
    )
    async def property_mappings_by_type_update(
        mapping_type: MappingTypeArg,
        pm_uuid: MappingUuid,
        config: Annotated[dict[str, Any], Field(description="Fields to update (partial update)")],
    ) -> str:
        result = await PROPERTY_MAPPINGS.invoke(
            api, mapping_type, "update", lookup=pm_uuid, payload=config
        )
        return to_json(result)

    @tool(
        "authentik_property_mappings_by_type_delete",
        "Delete a property mapping by type and UUID. This action is irreversible. "
        f"Valid types: {VALID_TYPES}.",
        category="property-mappings",
        access="full",
        destructive=True,
    )
    async def property_mappings_by_type_delete(mapping_type: MappingTypeArg, pm_uuid: MappingUuid) -> str:
        await PROPERTY_MAPPINGS.invoke(api, mapping_type, "delete", lookup=pm_uuid)
        return f'Property mapping "{pm_uuid}" (type: {mapping_type}) deleted successfully.'
