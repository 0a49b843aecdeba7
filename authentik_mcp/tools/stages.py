"""
Stage tools (category: stages).

Stages are the steps of a flow. authentik has two dozen stage types, each
with its own endpoint and request shape; the by-type tools take a
stage_type argument and resolve the concrete operation through
authentik_mcp.dispatch.STAGES. Type-specific fields are passed through in
a config object using the API's snake_case field names.

Invitations and prompts are stage-adjacent resources with their own tools.
"""

from typing import Annotated, Any

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import STAGES, StageType
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, merge, to_json

StageUuid = Annotated[str, Field(description="Stage UUID")]
InviteUuid = Annotated[str, Field(description="Invitation UUID")]
PromptUuid = Annotated[str, Field(description="Prompt UUID")]


def register_stage_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    # --- All stages ---

    @tool(
        "authentik_stages_list",
        "List all stages across all types with optional filters.",
        category="stages",
    )
    async def stages_list(
        name: Annotated[str | None, Field(description="Filter by exact stage name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.stages.list(
            "all", name=name, search=search, ordering=ordering, page=page, page_size=page_size
        )
        return to_json(result)

    @tool("authentik_stages_get", "Get a single stage by its UUID (cross-type).", category="stages")
    async def stages_get(stage_uuid: StageUuid) -> str:
        return to_json(await client.stages.retrieve("all", stage_uuid))

    @tool(
        "authentik_stages_delete",
        "Delete a stage by its UUID (cross-type). This action is irreversible.",
        category="stages",
        access="full",
        destructive=True,
    )
    async def stages_delete(stage_uuid: StageUuid) -> str:
        await client.stages.destroy("all", stage_uuid)
        return f"Stage {stage_uuid} deleted successfully."

    @tool("authentik_stages_types_list", "List all available stage types.", category="stages")
    async def stages_types_list() -> str:
        return to_json(await client.stages.get("all", "types"))

    # --- By type ---

    @tool(
        "authentik_stages_by_type_list",
        "List stages of a specific type with optional filters.",
        category="stages",
    )
    async def stages_by_type_list(
        stage_type: Annotated[StageType, Field(description="Stage type to list")],
        name: Annotated[str | None, Field(description="Filter by exact stage name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(name=name, search=search, ordering=ordering, page=page, page_size=page_size)
        return to_json(await STAGES.invoke(client.stages, stage_type, "list", query=query))

    @tool(
        "authentik_stages_by_type_get",
        "Get a single stage of a specific type by its UUID.",
        category="stages",
    )
    async def stages_by_type_get(
        stage_type: Annotated[StageType, Field(description="Stage type")],
        stage_uuid: StageUuid,
    ) -> str:
        return to_json(await STAGES.invoke(client.stages, stage_type, "get", lookup=stage_uuid))

    @tool(
        "authentik_stages_by_type_create",
        "Create a new stage of a specific type. Pass type-specific fields in the config object.",
        category="stages",
        access="full",
    )
    async def stages_by_type_create(
        stage_type: Annotated[StageType, Field(description="Stage type to create")],
        name: Annotated[str, Field(description="Stage name")],
        config: Annotated[
            dict[str, Any] | None,
            Field(description="Type-specific configuration fields (snake_case API field names)"),
        ] = None,
    ) -> str:
        payload = merge({"name": name}, config)
        return to_json(await STAGES.invoke(client.stages, stage_type, "create", payload=payload))

    @tool(
        "authentik_stages_by_type_update",
        "Update an existing stage of a specific type. Pass type-specific fields in the config object.",
        category="stages",
        access="full",
    )
    async def stages_by_type_update(
        stage_type: Annotated[StageType, Field(description="Stage type")],
        stage_uuid: StageUuid,
        config: Annotated[
            dict[str, Any] | None,
            Field(description="Type-specific fields to update (snake_case API field names)"),
        ] = None,
    ) -> str:
        result = await STAGES.invoke(
            client.stages, stage_type, "update", lookup=stage_uuid, payload=config
        )
        return to_json(result)

    @tool(
        "authentik_stages_by_type_delete",
        "Delete a stage of a specific type by its UUID. This action is irreversible.",
        category="stages",
        access="full",
        destructive=True,
    )
    async def stages_by_type_delete(
        stage_type: Annotated[StageType, Field(description="Stage type")],
        stage_uuid: StageUuid,
    ) -> str:
        await STAGES.invoke(client.stages, stage_type, "delete", lookup=stage_uuid)
        return f"Stage {stage_uuid} (type: {stage_type}) deleted successfully."

    # --- Invitations ---

    @tool("authentik_invitations_list", "List invitations with optional filters.", category="stages")
    async def invitations_list(
        name: Annotated[str | None, Field(description="Filter by invitation name")] = None,
        created_by_username: Annotated[
            str | None, Field(description="Filter by creator username")
        ] = None,
        flow_slug: Annotated[str | None, Field(description="Filter by flow slug")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.stages.list(
            "invitation/invitations",
            name=name,
            created_by__username=created_by_username,
            flow__slug=flow_slug,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_invitations_get", "Get a single invitation by its UUID.", category="stages")
    async def invitations_get(invite_uuid: InviteUuid) -> str:
        return to_json(await client.stages.retrieve("invitation/invitations", invite_uuid))

    @tool("authentik_invitations_create", "Create a new invitation.", category="stages", access="full")
    async def invitations_create(
        name: Annotated[str, Field(description="Invitation name")],
        expires: Annotated[str | None, Field(description="Expiry date (ISO 8601)")] = None,
        fixed_data: Annotated[
            dict | None, Field(description="Fixed data to pass to the flow context")
        ] = None,
        single_use: Annotated[
            bool | None, Field(description="Whether the invitation can only be used once")
        ] = None,
        flow: Annotated[str | None, Field(description="Flow to use for this invitation")] = None,
    ) -> str:
        body = fields(
            name=name, expires=expires, fixed_data=fixed_data, single_use=single_use, flow=flow
        )
        return to_json(await client.stages.create("invitation/invitations", body))

    @tool(
        "authentik_invitations_update",
        "Update an existing invitation. Only provided fields are modified.",
        category="stages",
        access="full",
    )
    async def invitations_update(
        invite_uuid: InviteUuid,
        name: Annotated[str | None, Field(description="New invitation name")] = None,
        expires: Annotated[str | None, Field(description="New expiry date (ISO 8601)")] = None,
        fixed_data: Annotated[dict | None, Field(description="New fixed data")] = None,
        single_use: Annotated[
            bool | None, Field(description="Whether the invitation can only be used once")
        ] = None,
        flow: Annotated[str | None, Field(description="New flow")] = None,
    ) -> str:
        body = fields(
            name=name, expires=expires, fixed_data=fixed_data, single_use=single_use, flow=flow
        )
        return to_json(await client.stages.partial_update("invitation/invitations", invite_uuid, body))

    @tool(
        "authentik_invitations_delete",
        "Delete an invitation by its UUID. This action is irreversible.",
        category="stages",
        access="full",
        destructive=True,
    )
    async def invitations_delete(invite_uuid: InviteUuid) -> str:
        await client.stages.destroy("invitation/invitations", invite_uuid)
        return f"Invitation {invite_uuid} deleted successfully."

    # --- Prompts ---

    @tool(
        "authentik_prompts_list",
        "List prompt field definitions with optional filters.",
        category="stages",
    )
    async def prompts_list(
        field_key: Annotated[str | None, Field(description="Filter by field key")] = None,
        label: Annotated[str | None, Field(description="Filter by label")] = None,
        name: Annotated[str | None, Field(description="Filter by name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.stages.list(
            "prompt/prompts",
            field_key=field_key,
            label=label,
            name=name,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_prompts_get",
        "Get a single prompt field definition by its UUID.",
        category="stages",
    )
    async def prompts_get(prompt_uuid: PromptUuid) -> str:
        return to_json(await client.stages.retrieve("prompt/prompts", prompt_uuid))

    @tool(
        "authentik_prompts_create",
        "Create a new prompt field definition.",
        category="stages",
        access="full",
    )
    async def prompts_create(
        name: Annotated[str, Field(description="Prompt name")],
        field_key: Annotated[str, Field(description="Field key for form data")],
        label: Annotated[str, Field(description="Display label")],
        type: Annotated[
            str,
            Field(
                description="Prompt type (e.g. text, email, password, number, checkbox, "
                "radio-button-group, dropdown)"
            ),
        ],
        required: Annotated[bool | None, Field(description="Whether the field is required")] = None,
        placeholder: Annotated[str | None, Field(description="Placeholder text")] = None,
        initial_value: Annotated[str | None, Field(description="Initial value")] = None,
        order: Annotated[int | None, Field(description="Display order")] = None,
        placeholder_expression: Annotated[
            bool | None, Field(description="Whether the placeholder is a Python expression")
        ] = None,
        initial_value_expression: Annotated[
            bool | None, Field(description="Whether the initial value is a Python expression")
        ] = None,
        sub_text: Annotated[str | None, Field(description="Help text below the field")] = None,
    ) -> str:
        body = fields(
            name=name,
            field_key=field_key,
            label=label,
            type=type,
            required=required,
            placeholder=placeholder,
            initial_value=initial_value,
            order=order,
            placeholder_expression=placeholder_expression,
            initial_value_expression=initial_value_expression,
            sub_text=sub_text,
        )
        return to_json(await client.stages.create("prompt/prompts", body))

    @tool(
        "authentik_prompts_update",
        "Update an existing prompt field definition. Only provided fields are modified.",
        category="stages",
        access="full",
    )
    async def prompts_update(
        prompt_uuid: PromptUuid,
        name: Annotated[str | None, Field(description="New prompt name")] = None,
        field_key: Annotated[str | None, Field(description="New field key")] = None,
        label: Annotated[str | None, Field(description="New display label")] = None,
        type: Annotated[str | None, Field(description="New prompt type")] = None,
        required: Annotated[bool | None, Field(description="Whether the field is required")] = None,
        placeholder: Annotated[str | None, Field(description="New placeholder text")] = None,
        initial_value: Annotated[str | None, Field(description="New initial value")] = None,
        order: Annotated[int | None, Field(description="New display order")] = None,
        placeholder_expression: Annotated[
            bool | None, Field(description="Whether the placeholder is a Python expression")
        ] = None,
        initial_value_expression: Annotated[
            bool | None, Field(description="Whether the initial value is a Python expression")
        ] = None,
        sub_text: Annotated[str | None, Field(description="New help text")] = None,
    ) -> str:
        body = fields(
            name=name,
            field_key=field_key,
            label=label,
            type=type,
            required=required,
            placeholder=placeholder,
            initial_value=initial_value,
            order=order,
            placeholder_expression=placeholder_expression,
            initial_value_expression=initial_value_expression,
            sub_text=sub_text,
        )
        return to_json(await client.stages.partial_update("prompt/prompts", prompt_uuid, body))

    @tool(
        "authentik_prompts_delete",
        "Delete a prompt field definition by its UUID. This action is irreversible.",
        category="stages",
        access="full",
        destructive=True,
    )
    async def prompts_delete(prompt_uuid: PromptUuid) -> str:
        await client.stages.destroy("prompt/prompts", prompt_uuid)
        return f"Prompt {prompt_uuid} deleted successfully."
