"""Flow and flow stage binding tools (category: flows)."""

from typing import Annotated, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

Designation = Literal[
    "authentication",
    "authorization",
    "invalidation",
    "enrollment",
    "unenrollment",
    "recovery",
    "stage_configuration",
]
Layout = Literal["stacked", "content_left", "content_right", "sidebar_left", "sidebar_right"]
DeniedAction = Literal["message_continue", "message", "continue"]
PolicyEngineMode = Annotated[Literal["all", "any"] | None, Field(description="Policy engine mode")]
InvalidResponseAction = Annotated[
    Literal["retry", "restart", "skip"] | None, Field(description="Action on invalid response")
]

FlowSlug = Annotated[str, Field(description="Flow slug")]
BindingUuid = Annotated[str, Field(description="Flow stage binding UUID")]


def register_flow_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    # --- Flow instances ---

    @tool(
        "authentik_flows_list",
        "List flows with optional filters for search, designation, and ordering.",
        category="flows",
    )
    async def flows_list(
        designation: Annotated[Designation | None, Field(description="Filter by flow designation")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.flows.list(
            "instances",
            designation=designation,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_flows_get", "Get a single flow by its slug.", category="flows")
    async def flows_get(slug: FlowSlug) -> str:
        return to_json(await client.flows.retrieve("instances", slug))

    @tool(
        "authentik_flows_create",
        "Create a new flow with name, slug, title, and designation.",
        category="flows",
        access="full",
    )
    async def flows_create(
        name: Annotated[str, Field(description="Flow display name")],
        slug: Annotated[str, Field(description="Flow slug for URLs")],
        title: Annotated[str, Field(description="Flow title shown to users")],
        designation: Annotated[Designation, Field(description="Flow designation (purpose)")],
        policy_engine_mode: PolicyEngineMode = None,
        compatibility_mode: Annotated[
            bool | None, Field(description="Enable compatibility mode for older browsers")
        ] = None,
        layout: Annotated[Layout | None, Field(description="Flow layout")] = None,
        denied_action: Annotated[
            DeniedAction | None, Field(description="Action when the flow is denied")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            slug=slug,
            title=title,
            designation=designation,
            policy_engine_mode=policy_engine_mode,
            compatibility_mode=compatibility_mode,
            layout=layout,
            denied_action=denied_action,
        )
        return to_json(await client.flows.create("instances", body))

    @tool(
        "authentik_flows_update",
        "Update an existing flow. Only provided fields are modified (partial update).",
        category="flows",
        access="full",
    )
    async def flows_update(
        slug: Annotated[str, Field(description="Flow slug (used as identifier)")],
        name: Annotated[str | None, Field(description="New display name")] = None,
        title: Annotated[str | None, Field(description="New title")] = None,
        designation: Annotated[Designation | None, Field(description="New designation")] = None,
        policy_engine_mode: PolicyEngineMode = None,
        compatibility_mode: Annotated[bool | None, Field(description="Enable compatibility mode")] = None,
        layout: Annotated[Layout | None, Field(description="Flow layout")] = None,
        denied_action: Annotated[
            DeniedAction | None, Field(description="Action when the flow is denied")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            title=title,
            designation=designation,
            policy_engine_mode=policy_engine_mode,
            compatibility_mode=compatibility_mode,
            layout=layout,
            denied_action=denied_action,
        )
        return to_json(await client.flows.partial_update("instances", slug, body))

    @tool(
        "authentik_flows_delete",
        "Delete a flow by its slug. This action is irreversible.",
        category="flows",
        access="full",
        destructive=True,
    )
    async def flows_delete(slug: FlowSlug) -> str:
        await client.flows.destroy("instances", slug)
        return f'Flow "{slug}" deleted successfully.'

    @tool(
        "authentik_flows_diagram",
        "Get a visual diagram of a flow showing its stages and bindings.",
        category="flows",
    )
    async def flows_diagram(slug: FlowSlug) -> str:
        return to_json(await client.flows.get("instances", slug, "diagram"))

    @tool(
        "authentik_flows_export",
        "Export a flow as YAML. Returns the YAML content as text.",
        category="flows",
    )
    async def flows_export(slug: Annotated[str, Field(description="Flow slug to export")]) -> str:
        return to_json(await client.flows.get("instances", slug, "export"))

    @tool("authentik_flows_import", "Import a flow from YAML content.", category="flows", access="full")
    async def flows_import(
        content: Annotated[str, Field(description="YAML flow definition content")],
        clear: Annotated[
            bool | None, Field(description="Clear existing flow objects before import")
        ] = None,
    ) -> str:
        result = await client.flows.post_form(
            "instances",
            "import",
            form=fields(clear=str(clear).lower() if clear is not None else None),
            files={"file": ("flow.yaml", content, "application/x-yaml")},
        )
        return to_json(result)

    @tool("authentik_flows_cache_info", "Get information about cached flows.", category="flows")
    async def flows_cache_info() -> str:
        return to_json(await client.flows.get("instances", "cache_info"))

    @tool("authentik_flows_cache_clear", "Clear the flow cache.", category="flows", access="full")
    async def flows_cache_clear() -> str:
        await client.flows.post("instances", "cache_clear")
        return "Flow cache cleared successfully."

    # --- Flow stage bindings ---

    @tool(
        "authentik_flows_bindings_list",
        "List flow stage bindings with optional filters.",
        category="flows",
    )
    async def flows_bindings_list(
        target: Annotated[str | None, Field(description="Filter by target flow slug")] = None,
        stage: Annotated[str | None, Field(description="Filter by stage UUID")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.flows.list(
            "bindings",
            target=target,
            stage=stage,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_flows_bindings_get",
        "Get a single flow stage binding by its UUID.",
        category="flows",
    )
    async def flows_bindings_get(fsb_uuid: BindingUuid) -> str:
        return to_json(await client.flows.retrieve("bindings", fsb_uuid))

    @tool(
        "authentik_flows_bindings_create",
        "Create a new flow stage binding to attach a stage to a flow.",
        category="flows",
        access="full",
    )
    async def flows_bindings_create(
        target: Annotated[str, Field(description="Target flow UUID")],
        stage: Annotated[str, Field(description="Stage UUID to bind")],
        order: Annotated[int, Field(description="Binding order")],
        evaluate_on_plan: Annotated[
            bool | None, Field(description="Evaluate policies during plan phase")
        ] = None,
        re_evaluate_policies: Annotated[
            bool | None, Field(description="Re-evaluate policies on each request")
        ] = None,
        policy_engine_mode: PolicyEngineMode = None,
        invalid_response_action: InvalidResponseAction = None,
    ) -> str:
        body = fields(
            target=target,
            stage=stage,
            order=order,
            evaluate_on_plan=evaluate_on_plan,
            re_evaluate_policies=re_evaluate_policies,
            policy_engine_mode=policy_engine_mode,
            invalid_response_action=invalid_response_action,
        )
        return to_json(await client.flows.create("bindings", body))

    @tool(
        "authentik_flows_bindings_update",
        "Update an existing flow stage binding. Only provided fields are modified.",
        category="flows",
        access="full",
    )
    async def flows_bindings_update(
        fsb_uuid: BindingUuid,
        target: Annotated[str | None, Field(description="New target flow UUID")] = None,
        stage: Annotated[str | None, Field(description="New stage UUID")] = None,
        order: Annotated[int | None, Field(description="New binding order")] = None,
        evaluate_on_plan: Annotated[
            bool | None, Field(description="Evaluate policies during plan phase")
        ] = None,
        re_evaluate_policies: Annotated[
            bool | None, Field(description="Re-evaluate policies on each request")
        ] = None,
        policy_engine_mode: PolicyEngineMode = None,
        invalid_response_action: InvalidResponseAction = None,
    ) -> str:
        body = fields(
            target=target,
            stage=stage,
            order=order,
            evaluate_on_plan=evaluate_on_plan,
            re_evaluate_policies=re_evaluate_policies,
            policy_engine_mode=policy_engine_mode,
            invalid_response_action=invalid_response_action,
        )
        return to_json(await client.flows.partial_update("bindings", fsb_uuid, body))

    @tool(
        "authentik_flows_bindings_delete",
        "Delete a flow stage binding by its UUID. This action is irreversible.",
        category="flows",
        access="full",
        destructive=True,
    )
    async def flows_bindings_delete(fsb_uuid: BindingUuid) -> str:
        await client.flows.destroy("bindings", fsb_uuid)
        return f"Flow stage binding {fsb_uuid} deleted successfully."
