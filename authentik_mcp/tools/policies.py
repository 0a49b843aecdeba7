"""
Policy tools (category: policies).

Policies decide whether a flow, stage binding or application is accessible.
Besides cross-type and by-type tools (authentik_mcp.dispatch.POLICIES) this
module covers policy bindings and reputation scores.
"""

from typing import Annotated, Any

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.dispatch import POLICIES, PolicyType
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, merge, to_json

PolicyUuid = Annotated[str, Field(description="Policy UUID")]
BindingUuid = Annotated[str, Field(description="Policy binding UUID")]


def register_policy_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool(
        "authentik_policies_list",
        "List all policies across all types with optional filters.",
        category="policies",
    )
    async def policies_list(
        bindings__isnull: Annotated[
            bool | None, Field(description="Filter by whether bindings exist")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.policies.list(
            "all",
            bindings__isnull=bindings__isnull,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_policies_get",
        "Get a single policy by its UUID (cross-type).",
        category="policies",
    )
    async def policies_get(policy_uuid: PolicyUuid) -> str:
        return to_json(await client.policies.retrieve("all", policy_uuid))

    @tool(
        "authentik_policies_delete",
        "Delete a policy by its UUID (cross-type). This action is irreversible.",
        category="policies",
        access="full",
        destructive=True,
    )
    async def policies_delete(policy_uuid: PolicyUuid) -> str:
        await client.policies.destroy("all", policy_uuid)
        return f"Policy {policy_uuid} deleted successfully."

    @tool("authentik_policies_types_list", "List all available policy types.", category="policies")
    async def policies_types_list() -> str:
        return to_json(await client.policies.get("all", "types"))

    @tool(
        "authentik_policies_test",
        "Test a policy against a specific user to see if it passes or fails.",
        category="policies",
    )
    async def policies_test(
        policy_uuid: PolicyUuid,
        user: Annotated[int, Field(description="User ID to test the policy against")],
        context: Annotated[
            dict[str, Any] | None, Field(description="Additional context for the policy test")
        ] = None,
    ) -> str:
        body = fields(user=user, context=context)
        return to_json(await client.policies.post("all", policy_uuid, "test", body=body))

    @tool("authentik_policies_cache_info", "Get information about cached policies.", category="policies")
    async def policies_cache_info() -> str:
        return to_json(await client.policies.get("all", "cache_info"))

    @tool("authentik_policies_cache_clear", "Clear the policy cache.", category="policies", access="full")
    async def policies_cache_clear() -> str:
        await client.policies.post("all", "cache_clear")
        return "Policy cache cleared successfully."

    # --- By type ---

    @tool(
        "authentik_policies_by_type_list",
        "List policies of a specific type with optional filters.",
        category="policies",
    )
    async def policies_by_type_list(
        policy_type: Annotated[PolicyType, Field(description="Policy type to list")],
        name: Annotated[str | None, Field(description="Filter by policy name")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        query = fields(name=name, search=search, ordering=ordering, page=page, page_size=page_size)
        return to_json(await POLICIES.invoke(client.policies, policy_type, "list", query=query))

    @tool(
        "authentik_policies_by_type_get",
        "Get a single policy of a specific type by its UUID.",
        category="policies",
    )
    async def policies_by_type_get(
        policy_type: Annotated[PolicyType, Field(description="Policy type")],
        policy_uuid: PolicyUuid,
    ) -> str:
        return to_json(await POLICIES.invoke(client.policies, policy_type, "get", lookup=policy_uuid))

    @tool(
        "authentik_policies_by_type_create",
        "Create a new policy of a specific type. Pass type-specific fields in the config object.",
        category="policies",
        access="full",
    )
    async def policies_by_type_create(
        policy_type: Annotated[PolicyType, Field(description="Policy type to create")],
        name: Annotated[str, Field(description="Policy name")],
        config: Annotated[
            dict[str, Any] | None,
            Field(description="Type-specific configuration fields (snake_case API field names)"),
        ] = None,
    ) -> str:
        payload = merge({"name": name}, config)
        return to_json(await POLICIES.invoke(client.policies, policy_type, "create", payload=payload))

    @tool(
        "authentik_policies_by_type_update",
        "Update an existing policy of a specific type. Pass type-specific fields in the config object.",
        category="policies",
        access="full",
    )
    async def policies_by_type_update(
        policy_type: Annotated[PolicyType, Field(description="Policy type")],
        policy_uuid: PolicyUuid,
        config: Annotated[
            dict[str, Any] | None,
            Field(description="Type-specific fields to update (snake_case API field names)"),
        ] = None,
    ) -> str:
        result = await POLICIES.invoke(
            client.policies, policy_type, "update", lookup=policy_uuid, payload=config
        )
        return to_json(result)

    @tool(
        "authentik_policies_by_type_delete",
        "Delete a policy of a specific type by its UUID. This action is irreversible.",
        category="policies",
        access="full",
        destructive=True,
    )
    async def policies_by_type_delete(
        policy_type: Annotated[PolicyType, Field(description="Policy type")],
        policy_uuid: PolicyUuid,
    ) -> str:
        await POLICIES.invoke(client.policies, policy_type, "delete", lookup=policy_uuid)
        return f"Policy {policy_uuid} (type: {policy_type}) deleted successfully."

    # --- Bindings ---

    @tool("authentik_policy_bindings_list", "List policy bindings with optional filters.", category="policies")
    async def policy_bindings_list(
        target: Annotated[str | None, Field(description="Filter by target UUID")] = None,
        policy: Annotated[str | None, Field(description="Filter by policy UUID")] = None,
        enabled: Annotated[bool | None, Field(description="Filter by enabled status")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.policies.list(
            "bindings",
            target=target,
            policy=policy,
            enabled=enabled,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_policy_bindings_get", "Get a single policy binding by its UUID.", category="policies")
    async def policy_bindings_get(policy_binding_uuid: BindingUuid) -> str:
        return to_json(await client.policies.retrieve("bindings", policy_binding_uuid))

    @tool(
        "authentik_policy_bindings_create",
        "Create a new policy binding to attach a policy to a target (flow, stage, etc.).",
        category="policies",
        access="full",
    )
    async def policy_bindings_create(
        target: Annotated[str, Field(description="Target UUID (flow, stage binding, etc.)")],
        order: Annotated[int, Field(description="Binding order")],
        policy: Annotated[str | None, Field(description="Policy UUID to bind")] = None,
        group: Annotated[str | None, Field(description="Group UUID to bind")] = None,
        user: Annotated[int | None, Field(description="User ID to bind")] = None,
        negate: Annotated[bool | None, Field(description="Negate the policy result")] = None,
        enabled: Annotated[bool | None, Field(description="Whether the binding is enabled")] = None,
        timeout: Annotated[int | None, Field(description="Policy timeout in seconds")] = None,
        failure_result: Annotated[
            bool | None, Field(description="Result when policy execution fails")
        ] = None,
    ) -> str:
        body = fields(
            target=target,
            order=order,
            policy=policy,
            group=group,
            user=user,
            negate=negate,
            enabled=enabled,
            timeout=timeout,
            failure_result=failure_result,
        )
        return to_json(await client.policies.create("bindings", body))

    @tool(
        "authentik_policy_bindings_update",
        "Update an existing policy binding. Only provided fields are modified.",
        category="policies",
        access="full",
    )
    async def policy_bindings_update(
        policy_binding_uuid: BindingUuid,
        target: Annotated[str | None, Field(description="New target UUID")] = None,
        order: Annotated[int | None, Field(description="New binding order")] = None,
        policy: Annotated[str | None, Field(description="New policy UUID")] = None,
        group: Annotated[str | None, Field(description="New group UUID")] = None,
        user: Annotated[int | None, Field(description="New user ID")] = None,
        negate: Annotated[bool | None, Field(description="Negate the policy result")] = None,
        enabled: Annotated[bool | None, Field(description="Whether the binding is enabled")] = None,
        timeout: Annotated[int | None, Field(description="Policy timeout in seconds")] = None,
        failure_result: Annotated[
            bool | None, Field(description="Result when policy execution fails")
        ] = None,
    ) -> str:
        body = fields(
            target=target,
            order=order,
            policy=policy,
            group=group,
            user=user,
            negate=negate,
            enabled=enabled,
            timeout=timeout,
            failure_result=failure_result,
        )
        return to_json(await client.policies.partial_update("bindings", policy_binding_uuid, body))

    @tool(
        "authentik_policy_bindings_delete",
        "Delete a policy binding by its UUID. This action is irreversible.",
        category="policies",
        access="full",
        destructive=True,
    )
    async def policy_bindings_delete(policy_binding_uuid: BindingUuid) -> str:
        await client.policies.destroy("bindings", policy_binding_uuid)
        return f"Policy binding {policy_binding_uuid} deleted successfully."

    # --- Reputation ---

    @tool(
        "authentik_reputation_scores_list",
        "List reputation scores with optional filters.",
        category="policies",
    )
    async def reputation_scores_list(
        identifier: Annotated[str | None, Field(description="Filter by identifier")] = None,
        ip: Annotated[str | None, Field(description="Filter by IP address")] = None,
        score: Annotated[int | None, Field(description="Filter by exact score")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.policies.list(
            "reputation/scores",
            identifier=identifier,
            ip=ip,
            score=score,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_reputation_scores_delete",
        "Delete a reputation score by its UUID. This action is irreversible.",
        category="policies",
        access="full",
        destructive=True,
    )
    async def reputation_scores_delete(
        reputation_uuid: Annotated[str, Field(description="Reputation score UUID")],
    ) -> str:
        await client.policies.destroy("reputation/scores", reputation_uuid)
        return f"Reputation score {reputation_uuid} deleted successfully."
