"""Audit event, notification rule, transport and notification tools (category: events)."""

from typing import Annotated, Literal

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

Severity = Literal["alert", "notice", "warning"]
TransportMode = Literal["email", "webhook", "webhook_slack", "local"]

RuleUuid = Annotated[str, Field(description="Notification rule UUID")]
TransportUuid = Annotated[str, Field(description="Transport UUID")]
NotificationUuid = Annotated[str, Field(description="Notification UUID")]


def register_event_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    # --- Audit events ---

    @tool(
        "authentik_events_list",
        "List audit events with optional filters for action, username, client IP, and more.",
        category="events",
    )
    async def events_list(
        action: Annotated[str | None, Field(description="Filter by exact event action")] = None,
        username: Annotated[str | None, Field(description="Filter by username")] = None,
        client_ip: Annotated[str | None, Field(description="Filter by client IP address")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.events.list(
            "events",
            action=action,
            username=username,
            client_ip=client_ip,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_events_get", "Get a single audit event by its UUID.", category="events")
    async def events_get(event_uuid: Annotated[str, Field(description="Event UUID")]) -> str:
        return to_json(await client.events.retrieve("events", event_uuid))

    @tool("authentik_events_create", "Create a new audit event.", category="events", access="full")
    async def events_create(
        action: Annotated[
            str, Field(description='Event action (e.g. "custom_", "login", "model_created")')
        ],
        app: Annotated[str, Field(description="Application identifier that generated the event")],
        context: Annotated[dict | None, Field(description="Additional event context data")] = None,
        client_ip: Annotated[str | None, Field(description="Client IP address")] = None,
        expires: Annotated[str | None, Field(description="Expiration date-time (ISO 8601)")] = None,
    ) -> str:
        body = fields(action=action, app=app, context=context, client_ip=client_ip, expires=expires)
        return to_json(await client.events.create("events", body))

    @tool("authentik_events_actions_list", "List all available event action types.", category="events")
    async def events_actions_list() -> str:
        return to_json(await client.events.get("events", "actions"))

    @tool(
        "authentik_events_top_per_user",
        "Get the top N events grouped by user count.",
        category="events",
    )
    async def events_top_per_user(
        action: Annotated[str | None, Field(description="Filter by event action")] = None,
        top_n: Annotated[int | None, Field(description="Number of top users to return")] = None,
    ) -> str:
        return to_json(await client.events.get("events", "top_per_user", action=action, top_n=top_n))

    @tool(
        "authentik_events_volume",
        "Get event volume data for specified filters and timeframe.",
        category="events",
    )
    async def events_volume(
        action: Annotated[str | None, Field(description="Filter by event action")] = None,
        username: Annotated[str | None, Field(description="Filter by username")] = None,
        client_ip: Annotated[str | None, Field(description="Filter by client IP address")] = None,
        history_days: Annotated[
            int | None, Field(description="Number of days to include in history")
        ] = None,
    ) -> str:
        result = await client.events.get(
            "events",
            "volume",
            action=action,
            username=username,
            client_ip=client_ip,
            history_days=history_days,
        )
        return to_json(result)

    # --- Notification rules ---

    @tool("authentik_events_rules_list", "List notification rules with optional filters.", category="events")
    async def events_rules_list(
        name: Annotated[str | None, Field(description="Filter by rule name")] = None,
        severity: Annotated[Severity | None, Field(description="Filter by severity")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.events.list(
            "rules",
            name=name,
            severity=severity,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_events_rules_get", "Get a single notification rule by its UUID.", category="events")
    async def events_rules_get(pbm_uuid: RuleUuid) -> str:
        return to_json(await client.events.retrieve("rules", pbm_uuid))

    @tool("authentik_events_rules_create", "Create a new notification rule.", category="events", access="full")
    async def events_rules_create(
        name: Annotated[str, Field(description="Rule name")],
        transports: Annotated[
            list[str] | None, Field(description="Transport UUIDs to use for notifications")
        ] = None,
        severity: Annotated[Severity | None, Field(description="Notification severity")] = None,
        destination_group: Annotated[
            str | None, Field(description="Group UUID to send notifications to")
        ] = None,
        destination_event_user: Annotated[
            bool | None, Field(description="Also send to the user that triggered the event")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            transports=transports,
            severity=severity,
            destination_group=destination_group,
            destination_event_user=destination_event_user,
        )
        return to_json(await client.events.create("rules", body))

    @tool(
        "authentik_events_rules_update",
        "Update an existing notification rule. Only provided fields are modified (partial update).",
        category="events",
        access="full",
    )
    async def events_rules_update(
        pbm_uuid: RuleUuid,
        name: Annotated[str | None, Field(description="New rule name")] = None,
        transports: Annotated[list[str] | None, Field(description="New transport UUIDs")] = None,
        severity: Annotated[Severity | None, Field(description="New severity")] = None,
        destination_group: Annotated[
            str | None, Field(description="New destination group UUID")
        ] = None,
        destination_event_user: Annotated[
            bool | None, Field(description="Send to triggering user")
        ] = None,
    ) -> str:
        body = fields(
            name=name,
            transports=transports,
            severity=severity,
            destination_group=destination_group,
            destination_event_user=destination_event_user,
        )
        return to_json(await client.events.partial_update("rules", pbm_uuid, body))

    @tool(
        "authentik_events_rules_delete",
        "Delete a notification rule by its UUID. This action is irreversible.",
        category="events",
        access="full",
        destructive=True,
    )
    async def events_rules_delete(pbm_uuid: RuleUuid) -> str:
        await client.events.destroy("rules", pbm_uuid)
        return f'Notification rule "{pbm_uuid}" deleted successfully.'

    # --- Notification transports ---

    @tool(
        "authentik_events_transports_list",
        "List notification transports with optional filters.",
        category="events",
    )
    async def events_transports_list(
        name: Annotated[str | None, Field(description="Filter by transport name")] = None,
        mode: Annotated[TransportMode | None, Field(description="Filter by mode")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.events.list(
            "transports",
            name=name,
            mode=mode,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_events_transports_get",
        "Get a single notification transport by its UUID.",
        category="events",
    )
    async def events_transports_get(uuid: TransportUuid) -> str:
        return to_json(await client.events.retrieve("transports", uuid))

    @tool(
        "authentik_events_transports_create",
        "Create a new notification transport.",
        category="events",
        access="full",
    )
    async def events_transports_create(
        name: Annotated[str, Field(description="Transport name")],
        mode: Annotated[TransportMode | None, Field(description="Transport mode")] = None,
        webhook_url: Annotated[
            str | None, Field(description="Webhook URL (for webhook/webhook_slack modes)")
        ] = None,
        webhook_mapping_body: Annotated[
            str | None, Field(description="Webhook body mapping UUID")
        ] = None,
        webhook_mapping_headers: Annotated[
            str | None, Field(description="Webhook headers mapping UUID")
        ] = None,
        send_once: Annotated[bool | None, Field(description="Only send notification once")] = None,
    ) -> str:
        body = fields(
            name=name,
            mode=mode,
            webhook_url=webhook_url,
            webhook_mapping_body=webhook_mapping_body,
            webhook_mapping_headers=webhook_mapping_headers,
            send_once=send_once,
        )
        return to_json(await client.events.create("transports", body))

    @tool(
        "authentik_events_transports_update",
        "Update an existing notification transport. Only provided fields are modified (partial update).",
        category="events",
        access="full",
    )
    async def events_transports_update(
        uuid: TransportUuid,
        name: Annotated[str | None, Field(description="New transport name")] = None,
        mode: Annotated[TransportMode | None, Field(description="New transport mode")] = None,
        webhook_url: Annotated[str | None, Field(description="New webhook URL")] = None,
        webhook_mapping_body: Annotated[
            str | None, Field(description="New webhook body mapping UUID")
        ] = None,
        webhook_mapping_headers: Annotated[
            str | None, Field(description="New webhook headers mapping UUID")
        ] = None,
        send_once: Annotated[bool | None, Field(description="Only send notification once")] = None,
    ) -> str:
        body = fields(
            name=name,
            mode=mode,
            webhook_url=webhook_url,
            webhook_mapping_body=webhook_mapping_body,
            webhook_mapping_headers=webhook_mapping_headers,
            send_once=send_once,
        )
        return to_json(await client.events.partial_update("transports", uuid, body))

    @tool(
        "authentik_events_transports_delete",
        "Delete a notification transport by its UUID. This action is irreversible.",
        category="events",
        access="full",
        destructive=True,
    )
    async def events_transports_delete(uuid: TransportUuid) -> str:
        await client.events.destroy("transports", uuid)
        return f'Notification transport "{uuid}" deleted successfully.'

    @tool(
        "authentik_events_transports_test",
        "Send a test notification using the specified transport.",
        category="events",
        access="full",
    )
    async def events_transports_test(uuid: TransportUuid) -> str:
        return to_json(await client.events.post("transports", uuid, "test"))

    # --- Notifications ---

    @tool(
        "authentik_events_notifications_list",
        "List notifications for the current user with optional filters.",
        category="events",
    )
    async def events_notifications_list(
        seen: Annotated[bool | None, Field(description="Filter by seen status")] = None,
        severity: Annotated[Severity | None, Field(description="Filter by severity")] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.events.list(
            "notifications",
            seen=seen,
            severity=severity,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool(
        "authentik_events_notifications_update",
        "Update a notification, typically to mark it as seen or unseen.",
        category="events",
        access="full",
    )
    async def events_notifications_update(
        uuid: NotificationUuid,
        seen: Annotated[bool | None, Field(description="Set seen status")] = None,
    ) -> str:
        return to_json(await client.events.partial_update("notifications", uuid, fields(seen=seen)))

    @tool(
        "authentik_events_notifications_delete",
        "Delete a notification by its UUID. This action is irreversible.",
        category="events",
        access="full",
        destructive=True,
    )
    async def events_notifications_delete(uuid: NotificationUuid) -> str:
        await client.events.destroy("notifications", uuid)
        return f'Notification "{uuid}" deleted successfully.'

    @tool(
        "authentik_events_notifications_mark_all_seen",
        "Mark all notifications as seen for the current user.",
        category="events",
        access="full",
    )
    async def events_notifications_mark_all_seen() -> str:
        await client.events.post("notifications", "mark_all_seen")
        return "All notifications marked as seen."
