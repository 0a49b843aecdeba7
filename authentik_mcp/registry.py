"""
Tool registration with visibility filtering and error redaction.

Every tool in the catalog goes through register_tool() exactly once at
startup. For each ToolDescriptor the registry:

1. Asks the visibility policy whether the tool may exist. If not, nothing
   is registered: the agent never sees the tool in tools/list and cannot
   call it by guessing its name.
2. Derives the MCP annotations the agent sees: readOnlyHint for read-only
   tools, destructiveHint for tools that delete or overwrite data.
3. Wraps the handler in an execution guard and adds it to the FastMCP server.

The guard is the only path by which a failure leaves a tool. Any exception
raised by the handler (authentik answered 4xx/5xx, the connection failed,
a bad discriminator, a bug) is rendered through authentik_mcp.errors.redact()
and raised as FastMCP's ToolError, which the client receives as a tool result
with isError=true and the text "Error: <redacted message>". The original
exception is never chained onto the ToolError, so its unredacted message
cannot leak through logs or tracebacks either.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations

from authentik_mcp.config import AccessTier, RedactionSecrets, RuntimeConfig
from authentik_mcp.errors import UNKNOWN_ERROR, redact
from authentik_mcp.visibility import should_expose

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[str]]

ERROR_PREFIX = "Error: "


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Everything the registry needs to know about one tool.

    The handler's signature is the tool's input shape: FastMCP builds the
    JSON schema from its type hints (pydantic Field descriptions included)
    and validates arguments against it before the handler runs.

    Attributes:
        name: Globally unique tool name, e.g. "authentik_users_list"
        description: Shown to the agent in tools/list
        access: "read-only" or "full" (the tool modifies authentik)
        category: One of config.CATEGORIES
        handler: Async callable returning the tool's text output
        destructive: The tool deletes or irreversibly changes data
    """

    name: str
    description: str
    access: AccessTier
    category: str
    handler: Handler
    destructive: bool = False


def render_error(error: BaseException, secrets: RedactionSecrets) -> str:
    try:
        return ERROR_PREFIX + redact(error, secrets)
    except Exception:
        return ERROR_PREFIX + UNKNOWN_ERROR


def guard(handler: Handler, secrets: RedactionSecrets) -> Handler:
    """Wrap a handler so that failures surface only as redacted ToolErrors."""

    @functools.wraps(handler)
    async def guarded(**arguments):
        try:
            return await handler(**arguments)
        except Exception as exc:
            message = render_error(exc, secrets)
        # Raised outside the except block so the original is not chained.
        raise ToolError(message)

    return guarded


def register_tool(
    server: FastMCP,
    runtime: RuntimeConfig,
    descriptor: ToolDescriptor,
    secrets: RedactionSecrets,
) -> bool:
    """Register one tool if it is visible. Returns whether it was registered."""
    if not should_expose(descriptor, runtime):
        return False

    annotations = ToolAnnotations(
        readOnlyHint=descriptor.access == "read-only",
        destructiveHint=descriptor.destructive,
    )
    server.tool(
        name=descriptor.name,
        description=descriptor.description,
        tags={descriptor.category},
        annotations=annotations,
    )(guard(descriptor.handler, secrets))
    return True


class ToolRegistry:
    """
    register_tool() bound to one server and one runtime configuration.

    The catalog modules use the tool() decorator:

        @registry.tool(
            "authentik_users_delete",
            "Delete a user by their numeric ID. This action is irreversible.",
            category="core",
            access="full",
            destructive=True,
        )
        async def users_delete(id: Annotated[int, Field(description="User ID")]) -> str:
            ...
    """

    def __init__(self, server: FastMCP, runtime: RuntimeConfig, secrets: RedactionSecrets):
        self.server = server
        self.runtime = runtime
        self.secrets = secrets
        self.registered: list[str] = []

    def register(self, descriptor: ToolDescriptor) -> bool:
        registered = register_tool(self.server, self.runtime, descriptor, self.secrets)
        if registered:
            self.registered.append(descriptor.name)
        return registered

    def tool(
        self,
        name: str,
        description: str,
        *,
        category: str,
        access: AccessTier = "read-only",
        destructive: bool = False,
    ) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.register(
                ToolDescriptor(
                    name=name,
                    description=description,
                    access=access,
                    category=category,
                    handler=handler,
                    destructive=destructive,
                )
            )
            return handler

        return decorator
