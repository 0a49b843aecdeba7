from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import to_json


def register_root_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    @registry.tool(
        "authentik_root_config",
        "Get root configuration including capabilities, error reporting settings, and UI configuration.",
        category="root",
    )
    async def root_config() -> str:
        return to_json(await client.root.get("config"))
