"""
CLI utility to preview which tools the server would expose.

The access tier and category allowlist decide, at startup, which tools
exist at all. This script runs the same registration against a throwaway
server and prints the result, without contacting authentik.

Usage examples:

    # Everything (full tier, all categories)
    uv run python -m scripts.list_tools

    # What a read-only agent would see
    uv run python -m scripts.list_tools --tier read-only

    # Read-only, limited to users/groups/apps and flows
    uv run python -m scripts.list_tools --tier read-only --categories core,flows

    # Only the tool names, e.g. for diffing two configurations
    uv run python -m scripts.list_tools --tier read-only --names-only
"""

import argparse
import asyncio
import sys

from fastmcp import FastMCP
from pydantic import ValidationError

from authentik_mcp.client import AuthentikClient
from authentik_mcp.config import CATEGORIES, Settings
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.catalog import register_all_tools

PLACEHOLDER_URL = "http://authentik.invalid"


async def collect_tools(settings: Settings) -> list[tuple[str, str, bool]]:
    """Return (name, category, read-only) for every tool that would be registered."""
    async with AuthentikClient(settings.authentik_url, settings.authentik_token) as client:
        mcp = FastMCP(name="list-tools")
        registry = ToolRegistry(mcp, settings.runtime_config(), settings.redaction_secrets())
        register_all_tools(registry, client)
        tools = await mcp.get_tools()

    rows = []
    for name in registry.registered:
        tool = tools[name]
        read_only = bool(tool.annotations and tool.annotations.readOnlyHint)
        rows.append((name, next(iter(tool.tags), ""), read_only))
    return rows


def main() -> None:
    parser = argparse.ArgumentParser(
        description="List the tools the authentik MCP server would expose.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Valid categories: {', '.join(sorted(CATEGORIES))}",
    )
    parser.add_argument(
        "--tier",
        choices=["read-only", "full"],
        default="full",
        help="Access tier (default: full)",
    )
    parser.add_argument(
        "--categories",
        default="",
        help="Comma-separated category allowlist (default: all categories)",
    )
    parser.add_argument(
        "--names-only",
        action="store_true",
        help="Print one tool name per line and nothing else",
    )

    args = parser.parse_args()

    try:
        settings = Settings(
            authentik_url=PLACEHOLDER_URL,
            authentik_token="unused",
            authentik_access_tier=args.tier,
            authentik_categories=args.categories,
        )
    except ValidationError as exc:
        for error in exc.errors():
            print(f"error: {error['msg']}", file=sys.stderr)
        sys.exit(2)

    rows = asyncio.run(collect_tools(settings))

    if args.names_only:
        for name, _, _ in rows:
            print(name)
        return

    width = max((len(name) for name, _, _ in rows), default=0)
    for name, category, read_only in rows:
        access = "read-only" if read_only else "full"
        print(f"{name:<{width}}  {category:<18}  {access}")
    print()
    print(f"Tier:       {args.tier}")
    print(f"Categories: {args.categories or 'all'}")
    print(f"Tools:      {len(rows)}")


if __name__ == "__main__":
    main()
