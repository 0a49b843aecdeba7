"""
MCP server exposing the authentik API as tools, built on FastMCP v2.

Startup sequence:

    1. Load Settings from the environment (invalid values abort here)
    2. Open the AuthentikClient and check that authentik answers
    3. Build the FastMCP server and feed the whole tool catalog through the
       ToolRegistry, which drops every tool the access tier or the category
       allowlist hides
    4. Serve over stdio (the default, for agents that spawn the server) or
       streamable HTTP

Nothing is registered after step 3: the set of tools is fixed for the
lifetime of the process.

Running the server:
    AUTHENTIK_URL=https://auth.example.com AUTHENTIK_TOKEN=... mcp-authentik

    With MCP_TRANSPORT=http the server listens on MCP_HOST:MCP_PORT with:
    - MCP endpoint at /mcp (Streamable HTTP)
    - Health check at /health
    - Readiness check at /ready
"""

import asyncio
import json
import logging
import sys

from fastmcp import FastMCP
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from authentik_mcp.client import AuthentikClient
from authentik_mcp.config import Settings
from authentik_mcp.errors import redact
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.catalog import register_all_tools

SERVER_NAME = "mcp-authentik"

logger = logging.getLogger(SERVER_NAME)


# ---------------------------------------------------------------------------
# Structured JSON Logging
# ---------------------------------------------------------------------------
# One JSON object per line. Logs go to stderr: with the stdio transport,
# stdout is the MCP channel and anything else written there corrupts it.


class JSONLogFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Example output:

        {"timestamp": "2026-02-06 10:30:00,123", "level": "INFO", "logger": "mcp-authentik",
         "message": "Tools registered", "registered": 112, "access_tier": "read-only"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Structured fields passed via logger.info("msg", extra={"log_data": {...}})
        if hasattr(record, "log_data"):
            log_entry.update(record.log_data)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "info") -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONLogFormatter())
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )


# ---------------------------------------------------------------------------
# Server construction
# ---------------------------------------------------------------------------


def create_server(settings: Settings, client: AuthentikClient) -> tuple[FastMCP, ToolRegistry]:
    """
    Build the FastMCP server with every visible tool registered.

    Args:
        settings: Validated configuration
        client: Open authentik client shared by all tools

    Returns:
        The server and the registry that populated it
    """
    secrets = settings.redaction_secrets()
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Manage an authentik identity provider: users, groups, applications, "
            "flows, stages, providers, policies, sources and more. Tools that "
            "modify authentik are hidden when the server runs read-only."
        ),
    )

    if settings.mcp_transport == "http":
        # Plain HTTP endpoints for orchestrator probes, outside the MCP protocol.

        @mcp.custom_route("/health", methods=["GET"])
        async def health_check(request: Request) -> Response:
            """Liveness probe: is the server process alive and responsive?"""
            return JSONResponse({"status": "healthy"})

        @mcp.custom_route("/ready", methods=["GET"])
        async def readiness_check(request: Request) -> Response:
            """Readiness probe: can authentik be reached with the configured token?"""
            try:
                version = await client.validate_connection()
            except Exception as exc:
                return JSONResponse(
                    {"status": "not_ready", "reason": redact(exc, secrets)},
                    status_code=503,
                )
            return JSONResponse({"status": "ready", "authentik_version": version})

    registry = ToolRegistry(mcp, settings.runtime_config(), secrets)
    count = register_all_tools(registry, client)
    runtime = registry.runtime
    logger.info(
        "Tools registered",
        extra={
            "log_data": {
                "registered": count,
                "access_tier": runtime.access_tier,
                "categories": sorted(runtime.categories) if runtime.categories else "all",
            }
        },
    )
    return mcp, registry


async def serve(settings: Settings) -> None:
    """Connect to authentik, build the server and run it until shutdown."""
    secrets = settings.redaction_secrets()
    async with AuthentikClient(
        settings.authentik_url,
        settings.authentik_token,
        timeout=settings.authentik_timeout,
    ) as client:
        try:
            version = await client.validate_connection()
        except Exception as exc:
            logger.error(
                "Cannot connect to authentik",
                extra={"log_data": {"reason": redact(exc, secrets)}},
            )
            sys.exit(1)

        logger.info(
            "Connected to authentik",
            extra={
                "log_data": {
                    "authentik_url": settings.authentik_url,
                    "authentik_version": version,
                }
            },
        )

        mcp, _ = create_server(settings, client)

        if settings.mcp_transport == "http":
            logger.info(
                "Starting MCP server on %s:%d (transport=streamable-http)",
                settings.mcp_host,
                settings.mcp_port,
            )
            await mcp.run_async(
                transport="streamable-http",
                host=settings.mcp_host,
                port=settings.mcp_port,
                log_level=settings.mcp_log_level,
            )
        else:
            logger.info("Starting MCP server (transport=stdio)")
            await mcp.run_async(transport="stdio")


def main() -> None:
    configure_logging()
    try:
        settings = Settings()
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            logger.error(
                "Invalid configuration",
                extra={"log_data": {"field": field.upper(), "error": error["msg"]}},
            )
        sys.exit(1)

    configure_logging(settings.mcp_log_level)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
