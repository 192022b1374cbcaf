"""MCP server initialization, transport setup, and startup sequence."""

from __future__ import annotations

import logging
import sys
from typing import Any

from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.server.stdio import stdio_server

from odoo_bridge import __version__
from odoo_bridge.config import OdooBridgeConfig, load_config
from odoo_bridge.connection import (
    Credentials,
    OdooSessionClient,
    SessionCache,
    XmlRpcChannel,
)
from odoo_bridge.operations import RecordOperations
from odoo_bridge.toolsets import ToolDispatcher

logger = logging.getLogger("odoo_bridge")

SERVER_NAME = "odoo-mcp-bridge"


class ToolCallFailed(Exception):
    """Raised to make the MCP SDK answer a tool call with ``isError: true``."""


def _setup_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_dispatcher(config: OdooBridgeConfig) -> ToolDispatcher:
    """Wire channel, session client and operations from *config*."""
    channel = XmlRpcChannel.from_url(
        config.odoo_url,
        timeout=config.odoo_timeout,
        insecure_skip_verify=config.odoo_insecure_skip_verify,
        ca_cert=config.odoo_ca_cert,
    )
    client = OdooSessionClient(
        channel,
        Credentials(config.odoo_username, config.odoo_password),
        cache=SessionCache(),
    )
    return ToolDispatcher(RecordOperations(client), default_database=config.odoo_db)


def register_tools(server: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Bind the dispatcher to the low-level ``tools/list`` and ``tools/call``."""
    low = server._mcp_server

    @low.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=d["name"],
                description=d["description"],
                inputSchema=d["inputSchema"],
                annotations=types.ToolAnnotations(**d["annotations"]),
            )
            for d in dispatcher.list_tools()
        ]

    @low.call_tool()
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        response = await dispatcher.dispatch(name, arguments or {})
        if response.is_error:
            raise ToolCallFailed(response.text)
        return [types.TextContent(type="text", text=response.text)]

    logger.info("Registered %d tools", len(dispatcher.tool_names()))


def create_server(config: OdooBridgeConfig) -> tuple[FastMCP, ToolDispatcher]:
    server = FastMCP(SERVER_NAME)
    dispatcher = build_dispatcher(config)
    register_tools(server, dispatcher)
    return server, dispatcher


async def run_server(cli_overrides: dict[str, Any] | None = None) -> None:
    """Main server startup sequence."""
    config = load_config(cli_overrides)
    _setup_logging(config.log_level)

    logger.info("%s v%s starting...", SERVER_NAME, __version__)
    if config.odoo_url.startswith("https://") and config.odoo_insecure_skip_verify:
        logger.warning(
            "TLS certificate verification is disabled for %s "
            "(odoo_insecure_skip_verify). Set ODOO_INSECURE_SKIP_VERIFY=false "
            "to verify the server certificate.",
            config.odoo_url,
        )

    server, dispatcher = create_server(config)
    logger.info(
        "Odoo server %s as %s (default database: %s)",
        config.odoo_url,
        config.odoo_username,
        dispatcher.default_database,
    )

    low = server._mcp_server
    if config.transport == "stdio":
        await _run_stdio(low)
    elif config.transport == "sse":
        await _run_sse(low, config)
    else:
        raise ValueError(f"Unknown transport: {config.transport}")
    logger.info("Shutdown complete")


# ---------------------------------------------------------------------------
# Transport runners
# ---------------------------------------------------------------------------

async def _run_stdio(server: Any) -> None:
    logger.info("MCP Odoo bridge running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


async def _run_sse(server: Any, config: OdooBridgeConfig) -> None:
    from mcp.server.sse import SseServerTransport
    from starlette.applications import Starlette
    from starlette.responses import Response
    from starlette.routing import Mount, Route

    sse_transport = SseServerTransport("/messages/")

    async def handle_sse(request: Any) -> Response:
        async with sse_transport.connect_sse(
            request.scope, request.receive, request._send
        ) as streams:
            await server.run(
                streams[0],
                streams[1],
                server.create_initialization_options(),
            )
        return Response()

    app = Starlette(
        routes=[
            Route("/sse", endpoint=handle_sse, methods=["GET"]),
            Mount("/messages/", app=sse_transport.handle_post_message),
        ],
    )

    import uvicorn

    logger.info("MCP Odoo bridge listening on http://%s:%d/sse", config.host, config.port)
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level,
    )
    await uvicorn.Server(uvicorn_config).serve()
