"""
server.py — Low-level MCP Server for the Event Planner
=======================================================
What this file does:
  1. Creates a low-level mcp Server instance with a lifespan hook
  2. Registers list_tools / call_tool against a tool registry
  3. Registers list_resources / read_resource against the widget

Unlike a long-lived module-level server, build_server() is called once per
HTTP request (see session.py), so every handler here closes over that
request's own registry and widget binding.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents

from event_planner.eventbrite import EventbriteClient
from event_planner.schema import ToolResult
from event_planner.tools import build_registry
from event_planner.widget import WidgetResource

logger = logging.getLogger(__name__)

SERVER_NAME = "event-planner-app"
SERVER_VERSION = "0.1.0"


# ── Lifespan ──────────────────────────────────────────────────────────────────
# Runs once per session. Tools get everything they need through closures,
# so there are no shared resources to yield.

@asynccontextmanager
async def server_lifespan(server: Server) -> AsyncIterator[dict]:
    logger.debug("%s session starting", server.name)
    try:
        yield {}
    finally:
        logger.debug("%s session finished", server.name)


def build_server(client: EventbriteClient, widget: WidgetResource) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION, lifespan=server_lifespan)
    tools = build_registry(client)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """Return all tools from the registry to the connecting client."""
        return [entry["tool"] for entry in tools.values()]

    # Handlers parse their own arguments and answer bad input with a result.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch an incoming tool call to the correct handler."""
        if name not in tools:
            raise ValueError(f"Unknown tool: {name}")
        logger.info("Tool call %s(%s)", name, arguments)
        handler = tools[name]["handler"]
        return await handler(arguments or {})

    @server.list_resources()
    async def handle_list_resources() -> list[types.Resource]:
        return widget.resources()

    @server.read_resource()
    async def handle_read_resource(uri: Any) -> list[ReadResourceContents]:
        return widget.contents(str(uri))

    return server
