"""
client.py — Probe a running Event Planner server over MCP
==========================================================
Connects with the regular MCP client (Streamable HTTP), lists what the
server offers, then calls the tools so you can see both the text content
and the structured payload the widget will receive.

Usage:
    Terminal 1:  python -m event_planner
    Terminal 2:  event-planner-probe --status live --event-id 123456789 --quantity 2
"""

import argparse
import asyncio
import json
from typing import Any, Optional

from mcp import ClientSession
from mcp.client.streamable_http import streamable_http_client

SERVER_URL = "http://localhost:8787/mcp"


def print_result(name: str, result: Any) -> None:
    print(f"\n── {name} {'(error)' if result.isError else ''}")
    for block in result.content:
        if getattr(block, "type", None) == "text":
            print(f"  {block.text}")
    if result.structuredContent is not None:
        print(json.dumps(result.structuredContent, indent=2)[:2000])


async def probe(url: str, status: str, event_id: Optional[str], quantity: int) -> None:
    print(f"Connecting to MCP server at {url}...")

    async with streamable_http_client(url) as (read_stream, write_stream, _):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()

            tools = await session.list_tools()
            print(f"\n  {len(tools.tools)} tools:")
            for tool in tools.tools:
                print(f"    ✓ {tool.name}: {tool.description}")

            resources = await session.list_resources()
            for resource in resources.resources:
                print(f"    ◇ {resource.uri} ({resource.mimeType})")

            print_result("getAllEvents", await session.call_tool("getAllEvents", {"status": status}))

            if event_id:
                print_result("getEvent", await session.call_tool("getEvent", {"id": event_id}))
                print_result(
                    "buyTicket",
                    await session.call_tool("buyTicket", {"id": event_id, "quantity": quantity}),
                )


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise the Event Planner MCP tools")
    parser.add_argument("--url", default=SERVER_URL, help=f"MCP endpoint (default: {SERVER_URL})")
    parser.add_argument("--status", default="live", help="Status filter for getAllEvents")
    parser.add_argument("--event-id", help="Event id for getEvent / buyTicket")
    parser.add_argument("--quantity", type=int, default=1, help="Ticket quantity for buyTicket")
    args = parser.parse_args()
    asyncio.run(probe(args.url, args.status, args.event_id, args.quantity))


if __name__ == "__main__":
    main()
