"""
session.py — One MCP server + one transport per HTTP request
=============================================================
create_session() builds everything from scratch: a new tool registry, a
new widget binding, a new low-level Server and a new Streamable HTTP
transport. The transport has no MCP session id and the server runs in
stateless mode, so any worker can answer any request.

The caller owns the returned EventSession and must close() it. close() is
idempotent: teardown runs once no matter how many terminal events
(response finished, client gone, error) report in.
"""

import logging
from typing import Any, Optional

import anyio
from anyio.abc import TaskGroup, TaskStatus
from mcp.server.lowlevel import Server
from mcp.server.streamable_http import StreamableHTTPServerTransport
from starlette.types import Receive, Scope, Send

from event_planner.eventbrite import EventbriteClient
from event_planner.server import build_server
from event_planner.widget import WidgetResource

logger = logging.getLogger(__name__)


class EventSession:
    def __init__(self, server: Server, transport: Any):
        self.server = server
        self.transport = transport
        self._run_scope: Optional[anyio.CancelScope] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def connect(self, task_group: TaskGroup) -> None:
        """Start the server on the transport's streams; returns once they are wired up."""
        self._run_scope = await task_group.start(self._run)

    async def _run(self, *, task_status: TaskStatus = anyio.TASK_STATUS_IGNORED) -> None:
        with anyio.CancelScope() as scope:
            async with self.transport.connect() as (read_stream, write_stream):
                task_status.started(scope)
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                    stateless=True,
                )

    async def handle_request(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.transport.handle_request(scope, receive, send)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing MCP session")
        with anyio.CancelScope(shield=True):
            await self.transport.terminate()
        if self._run_scope is not None:
            self._run_scope.cancel()


def create_session(client: EventbriteClient, widget: WidgetResource) -> EventSession:
    server = build_server(client, widget)
    transport = StreamableHTTPServerTransport(
        mcp_session_id=None,
        is_json_response_enabled=True,
    )
    return EventSession(server, transport)
