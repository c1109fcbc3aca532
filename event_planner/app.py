"""
app.py — HTTP front door for the Event Planner MCP server
==========================================================
Routes:
  OPTIONS /mcp               → 204 CORS preflight
  GET     /                  → 200 plain-text banner (health check)
  POST | GET | DELETE /mcp   → a brand-new MCP session handles the request
  anything else              → 404

Every protocol request gets its own EventSession (see session.py). The
session is closed exactly once, either when the client disconnects or
when handling ends, whichever comes first.
"""

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

import anyio
from anyio.abc import TaskGroup
from starlette.applications import Starlette
from starlette.datastructures import MutableHeaders
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from event_planner.config import Settings
from event_planner.eventbrite import EventbriteClient
from event_planner.session import EventSession, create_session
from event_planner.widget import WidgetResource, load_widget_html

logger = logging.getLogger(__name__)

MCP_PATH = "/mcp"
MCP_METHODS = frozenset({"POST", "GET", "DELETE"})
BANNER = "Event Planner MCP server"

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "content-type, mcp-session-id",
    "Access-Control-Expose-Headers": "Mcp-Session-Id",
}

PROTOCOL_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": "Mcp-Session-Id",
}

SessionFactory = Callable[[], EventSession]


class RequireURLMiddleware:
    """Reject requests that arrive without a usable path before routing sees them."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and not str(scope.get("path") or "").startswith("/"):
            await PlainTextResponse("Missing URL", status_code=400)(scope, receive, send)
            return
        await self.app(scope, receive, send)


class _Exchange:
    """
    Wraps the ASGI receive/send pair of one protocol request.

    - send() stamps the CORS headers onto the response and records whether
      the response has started, so errors never write twice.
    - receive() notices the end of the request body and from then on
      watches for http.disconnect in the background, calling on_disconnect
      even while the MCP server is still busy.
    """

    def __init__(self, receive: Receive, send: Send, on_disconnect: Callable[[], Awaitable[None]]):
        self._receive = receive
        self._send = send
        self._on_disconnect = on_disconnect
        self._task_group: Optional[TaskGroup] = None
        self._watching = False
        self.response_started = False

    def watch(self, task_group: TaskGroup) -> None:
        self._task_group = task_group

    async def receive(self) -> Message:
        message = await self._receive()
        if message["type"] == "http.disconnect":
            await self._on_disconnect()
        elif message["type"] == "http.request" and not message.get("more_body", False):
            self._start_watching()
        return message

    def _start_watching(self) -> None:
        if self._watching or self._task_group is None:
            return
        self._watching = True
        self._task_group.start_soon(self._wait_for_disconnect)

    async def _wait_for_disconnect(self) -> None:
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                await self._on_disconnect()
                return

    async def send(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.response_started = True
            message.setdefault("headers", [])
            headers = MutableHeaders(scope=message)
            headers.update(PROTOCOL_HEADERS)
        await self._send(message)


class McpEndpoint:
    """ASGI endpoint mounted at /mcp."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        method = scope["method"]
        if method == "OPTIONS":
            response: Response = Response(status_code=204, headers=PREFLIGHT_HEADERS)
        elif method in MCP_METHODS:
            await self.handle_protocol(scope, receive, send)
            return
        else:
            response = PlainTextResponse("Not Found", status_code=404)
        await response(scope, receive, send)

    async def handle_protocol(self, scope: Scope, receive: Receive, send: Send) -> None:
        session = self.session_factory()
        exchange = _Exchange(receive, send, on_disconnect=session.close)
        try:
            async with anyio.create_task_group() as tg:
                exchange.watch(tg)
                await session.connect(tg)
                try:
                    await session.handle_request(scope, exchange.receive, exchange.send)
                finally:
                    await session.close()
                    tg.cancel_scope.cancel()
        except Exception:
            logger.exception("Error handling MCP request")
            if not exchange.response_started:
                await PlainTextResponse("Internal server error", status_code=500)(scope, receive, send)


# ── Plain routes ──────────────────────────────────────────────────────────────

async def health(request: Request) -> Response:
    # Starlette answers HEAD on GET routes; only GET / is served.
    if request.method != "GET":
        return PlainTextResponse("Not Found", status_code=404)
    return PlainTextResponse(BANNER)


async def not_found(request: Request, exc: HTTPException) -> Response:
    return PlainTextResponse("Not Found", status_code=404)


# ── Application factory ───────────────────────────────────────────────────────

def create_app(
    settings: Settings,
    client_factory: Optional[Callable[[], EventbriteClient]] = None,
    widget_html: Optional[str] = None,
) -> Starlette:
    """
    Build the Starlette app. The widget HTML is read from disk here, once;
    everything per-request is built inside the session factory.
    """
    if not settings.has_token:
        logger.warning("EVENTBRITE_TOKEN is not set. Event tools will fail.")
    if not settings.has_org_id:
        logger.warning("EVENTBRITE_ORG_ID is not set. getAllEvents will fail.")

    if widget_html is None:
        widget_html = load_widget_html(settings.widget_path)
    if client_factory is None:
        client_factory = lambda: EventbriteClient(settings)  # noqa: E731

    def session_factory() -> EventSession:
        return create_session(client_factory(), WidgetResource(widget_html))

    @asynccontextmanager
    async def app_lifespan(app: Starlette):
        logger.info("%s listening on http://%s:%s%s", BANNER, settings.host, settings.port, MCP_PATH)
        yield

    return Starlette(
        routes=[
            Route("/", health, methods=["GET"]),
            Route(MCP_PATH, McpEndpoint(session_factory)),
        ],
        middleware=[Middleware(RequireURLMiddleware)],
        exception_handlers={404: not_found, 405: not_found},
        lifespan=app_lifespan,
    )
