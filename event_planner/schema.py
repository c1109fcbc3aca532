"""
schema.py — Validated tool inputs and the reply envelope
=========================================================
Each tool parses its raw argument dict into one of the models below before
doing any work. Empty or whitespace-only ids become "" so handlers can
short-circuit with a friendly message instead of calling Eventbrite.

Every tool reply is a (content, structured) pair, which the low-level MCP
server turns into a CallToolResult with both `content` and
`structuredContent` filled in.
"""

from typing import Any, Literal, Optional

from mcp import types
from pydantic import BaseModel, Field, field_validator

EventStatus = Literal["all", "live", "draft", "started", "ended", "completed", "canceled"]
EVENT_STATUSES: tuple[str, ...] = ("all", "live", "draft", "started", "ended", "completed", "canceled")

ToolResult = tuple[list[types.TextContent], dict[str, Any]]


class ListEventsArgs(BaseModel):
    status: EventStatus = "live"

    @field_validator("status", mode="before")
    @classmethod
    def _default_when_missing(cls, value):
        return "live" if value is None else value


class EventArgs(BaseModel):
    id: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _strip_id(cls, value):
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        return value.strip() if isinstance(value, str) else value


class BuyTicketArgs(EventArgs):
    quantity: int = Field(default=1, ge=1)

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_quantity(cls, value):
        return 1 if value is None else value


# ── Reply envelope ────────────────────────────────────────────────────────────

def _content(message: Optional[str]) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=message)] if message else []


def reply_with_events(message: Optional[str], events: list[Any]) -> ToolResult:
    return _content(message), {"events": events}


def reply_with_event(message: Optional[str], event: Optional[dict[str, Any]]) -> ToolResult:
    return _content(message), {"event": event}


def event_name(event: Any, fallback: str) -> str:
    """Eventbrite nests the display name as {"name": {"text": ...}}."""
    if isinstance(event, dict):
        name = event.get("name")
        if isinstance(name, dict) and name.get("text") is not None:
            return name["text"]
    return fallback
