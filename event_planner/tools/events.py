"""
tools/events.py — MCP tools backed by the Eventbrite API
=========================================================
Three tools live here:
  - getAllEvents : list the configured organization's events by status
  - getEvent     : fetch one event by id
  - buyTicket    : hand back the event's own Eventbrite URL for purchase

Each tool follows the same three-part pattern:
  1. A plain dict  → inputSchema  (JSON Schema the agent must satisfy)
  2. A types.Tool  → the descriptor (name, title, schemas, widget _meta)
  3. A factory     → make_<tool>(client) returns the async handler, a
                     closure over the EventbriteClient for one session

Handlers never raise for Eventbrite or argument problems. A failed call
still yields a normal result whose text explains what went wrong and whose
structured payload has the same shape as a successful one.
"""

import logging
from typing import Any, Awaitable, Callable

from mcp import types
from pydantic import ValidationError

from event_planner.eventbrite import EventbriteClient, EventbriteError
from event_planner.schema import (
    EVENT_STATUSES,
    BuyTicketArgs,
    EventArgs,
    ListEventsArgs,
    ToolResult,
    event_name,
    reply_with_event,
    reply_with_events,
)
from event_planner.widget import WIDGET_URI

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[ToolResult]]

MISSING_ID_MESSAGE = "Missing event id."
INVALID_QUANTITY_MESSAGE = "Quantity must be a whole number of at least 1."


def _widget_meta(invoking: str, invoked: str) -> dict[str, Any]:
    return {
        "openai/outputTemplate": WIDGET_URI,
        "openai/toolInvocation/invoking": invoking,
        "openai/toolInvocation/invoked": invoked,
    }


events_output_schema = {
    "type": "object",
    "properties": {
        "events": {"type": "array", "items": {}},
    },
    "required": ["events"],
}

event_output_schema = {
    "type": "object",
    "properties": {
        "event": {"type": ["object", "null"]},
    },
    "required": ["event"],
}


# ── getAllEvents ──────────────────────────────────────────────────────────────
# A missing org id is a soft failure: the agent gets an empty list and a note.

get_all_events_input_schema = {
    "type": "object",
    "properties": {
        "status": {
            "type": "string",
            "enum": list(EVENT_STATUSES),
            "default": "live",
            "description": "Only return events with this status. Defaults to 'live'.",
        }
    },
}

get_all_events_tool = types.Tool(
    name="getAllEvents",
    title="Get all events",
    description="Fetches events from Eventbrite for the configured organization.",
    inputSchema=get_all_events_input_schema,
    outputSchema=events_output_schema,
    _meta=_widget_meta("Loading events from Eventbrite", "Loaded events from Eventbrite"),
)


def make_get_all_events(client: EventbriteClient) -> Handler:
    async def get_all_events(arguments: dict[str, Any]) -> ToolResult:
        org_id = client.settings.org_id
        if not org_id:
            return reply_with_events("EVENTBRITE_ORG_ID is not configured on the server.", [])

        try:
            args = ListEventsArgs.model_validate(arguments or {})
            data = await client.call(f"/organizations/{org_id}/events/", {"status": args.status})
        except (EventbriteError, ValidationError):
            logger.exception("getAllEvents failed")
            return reply_with_events("There was an error fetching events from Eventbrite.", [])

        events = data.get("events") if isinstance(data, dict) else None
        if not isinstance(events, list) or not events:
            return reply_with_events("No events found for this organization.", [])

        return reply_with_events(f"Found {len(events)} event(s) on Eventbrite.", events)

    return get_all_events


# ── getEvent ──────────────────────────────────────────────────────────────────

get_event_input_schema = {
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "description": "The Eventbrite event id",
        }
    },
    "required": ["id"],
}

get_event_tool = types.Tool(
    name="getEvent",
    title="Get event by id",
    description="Fetches a single Eventbrite event by id.",
    inputSchema=get_event_input_schema,
    outputSchema=event_output_schema,
    _meta=_widget_meta("Loading event details from Eventbrite", "Loaded event details from Eventbrite"),
)


async def _fetch_event(client: EventbriteClient, event_id: str) -> dict[str, Any]:
    event = await client.call(f"/events/{event_id}/")
    if not isinstance(event, dict):
        raise EventbriteError(f"Eventbrite returned a non-object body for event {event_id}")
    return event


def make_get_event(client: EventbriteClient) -> Handler:
    async def get_event(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = EventArgs.model_validate(arguments or {})
        except ValidationError:
            return reply_with_event(MISSING_ID_MESSAGE, None)
        if not args.id:
            return reply_with_event(MISSING_ID_MESSAGE, None)

        try:
            event = await _fetch_event(client, args.id)
        except EventbriteError:
            logger.exception("getEvent failed for %s", args.id)
            return reply_with_event(f"There was an error fetching event {args.id} from Eventbrite.", None)

        return reply_with_event(f'Loaded event "{event_name(event, args.id)}".', event)

    return get_event


# ── buyTicket ─────────────────────────────────────────────────────────────────
# Nothing is purchased here. The agent is pointed at the event's own page.

buy_ticket_input_schema = {
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "description": "The Eventbrite event id",
        },
        "quantity": {
            "type": "integer",
            "minimum": 1,
            "default": 1,
            "description": "How many tickets the user wants. Defaults to 1.",
        },
    },
    "required": ["id"],
}

buy_ticket_tool = types.Tool(
    name="buyTicket",
    title="Buy ticket for an event",
    description=(
        "Provides a ticket purchase link for an Eventbrite event. "
        "This does not complete the purchase but returns the correct URL."
    ),
    inputSchema=buy_ticket_input_schema,
    outputSchema=event_output_schema,
    _meta=_widget_meta("Preparing ticket purchase link", "Provided ticket purchase link"),
)


def purchase_message(event: dict[str, Any], event_id: str, quantity: int) -> str:
    noun = "ticket" if quantity == 1 else "tickets"
    parts = [f'To buy {quantity} {noun} for "{event_name(event, event_id)}", open this link in your browser.']
    url = event.get("url")
    parts.append(url if url else "No Eventbrite URL was found for this event.")
    return " ".join(parts)


def make_buy_ticket(client: EventbriteClient) -> Handler:
    async def buy_ticket(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = BuyTicketArgs.model_validate(arguments or {})
        except ValidationError as e:
            logger.warning("buyTicket called with invalid arguments: %s", e)
            if any(error["loc"][:1] == ("quantity",) for error in e.errors()):
                return reply_with_event(INVALID_QUANTITY_MESSAGE, None)
            return reply_with_event(MISSING_ID_MESSAGE, None)
        if not args.id:
            return reply_with_event(MISSING_ID_MESSAGE, None)

        try:
            event = await _fetch_event(client, args.id)
        except EventbriteError:
            logger.exception("buyTicket failed for %s", args.id)
            return reply_with_event(
                f"There was an error preparing the ticket purchase for event {args.id}.", None
            )

        return reply_with_event(purchase_message(event, args.id, args.quantity), event)

    return buy_ticket
