from event_planner.eventbrite import EventbriteClient
from event_planner.tools.events import (
    buy_ticket_tool, make_buy_ticket,
    get_all_events_tool, make_get_all_events,
    get_event_tool, make_get_event,
)


def build_registry(client: EventbriteClient) -> dict:
    """
    Map tool name -> {"tool": types.Tool, "handler": async callable}.

    Descriptors are shared constants; handlers are fresh closures over the
    given client, so every session gets its own registry.
    """
    return {
        get_all_events_tool.name: {"tool": get_all_events_tool, "handler": make_get_all_events(client)},
        get_event_tool.name:      {"tool": get_event_tool,      "handler": make_get_event(client)},
        buy_ticket_tool.name:     {"tool": buy_ticket_tool,     "handler": make_buy_ticket(client)},
    }
