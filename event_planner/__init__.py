"""Event Planner: an MCP server exposing Eventbrite events to agents."""

from event_planner.app import create_app
from event_planner.config import Settings

__all__ = ["Settings", "create_app"]
__version__ = "0.1.0"
