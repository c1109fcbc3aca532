"""
Shared fixtures for the Event Planner tests.

Nothing here talks to Eventbrite: gateway tests use httpx.MockTransport and
tool tests replace EventbriteClient.call with an AsyncMock.
"""

from typing import Any, Callable, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

from event_planner.config import Settings
from event_planner.eventbrite import EventbriteClient

WIDGET_HTML = "<div id='event-planner-root'></div>"

SAMPLE_EVENT = {
    "id": "1001",
    "name": {"text": "Jazz Night", "html": "Jazz Night"},
    "url": "https://www.eventbrite.com/e/jazz-night-tickets-1001",
    "start": {"local": "2026-11-01T19:00:00"},
    "status": "live",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        token="test-token",
        org_id="org-42",
        api_base="https://eventbrite.test/v3",
    )


@pytest.fixture
def mock_transport_client(settings) -> Callable[..., EventbriteClient]:
    """Build an EventbriteClient whose HTTP calls go to the given handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], config: Optional[Settings] = None):
        return EventbriteClient(config or settings, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def fake_client(settings) -> Callable[..., EventbriteClient]:
    """Build an EventbriteClient whose call() is an AsyncMock."""

    def factory(result: Any = None, error: Optional[Exception] = None, config: Optional[Settings] = None):
        client = EventbriteClient(config or settings)
        client.call = AsyncMock(return_value=result, side_effect=error)
        return client

    return factory
