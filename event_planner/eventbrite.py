"""
eventbrite.py — Thin async gateway to the Eventbrite REST API
==============================================================
One public coroutine, EventbriteClient.call(path, query), which performs
exactly one authenticated GET and returns the parsed JSON body as-is.
No retries and no caching: every call is independent.

Failures are typed so tool handlers can decide what to tell the agent:
  - ConfigurationError : no API token configured (raised before any I/O)
  - UpstreamError      : Eventbrite answered with a non-2xx status
  - TransportError     : the request itself could not complete
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from event_planner.config import Settings

logger = logging.getLogger(__name__)


class EventbriteError(Exception):
    """Base class for every failure raised by EventbriteClient."""


class ConfigurationError(EventbriteError):
    pass


class UpstreamError(EventbriteError):
    def __init__(self, status_code: int, status_text: str, body: str = ""):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"Eventbrite request failed ({status_code} {status_text}): {body}")


class TransportError(EventbriteError):
    pass


def build_query(query: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Drop keys whose value is None so optional filters never reach the wire as 'None'."""
    if not query:
        return {}
    return {key: value for key, value in query.items() if value is not None}


class EventbriteClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        # Injected in tests (httpx.MockTransport); None means a real network transport.
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.token}",
            "Accept": "application/json",
        }

    async def call(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        if not self.settings.has_token:
            raise ConfigurationError("EVENTBRITE_TOKEN is not configured")

        url = f"{self.settings.api_base}{path}"
        params = build_query(query)
        logger.debug("GET %s params=%s", url, params)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.RequestError as e:
            raise TransportError(f"Eventbrite request to {path} failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(response.status_code, response.reason_phrase, _safe_text(response))

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Eventbrite returned a non-JSON body for {path}") from e


def _safe_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (UnicodeDecodeError, LookupError):
        return ""
