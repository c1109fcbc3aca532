import httpx
import pytest

from event_planner.config import Settings
from event_planner.eventbrite import (
    ConfigurationError,
    EventbriteError,
    TransportError,
    UpstreamError,
    build_query,
)


def test_build_query_drops_none_values():
    assert build_query({"status": "live", "page": None, "expand": "venue"}) == {
        "status": "live",
        "expand": "venue",
    }
    assert build_query(None) == {}


@pytest.mark.asyncio
async def test_call_sends_one_authenticated_get(mock_transport_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"events": []})

    client = mock_transport_client(handler)
    data = await client.call("/organizations/org-42/events/", {"status": "live", "continuation": None})

    assert data == {"events": []}
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/v3/organizations/org-42/events/"
    assert dict(request.url.params) == {"status": "live"}
    assert request.headers["authorization"] == "Bearer test-token"


@pytest.mark.asyncio
async def test_missing_token_fails_before_any_request(mock_transport_client):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    client = mock_transport_client(handler, Settings(token=None))
    with pytest.raises(ConfigurationError):
        await client.call("/events/1/")
    assert calls == []


@pytest.mark.asyncio
async def test_non_success_status_raises_upstream_error(mock_transport_client):
    def handler(request):
        return httpx.Response(404, text='{"error": "NOT_FOUND"}')

    client = mock_transport_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.call("/events/nope/")

    err = exc_info.value
    assert err.status_code == 404
    assert err.status_text == "Not Found"
    assert "NOT_FOUND" in err.body
    assert isinstance(err, EventbriteError)


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error(mock_transport_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = mock_transport_client(handler)
    with pytest.raises(TransportError):
        await client.call("/events/1/")


@pytest.mark.asyncio
async def test_non_json_body_raises_transport_error(mock_transport_client):
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    client = mock_transport_client(handler)
    with pytest.raises(TransportError):
        await client.call("/events/1/")
