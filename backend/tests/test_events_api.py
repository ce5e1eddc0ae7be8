"""
Tests for the JSON endpoints and their error mapping.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import make_event
from eventfeed.api.deps import get_eventbrite_client
from eventfeed.core.errors import NO_ORGANIZATIONS_MESSAGE
from eventfeed.main import app


@pytest.mark.asyncio
async def test_list_events(client: AsyncClient, fake_api):
    """Live events of all organizations, projected."""
    fake_api.organizations("a", "b")
    fake_api.live_events("a", [make_event("a1", name="Kickoff", start_local="2026-11-02T19:00:00")])
    fake_api.live_events("b", [make_event("b1", is_free=True, capacity=40)])

    response = await client.get("/events")

    assert response.status_code == 200
    events = response.json()["events"]
    assert [e["id"] for e in events] == ["a1", "b1"]
    assert events[0]["name"] == "Kickoff"
    assert events[0]["start"]["local"] == "2026-11-02T19:00:00"
    assert "capacity" not in events[0]
    assert events[1]["is_free"] is True
    assert events[1]["capacity"] == 40


@pytest.mark.asyncio
async def test_list_events_passes_upstream_status_through(client: AsyncClient, fake_api):
    fake_api.add("GET", "/users/me/organizations", {"error": "INVALID_AUTH"}, status=401)

    response = await client.get("/events")

    assert response.status_code == 401
    assert response.json() == {
        "error": "list_organizations failed (status 401)",
        "details": {"error": "INVALID_AUTH"},
    }


@pytest.mark.asyncio
async def test_list_events_unreachable_upstream_is_502(client: AsyncClient, fake_api):
    fake_api.unreachable("GET", "/users/me/organizations")

    response = await client.get("/events")

    assert response.status_code == 502
    assert response.json() == {"error": "list_organizations failed (no response)", "details": None}


@pytest.mark.asyncio
async def test_list_events_redirect_status_becomes_502(client: AsyncClient, fake_api):
    """Only 4xx/5xx upstream statuses are reused."""
    fake_api.add("GET", "/users/me/organizations", status=302)

    response = await client.get("/events")

    assert response.status_code == 502
    assert response.json()["error"] == "list_organizations failed (status 302)"


@pytest.mark.asyncio
async def test_list_events_without_organizations_is_502(client: AsyncClient, fake_api):
    fake_api.organizations()

    response = await client.get("/events")

    assert response.status_code == 502
    assert response.json() == {"error": NO_ORGANIZATIONS_MESSAGE, "details": None}


@pytest.mark.asyncio
async def test_list_events_failing_organization_returns_no_partial_result(client: AsyncClient, fake_api):
    fake_api.organizations("a", "b")
    fake_api.live_events("a", [make_event("a1")])
    fake_api.add("GET", "/organizations/b/events/", {"error": "NOT_AUTHORIZED"}, status=403)

    response = await client.get("/events")

    assert response.status_code == 403
    assert "events" not in response.json()


@pytest.mark.asyncio
async def test_get_event_without_id_is_400(client: AsyncClient, fake_api):
    """Missing eventId never reaches Eventbrite."""
    response = await client.get("/event")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing eventId"}
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_get_event_with_empty_id_is_400(client: AsyncClient, fake_api):
    response = await client.get("/event", params={"eventId": ""})

    assert response.status_code == 400
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient, fake_api):
    response = await client.get("/event", params={"eventId": "404404"})

    assert response.status_code == 404
    assert response.json() == {"error": "Event not found"}


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, fake_api):
    raw = make_event("42", name="Detail", category={"name": "Tech"})
    fake_api.add("GET", "/events/42/", raw)

    response = await client.get("/event", params={"eventId": "42"})

    assert response.status_code == 200
    assert response.json() == {"event": raw}


@pytest.mark.asyncio
async def test_get_event_upstream_error(client: AsyncClient, fake_api):
    fake_api.add("GET", "/events/42/", {"error": "INTERNAL"}, status=500)

    response = await client.get("/event", params={"eventId": "42"})

    assert response.status_code == 500
    assert response.json() == {"error": "get_event failed (status 500)", "details": {"error": "INTERNAL"}}


@pytest.mark.asyncio
async def test_events_listing_buckets_and_counts(client: AsyncClient, fake_api):
    fake_api.organizations("a")
    fake_api.live_events("a", [
        make_event("past", name="Old Meetup", start_local="2001-01-01T10:00:00"),
        make_event("future", name="Next Meetup", start_local="2999-01-01T10:00:00"),
        make_event("undated", name="Someday"),
    ])

    response = await client.get("/events/listing", params={"upcoming": 1})

    assert response.status_code == 200
    body = response.json()
    assert body["page_size"] == 3
    assert body["poll_seconds"] == 60

    upcoming = body["upcoming"]
    assert upcoming["total"] == 2
    assert upcoming["visible"] == 1
    assert upcoming["has_more"] is True
    assert len(upcoming["tiles"]) == 2
    assert "Next Meetup" in upcoming["tiles"][0]
    assert "Someday" in upcoming["tiles"][1]

    past = body["past"]
    assert past["total"] == 1
    assert past["visible"] == 3
    assert past["has_more"] is False
    assert "Old Meetup" in past["tiles"][0]


@pytest.mark.asyncio
async def test_events_listing_empty_buckets(client: AsyncClient, fake_api):
    fake_api.organizations("a")
    fake_api.live_events("a", [])

    body = (await client.get("/events/listing")).json()

    assert body["upcoming"]["tiles"] == []
    assert body["upcoming"]["empty_message"] == "No upcoming Events"
    assert body["past"]["empty_message"] == "No past events yet."


@pytest.mark.asyncio
async def test_events_listing_rejects_zero_visible(client: AsyncClient):
    response = await client.get("/events/listing", params={"past": 0})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_path_is_plain_404(client: AsyncClient):
    response = await client.get("/nope")

    assert response.status_code == 404
    assert response.text == "Not Found"
    assert response.headers["content-type"].startswith("text/plain")


class ExplodingClient:
    async def list_organizations(self):
        raise RuntimeError("secret internals")


@pytest.mark.asyncio
async def test_uncaught_exception_is_generic_500():
    """Internal details are logged, never returned."""

    async def override_eventbrite():
        return ExplodingClient()

    app.dependency_overrides[get_eventbrite_client] = override_eventbrite
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/events")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}
    assert "secret" not in response.text


@pytest.mark.asyncio
async def test_responses_carry_request_id(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert len(response.headers["X-Request-ID"]) == 8


@pytest.mark.asyncio
async def test_metrics_exposes_upstream_counters(client: AsyncClient, fake_api):
    fake_api.organizations("a")
    fake_api.live_events("a", [make_event("a1")])
    await client.get("/events")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "eventfeed_upstream_requests_total" in response.text


@pytest.mark.asyncio
async def test_list_events_passes_unusual_field_types_through(client: AsyncClient, fake_api):
    """Odd field types are served as sent, never rejected or coerced."""
    fake_api.organizations("a")
    fake_api.live_events("a", [
        make_event("a1", capacity=12.5, is_free="false"),
        {"id": 7, "organization_id": 99, "capacity": "30", "is_free": None},
    ])

    response = await client.get("/events")

    assert response.status_code == 200
    first, second = response.json()["events"]
    assert first["capacity"] == 12.5
    assert first["is_free"] == "false"
    assert second == {"id": 7, "organization_id": 99, "capacity": "30", "is_free": None}


@pytest.mark.asyncio
@pytest.mark.parametrize("event_id, raw_path", [
    ("../users/me/organizations", b"/v3/events/..%2Fusers%2Fme%2Forganizations/"),
    ("..", b"/v3/events/%2E%2E/"),
])
async def test_get_event_id_stays_in_one_path_segment(client: AsyncClient, fake_api, event_id, raw_path):
    """The eventId is escaped into a single segment under /events/."""
    response = await client.get("/event", params={"eventId": event_id})

    assert response.status_code == 404
    assert len(fake_api.requests) == 1
    assert fake_api.requests[0].url.raw_path.split(b"?")[0] == raw_path
