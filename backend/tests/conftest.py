"""
Pytest fixtures for the fake Eventbrite API, the ASGI client and static files.

Eventbrite is replaced by an httpx.MockTransport so the real EventbriteClient
(and its error mapping) runs in every test without network access.
"""

import os
from pathlib import Path
from typing import AsyncGenerator, Callable, Optional

os.environ.setdefault("API_KEY", "test-token")
os.environ.setdefault("ENVIRONMENT", "testing")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from eventfeed.api.deps import get_eventbrite_client  # noqa: E402
from eventfeed.core.config import get_settings  # noqa: E402
from eventfeed.infrastructure.eventbrite_client import EventbriteClient  # noqa: E402
from eventfeed.main import app  # noqa: E402

BASE_URL = "https://eventbrite.test/v3"
API = "/v3"


class FakeEventbrite:
    """
    Canned Eventbrite responses keyed by (method, path).
    Every request is recorded; unknown routes answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body=None, status: int = 200) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        self.routes[(method, API + path)] = respond

    def add_raw(self, method: str, path: str, content: bytes, status: int = 200) -> None:
        self.routes[(method, API + path)] = lambda request: httpx.Response(status, content=content)

    def unreachable(self, method: str, path: str) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, API + path)] = fail

    def organizations(self, *org_ids: str) -> None:
        self.add("GET", "/users/me/organizations", {"organizations": [{"id": i} for i in org_ids]})

    def live_events(self, org_id: str, events: list) -> None:
        self.add("GET", f"/organizations/{org_id}/events/", {"events": events})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        respond = self.routes.get((request.method, request.url.path))
        if respond is None:
            return httpx.Response(404, json={"error": "NOT_FOUND", "status_code": 404})
        return respond(request)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


def make_event(event_id: str, name: Optional[str] = None, start_local: Optional[str] = None, **extra) -> dict:
    """Raw Eventbrite event with only the fields given."""
    event = {"id": event_id, "status": "live", "url": f"https://www.eventbrite.com/e/{event_id}"}
    if name is not None:
        event["name"] = {"text": name, "html": name}
    if start_local is not None:
        event["start"] = {"timezone": "America/Los_Angeles", "local": start_local, "utc": start_local + "Z"}
    event.update(extra)
    return event


@pytest.fixture
def fake_api() -> FakeEventbrite:
    return FakeEventbrite()


@pytest_asyncio.fixture
async def eventbrite(fake_api: FakeEventbrite) -> AsyncGenerator[EventbriteClient, None]:
    """Real client over the fake transport."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler)) as http:
        yield EventbriteClient(http, api_key="test-token", base_url=BASE_URL)


@pytest_asyncio.fixture
async def client(eventbrite: EventbriteClient) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app with the Eventbrite dependency pointed at the fake."""

    async def override_eventbrite():
        return eventbrite

    app.dependency_overrides[get_eventbrite_client] = override_eventbrite

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def static_root(tmp_path: Path, monkeypatch) -> Path:
    """Throwaway STATIC_DIR with pages, assets and a file just outside it."""
    root = tmp_path / "static"
    for folder in ("css", "js", "images", "fonts"):
        (root / folder).mkdir(parents=True)

    (root / "index.html").write_text("<h1>Listing</h1>", encoding="utf-8")
    (root / "event-single.html").write_text("<h1>Detail</h1>", encoding="utf-8")
    (root / "css" / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "css" / "data.bin").write_bytes(b"\x00\x01")
    (root / "js" / "events.js").write_text("console.log('ok');", encoding="utf-8")
    (root / "images" / "logo.png").write_bytes(b"\x89PNG\r\n")
    (root / "fonts" / "body.woff2").write_bytes(b"wOF2")
    (tmp_path / "secret.txt").write_text("do not serve", encoding="utf-8")

    monkeypatch.setattr(get_settings(), "STATIC_DIR", root)
    return root
