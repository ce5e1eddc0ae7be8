"""
Eventbrite v3 API client.

Every call goes through ``_request``, which turns transport failures, non-2xx
responses and non-object bodies into ``EventFeedError``. Nothing above this
module sees an httpx exception.
"""

import time
from typing import Any, Optional
from urllib.parse import quote

import httpx

from eventfeed.core.errors import EventFeedError
from eventfeed.core.logging import get_logger
from eventfeed.core.metrics import record_upstream_request

logger = get_logger(__name__)

LIVE_EVENTS_EXPAND = "logo,venue,organizer"
EVENT_DETAIL_EXPAND = "organizer,venue,logo,category,subcategory"
EVENT_TIMEZONE = "America/Los_Angeles"

VIP_TIER_NAME = "VIP"
VIP_TIER_QUANTITY = 30
VIP_TICKET_NAME = "Vip section"
VIP_TICKET_COST = "USD,1000"


def _segment(value: Any) -> str:
    """One escaped path segment. Bare "." and ".." are percent-encoded as well."""
    segment = quote(str(value), safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class EventbriteClient:
    """Authenticated wrapper around one shared ``httpx.AsyncClient``."""

    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str):
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> dict:
        url = f"{self._base_url}/{path.lstrip('/')}"
        start_time = time.perf_counter()

        try:
            response = await self._http.request(
                method, url, params=params, json=json, headers=self._headers()
            )
        except httpx.RequestError as e:
            duration = time.perf_counter() - start_time
            record_upstream_request(operation, "unreachable", duration)
            logger.error("upstream_failed", operation=operation, reason="no_response", error=str(e))
            raise EventFeedError.upstream_unreachable(operation) from e

        duration = time.perf_counter() - start_time

        if not response.is_success:
            record_upstream_request(operation, "http_error", duration)
            logger.warning(
                "upstream_failed",
                operation=operation,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            raise EventFeedError.upstream_http(operation, response.status_code, _error_payload(response))

        try:
            body = response.json()
        except ValueError as e:
            record_upstream_request(operation, "bad_payload", duration)
            logger.warning("upstream_failed", operation=operation, reason="invalid_json")
            raise EventFeedError.bad_payload(operation) from e

        if not isinstance(body, dict):
            record_upstream_request(operation, "bad_payload", duration)
            logger.warning("upstream_failed", operation=operation, reason="not_an_object")
            raise EventFeedError.bad_payload(operation, body)

        record_upstream_request(operation, "ok", duration)
        logger.debug(
            "upstream_request",
            operation=operation,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return body

    # Reads

    async def list_organizations(self) -> dict:
        """Organizations owned by the token's user."""
        return await self._request("list_organizations", "GET", "/users/me/organizations")

    async def list_live_events(self, organization_id: str) -> dict:
        """Live events of one organization with logo, venue and organizer inlined."""
        return await self._request(
            "list_live_events",
            "GET",
            f"/organizations/{_segment(organization_id)}/events/",
            params={"status": "live", "expand": LIVE_EVENTS_EXPAND},
        )

    async def get_event(self, event_id: str) -> Optional[dict]:
        """
        Single event with category and subcategory expanded.
        Returns None when Eventbrite answers 404 or with an empty object.
        """
        try:
            event = await self._request(
                "get_event",
                "GET",
                f"/events/{_segment(event_id)}/",
                params={"expand": EVENT_DETAIL_EXPAND},
            )
        except EventFeedError as e:
            if e.status == 404:
                return None
            raise
        return event or None

    # Writes (setup mode)

    async def create_event(
        self,
        organization_id: str,
        name: str,
        start_utc: str,
        end_utc: str,
        currency: str,
    ) -> dict:
        body = {
            "event": {
                "name": {"html": name},
                "start": {"timezone": EVENT_TIMEZONE, "utc": start_utc},
                "end": {"timezone": EVENT_TIMEZONE, "utc": end_utc},
                "currency": currency,
            }
        }
        return await self._request(
            "create_event", "POST", f"/organizations/{_segment(organization_id)}/events/", json=body
        )

    async def create_inventory_tier(self, event_id: str) -> dict:
        body = {
            "inventory_tier": {
                "name": VIP_TIER_NAME,
                "count_against_event_capacity": True,
                "quantity_total": VIP_TIER_QUANTITY,
            }
        }
        return await self._request(
            "create_inventory_tier", "POST", f"/events/{_segment(event_id)}/inventory_tiers/", json=body
        )

    async def create_ticket_class(self, event_id: str, inventory_tier_id: str) -> dict:
        body = {
            "ticket_class": {
                "name": VIP_TICKET_NAME,
                "free": False,
                "donation": False,
                "cost": VIP_TICKET_COST,
                "inventory_tier_id": inventory_tier_id,
            }
        }
        return await self._request(
            "create_ticket_class", "POST", f"/events/{_segment(event_id)}/ticket_classes/", json=body
        )
