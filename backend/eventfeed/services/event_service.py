"""
Event aggregation across every organization the API token can see.

AGGREGATION STRATEGY
====================

1. Fetch the principal's organizations. An empty or malformed list means a
   bad token or an unexpected API shape; that is a configuration error and
   the request fails before any event is fetched.
2. Visit organizations in the order Eventbrite returns them, one at a time.
   The next organization's event list is requested only after the previous
   one has completed.
3. Project each live event and append it, keeping Eventbrite's order.

Any failure aborts the whole aggregation. Events reported under more than one
organization are returned once per organization.
"""

from typing import Any, Optional

from eventfeed.core.errors import EventFeedError
from eventfeed.core.logging import get_logger
from eventfeed.core.metrics import record_aggregation, record_aggregation_failure
from eventfeed.infrastructure.eventbrite_client import EventbriteClient
from eventfeed.schemas.event import ProjectedEvent

logger = get_logger(__name__)


def extract_organizations(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the organization list or raise the configuration error."""
    organizations = payload.get("organizations")
    if not isinstance(organizations, list) or not organizations:
        raise EventFeedError.config()
    if not all(isinstance(org, dict) and org.get("id") for org in organizations):
        raise EventFeedError.config()
    return organizations


def project_events(payload: dict[str, Any], context: str) -> list[ProjectedEvent]:
    events = payload.get("events")
    if not events:
        return []
    if not isinstance(events, list):
        raise EventFeedError.bad_payload(context, events)

    projected = []
    for raw in events:
        if not isinstance(raw, dict):
            raise EventFeedError.bad_payload(context, raw)
        projected.append(ProjectedEvent.from_remote(raw))
    return projected


async def list_published_events(client: EventbriteClient) -> list[ProjectedEvent]:
    """Flattened live events of all organizations, in Eventbrite's order."""
    try:
        organizations = extract_organizations(await client.list_organizations())

        all_events: list[ProjectedEvent] = []
        for org in organizations:
            org_id = org["id"]
            published = await client.list_live_events(org_id)
            events = project_events(published, "list_live_events")
            logger.debug("organization_events_fetched", organization_id=org_id, count=len(events))
            all_events.extend(events)
    except EventFeedError as e:
        record_aggregation_failure(e.kind.value)
        logger.warning("events_aggregation_failed", kind=e.kind.value, error=e.message, status=e.status)
        raise

    record_aggregation(len(all_events))
    logger.info("events_aggregated", organizations=len(organizations), events=len(all_events))
    return all_events


async def get_event(client: EventbriteClient, event_id: str) -> Optional[dict[str, Any]]:
    """Raw expanded event, or None if Eventbrite does not know it."""
    event = await client.get_event(event_id)
    if event is None:
        logger.info("event_not_found", event_id=event_id)
    return event
