"""
One-shot provisioning of a demo event with a paid VIP ticket class.

Steps:
  1. Resolve the principal's organizations (configuration error if none)
  2. Reuse EVENT_ID when configured, otherwise create a demo event in the
     first organization starting in 15 minutes
  3. Create the "VIP" inventory tier
  4. Create the "Vip section" ticket class bound to that tier
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from eventfeed.core.errors import EventFeedError
from eventfeed.core.logging import get_logger
from eventfeed.infrastructure.eventbrite_client import EventbriteClient
from eventfeed.services.event_service import extract_organizations

logger = get_logger(__name__)

DEMO_EVENT_NAME = "Coding With Ado MeetUP"
DEMO_EVENT_CURRENCY = "USD"
DEMO_START_DELAY = timedelta(minutes=15)
DEMO_END_DELAY = timedelta(minutes=30)


@dataclass
class SetupResult:
    event_id: str
    inventory_tier_id: str
    ticket_class: dict[str, Any]
    created_event: bool


def format_utc(moment: datetime) -> str:
    """Eventbrite wants UTC without fractional seconds: 2026-01-01T10:00:00Z"""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def extract_inventory_tier_id(payload: dict[str, Any]) -> str:
    tier_id = payload.get("inventory_tier_id")
    if tier_id is None and isinstance(payload.get("inventory_tier"), dict):
        tier_id = payload["inventory_tier"].get("id")
    if tier_id is None:
        raise EventFeedError.bad_payload("create_inventory_tier", payload)
    return str(tier_id)


async def run_setup_flow(
    client: EventbriteClient,
    existing_event_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> SetupResult:
    organizations = extract_organizations(await client.list_organizations())

    if existing_event_id:
        event_id = existing_event_id
        logger.info("setup_event_reused", event_id=event_id)
    else:
        now = now or datetime.now(timezone.utc)
        created = await client.create_event(
            organizations[0]["id"],
            DEMO_EVENT_NAME,
            format_utc(now + DEMO_START_DELAY),
            format_utc(now + DEMO_END_DELAY),
            DEMO_EVENT_CURRENCY,
        )
        if not created.get("id"):
            raise EventFeedError.bad_payload("create_event", created)
        event_id = str(created["id"])
        logger.info("setup_event_created", event_id=event_id, organization_id=organizations[0]["id"])

    tier = await client.create_inventory_tier(event_id)
    tier_id = extract_inventory_tier_id(tier)
    logger.info("setup_inventory_tier_created", event_id=event_id, inventory_tier_id=tier_id)

    ticket_class = await client.create_ticket_class(event_id, tier_id)
    logger.info(
        "setup_ticket_class_created",
        event_id=event_id,
        inventory_tier_id=tier_id,
        ticket_class_id=ticket_class.get("id"),
    )

    return SetupResult(
        event_id=event_id,
        inventory_tier_id=tier_id,
        ticket_class=ticket_class,
        created_event=not existing_event_id,
    )
