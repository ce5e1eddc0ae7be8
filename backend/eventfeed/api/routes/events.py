"""
Event endpoints: the flattened live-event list, a single event lookup and
the rendered listing used by the browser shell.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from eventfeed.api.deps import get_eventbrite_client
from eventfeed.core.errors import EventFeedError
from eventfeed.infrastructure.eventbrite_client import EventbriteClient
from eventfeed.presentation.formatting import render_tile
from eventfeed.presentation.listing import DISPLAY_LIMIT, POLL_SECONDS, BucketView, ListingState, render_listing
from eventfeed.schemas.event import EventDetailResponse, EventListResponse, ErrorResponse
from eventfeed.schemas.listing import BucketResponse, ListingResponse
from eventfeed.services.event_service import get_event, list_published_events

router = APIRouter(tags=["Events"])

UPSTREAM_ERRORS = {502: {"model": ErrorResponse, "description": "Eventbrite call failed"}}


@router.get("/events", response_model=EventListResponse, responses=UPSTREAM_ERRORS)
async def list_events_endpoint(client: EventbriteClient = Depends(get_eventbrite_client)):
    """
    Live events of every organization the API token owns.
    Fields Eventbrite did not send are left out rather than nulled.
    """
    events = await list_published_events(client)
    return JSONResponse({"events": [event.to_json() for event in events]})


@router.get(
    "/event",
    response_model=EventDetailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "eventId missing"},
        404: {"model": ErrorResponse, "description": "Unknown event"},
        **UPSTREAM_ERRORS,
    },
)
async def get_event_endpoint(
    event_id: Optional[str] = Query(None, alias="eventId"),
    client: EventbriteClient = Depends(get_eventbrite_client),
):
    """Single event with organizer, venue, logo and categories expanded."""
    if not event_id:
        raise EventFeedError.bad_request("Missing eventId")

    event = await get_event(client, event_id)
    if event is None:
        raise EventFeedError.not_found("Event not found")
    return {"event": event}


def _bucket_response(bucket: BucketView) -> BucketResponse:
    return BucketResponse(
        tiles=[render_tile(tile) for tile in bucket.tiles],
        visible=bucket.visible,
        total=bucket.total,
        has_more=bucket.has_more,
        empty_message=bucket.empty_message,
    )


@router.get("/events/listing", response_model=ListingResponse, responses=UPSTREAM_ERRORS)
async def events_listing_endpoint(
    upcoming: int = Query(DISPLAY_LIMIT, ge=1),
    past: int = Query(DISPLAY_LIMIT, ge=1),
    client: EventbriteClient = Depends(get_eventbrite_client),
):
    """
    Same events as /events, split into upcoming and past and rendered as tiles.
    Every tile is returned; ``visible`` tells the page how many to show so
    "load more" can reveal the next ones without another request.
    """
    events = await list_published_events(client)
    listing = render_listing(
        [event.to_json() for event in events],
        ListingState(upcoming_visible=upcoming, past_visible=past),
    )
    return ListingResponse(
        upcoming=_bucket_response(listing.upcoming),
        past=_bucket_response(listing.past),
        page_size=DISPLAY_LIMIT,
        poll_seconds=POLL_SECONDS,
    )
