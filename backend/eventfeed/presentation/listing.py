"""
Upcoming/past bucketing and "load more" pagination for the event listing.

The visible count per bucket lives in an immutable ``ListingState`` that the
caller owns and passes to ``render_listing``. Re-rendering a fresh event list
with the same state keeps the reader's position; loading more never needs a
new fetch.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Optional

from eventfeed.presentation.formatting import Tile, build_tile, parse_local_time

DISPLAY_LIMIT = 3
POLL_SECONDS = 60

UPCOMING = "upcoming"
PAST = "past"

EMPTY_MESSAGES = {
    UPCOMING: "No upcoming Events",
    PAST: "No past events yet.",
}


def split_buckets(
    events: Iterable[dict[str, Any]], now: datetime
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """(upcoming, past). Events without a readable start count as upcoming."""
    upcoming, past = [], []
    for event in events:
        start = parse_local_time(event.get("start"))
        if start is None or start >= now:
            upcoming.append(event)
        else:
            past.append(event)
    return upcoming, past


@dataclass(frozen=True)
class ListingState:
    upcoming_visible: int = DISPLAY_LIMIT
    past_visible: int = DISPLAY_LIMIT

    def visible(self, bucket: str) -> int:
        if bucket == UPCOMING:
            return self.upcoming_visible
        if bucket == PAST:
            return self.past_visible
        raise ValueError(f"unknown bucket: {bucket}")

    def load_more(self, bucket: str) -> "ListingState":
        if bucket == UPCOMING:
            return replace(self, upcoming_visible=self.upcoming_visible + DISPLAY_LIMIT)
        if bucket == PAST:
            return replace(self, past_visible=self.past_visible + DISPLAY_LIMIT)
        raise ValueError(f"unknown bucket: {bucket}")


@dataclass
class BucketView:
    name: str
    visible: int
    tiles: list[Tile] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.tiles)

    @property
    def has_more(self) -> bool:
        return self.visible < self.total

    @property
    def visible_tiles(self) -> list[Tile]:
        return self.tiles[: self.visible]

    @property
    def empty_message(self) -> str:
        return EMPTY_MESSAGES[self.name]


@dataclass
class Listing:
    upcoming: BucketView
    past: BucketView


def render_listing(
    events: Iterable[dict[str, Any]],
    state: ListingState = ListingState(),
    now: Optional[datetime] = None,
) -> Listing:
    upcoming, past = split_buckets(events, now or datetime.now())
    return Listing(
        upcoming=BucketView(UPCOMING, state.visible(UPCOMING), [build_tile(e) for e in upcoming]),
        past=BucketView(PAST, state.visible(PAST), [build_tile(e) for e in past]),
    )
