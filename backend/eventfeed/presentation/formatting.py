"""
Display formatting for projected events.

Every function here is total: missing or malformed input yields a
placeholder string, never an exception. Timestamps are read from the
``local`` member of an event's ``start``/``end`` object.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, NamedTuple, Optional
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape

DATE_TBD = "Date TBD"
TIME_TBD = "TBD"
TIME_RANGE_TBD = "Time TBD"
LOCATION_TBD = "Location TBD"
NO_DESCRIPTION = "No description available."
UNTITLED_EVENT = "Untitled Event"
DEFAULT_HOST = "Event Organizer"
DEFAULT_IMAGE = (
    "https://images.unsplash.com/photo-1441974231531-c6227db76b6e"
    "?auto=format&fit=crop&w=900&q=60"
)
PREVIEW_WORD_LIMIT = 30

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

TAG_RE = re.compile(r"<[^>]*>")

_templates = Environment(
    loader=FileSystemLoader(Path(__file__).resolve().parent / "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class DateParts(NamedTuple):
    day: str
    month: str
    year: str


PLACEHOLDER_DATE_PARTS = DateParts(day="--", month="---", year="----")


class DescriptionPreview(NamedTuple):
    text: str
    truncated: bool


@dataclass
class Tile:
    name: str
    url: str
    detail_url: str
    image: str
    host: str
    date: str
    date_parts: DateParts
    time_range: str
    location: str
    description: DescriptionPreview
    ticket_info: str


def _get(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def parse_local_time(event_time: Any) -> Optional[datetime]:
    """Naive local datetime from ``{"local": ...}``, or None."""
    local = _get(event_time, "local")
    if not local or not isinstance(local, str):
        return None
    try:
        parsed = datetime.fromisoformat(local)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except (ValueError, OverflowError):
            return None
    return parsed


def format_date(event_time: Any) -> str:
    parsed = parse_local_time(event_time)
    if parsed is None:
        return DATE_TBD
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_date_parts(event_time: Any) -> DateParts:
    parsed = parse_local_time(event_time)
    if parsed is None:
        return PLACEHOLDER_DATE_PARTS
    return DateParts(
        day=f"{parsed.day:02d}",
        month=MONTH_NAMES[parsed.month - 1][:3],
        year=f"{parsed.year:04d}",
    )


def format_time(event_time: Any) -> str:
    """12-hour clock, zero padded, lowercase suffix: ``07:30pm``."""
    parsed = parse_local_time(event_time)
    if parsed is None:
        return TIME_TBD
    hour = parsed.hour % 12 or 12
    suffix = "am" if parsed.hour < 12 else "pm"
    return f"{hour:02d}:{parsed.minute:02d}{suffix}"


def format_time_range(start: Any, end: Any) -> str:
    start_time = format_time(start)
    end_time = format_time(end)
    if start_time == TIME_TBD and end_time == TIME_TBD:
        return TIME_RANGE_TBD
    if end_time == TIME_TBD:
        return start_time
    return f"{start_time} - {end_time}"


def format_location(venue: Any) -> str:
    address = _get(venue, "address")
    if not isinstance(address, dict):
        return LOCATION_TBD
    parts = [
        str(address[key])
        for key in ("city", "region", "country")
        if address.get(key)
    ]
    return ", ".join(parts) if parts else LOCATION_TBD


def description_preview(event: dict[str, Any]) -> DescriptionPreview:
    """Tag-stripped summary or description, cut to the first 30 words."""
    description = event.get("description")
    if isinstance(description, str):
        raw = event.get("summary") or description
    else:
        raw = (
            event.get("summary")
            or _get(description, "text")
            or _get(description, "html")
            or ""
        )
    if not isinstance(raw, str):
        raw = ""

    text = TAG_RE.sub("", raw).strip()
    if not text:
        return DescriptionPreview(NO_DESCRIPTION, False)

    words = text.split()
    if len(words) <= PREVIEW_WORD_LIMIT:
        return DescriptionPreview(text, False)
    return DescriptionPreview(" ".join(words[:PREVIEW_WORD_LIMIT]) + "...", True)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_ticket_info(event: dict[str, Any]) -> str:
    capacity = event.get("capacity")
    suffix = ""
    if _is_finite_number(capacity):
        if isinstance(capacity, float) and capacity.is_integer():
            capacity = int(capacity)
        suffix = f" · Capacity {capacity}"

    is_free = event.get("is_free")
    if is_free is True:
        return f"Tickets: Free RSVP{suffix}"
    if is_free is False:
        return f"Tickets: Paid{suffix}"
    return f"Tickets: Info TBD{suffix}"


def build_tile(event: dict[str, Any]) -> Tile:
    logo = event.get("logo")
    organizer = event.get("organizer")
    event_id = event.get("id")

    return Tile(
        name=event.get("name") or UNTITLED_EVENT,
        url=event.get("url") or "#",
        detail_url="event-single.html?eventId=" + quote(str(event_id or ""), safe=""),
        image=(
            _get(logo, "url")
            or _get(_get(logo, "original"), "url")
            or DEFAULT_IMAGE
        ),
        host=(
            _get(organizer, "name")
            or event.get("organizer_name")
            or _get(event.get("organization"), "name")
            or DEFAULT_HOST
        ),
        date=format_date(event.get("start")),
        date_parts=format_date_parts(event.get("start")),
        time_range=format_time_range(event.get("start"), event.get("end")),
        location=format_location(event.get("venue")),
        description=description_preview(event),
        ticket_info=format_ticket_info(event),
    )


def render_tile(tile: Tile) -> str:
    return _templates.get_template("tile.html").render(tile=tile)
