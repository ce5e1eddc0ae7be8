"""
Pydantic schemas for the event payloads served to the browser.
"""

from typing import Any

from pydantic import BaseModel

# Copied verbatim from the Eventbrite record; `name` is flattened separately.
PASSTHROUGH_FIELDS = (
    "id",
    "url",
    "status",
    "start",
    "end",
    "organization_id",
    "logo",
    "description",
    "summary",
    "venue",
    "organizer",
    "is_free",
    "capacity",
)


class ProjectedEvent(BaseModel):
    """
    Fixed subset of an Eventbrite event.

    Values are copied as Eventbrite sent them, without validation or
    coercion. Only fields present on the remote record are set, so
    serializing with ``exclude_unset=True`` drops absent fields instead of
    emitting defaults.
    """

    id: Any = None
    name: Any = None
    url: Any = None
    status: Any = None
    start: Any = None
    end: Any = None
    organization_id: Any = None
    logo: Any = None
    description: Any = None
    summary: Any = None
    venue: Any = None
    organizer: Any = None
    is_free: Any = None
    capacity: Any = None

    @classmethod
    def from_remote(cls, raw: dict[str, Any]) -> "ProjectedEvent":
        data = {field: raw[field] for field in PASSTHROUGH_FIELDS if field in raw}
        name = raw.get("name")
        if isinstance(name, dict) and "text" in name:
            data["name"] = name["text"]
        return cls.model_validate(data)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class EventListResponse(BaseModel):
    events: list[ProjectedEvent]


class EventDetailResponse(BaseModel):
    event: dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
    details: Any = None
