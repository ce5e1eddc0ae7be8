from eventfeed.schemas.event import (
    EventDetailResponse,
    EventListResponse,
    ErrorResponse,
    ProjectedEvent,
)
from eventfeed.schemas.listing import BucketResponse, ListingResponse

__all__ = [
    "ProjectedEvent", "EventListResponse", "EventDetailResponse", "ErrorResponse",
    "BucketResponse", "ListingResponse",
]
