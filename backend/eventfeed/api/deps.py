"""
FastAPI dependencies shared by the route modules.
"""

from eventfeed.core.config import get_settings
from eventfeed.infrastructure.eventbrite_client import EventbriteClient
from eventfeed.infrastructure.http_client import get_http_client


async def get_eventbrite_client() -> EventbriteClient:
    """Eventbrite client bound to the shared HTTP client and the configured token."""
    settings = get_settings()
    return EventbriteClient(
        await get_http_client(),
        api_key=settings.API_KEY,
        base_url=settings.EVENTBRITE_API_BASE,
    )
