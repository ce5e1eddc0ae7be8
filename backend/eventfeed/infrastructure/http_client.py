"""
Process-wide httpx client for outbound calls.
Opened lazily, closed by the application lifespan.
"""

from typing import Optional

import httpx

from eventfeed.core.config import get_settings
from eventfeed.core.logging import get_logger

logger = get_logger(__name__)

_http_client: Optional[httpx.AsyncClient] = None


async def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared AsyncClient."""
    global _http_client

    if _http_client is None or _http_client.is_closed:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT,
            headers={"Accept": "application/json"},
        )
        logger.info("http_client_opened", timeout=settings.HTTP_TIMEOUT)

    return _http_client


async def close_http_client() -> None:
    """Close the shared client on shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
        logger.info("http_client_closed")
