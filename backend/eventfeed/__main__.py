"""
Command line entry point.

    python -m eventfeed            # runs MODE from the environment (server by default)
    python -m eventfeed serve      # HTTP server
    python -m eventfeed setup      # one-shot demo event provisioning
"""

import argparse
import asyncio
from typing import Optional

from eventfeed.core.config import get_settings
from eventfeed.core.errors import EventFeedError
from eventfeed.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def cmd_serve(host: str, port: int) -> None:
    import uvicorn

    logger.info("server_listening", url=f"http://localhost:{port}")
    uvicorn.run("eventfeed.main:app", host=host, port=port, log_config=None)


async def _setup(event_id: Optional[str]):
    from eventfeed.api.deps import get_eventbrite_client
    from eventfeed.infrastructure.http_client import close_http_client
    from eventfeed.services.setup_service import run_setup_flow

    try:
        client = await get_eventbrite_client()
        return await run_setup_flow(client, existing_event_id=event_id)
    finally:
        await close_http_client()


def cmd_setup(event_id: Optional[str]) -> int:
    try:
        result = asyncio.run(_setup(event_id))
    except EventFeedError as e:
        logger.error("setup_failed", kind=e.kind.value, error=e.message, status=e.status, details=e.payload)
        return 1

    logger.info(
        "setup_completed",
        event_id=result.event_id,
        inventory_tier_id=result.inventory_tier_id,
        created_event=result.created_event,
    )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    settings = get_settings()

    p = argparse.ArgumentParser(prog="eventfeed", description="Eventbrite event feed")
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("serve", help="Run the HTTP server")
    sp.add_argument("--host", default=settings.HOST)
    sp.add_argument("--port", type=int, default=settings.PORT)

    st = sub.add_parser("setup", help="Provision a demo event with a VIP ticket class")
    st.add_argument("--event-id", default=settings.EVENT_ID,
                    help="Reuse this event instead of creating one (default: EVENT_ID)")

    args = p.parse_args(argv)
    cmd = args.cmd or settings.MODE

    setup_logging()

    if cmd == "setup":
        return cmd_setup(getattr(args, "event_id", settings.EVENT_ID))

    cmd_serve(getattr(args, "host", settings.HOST), getattr(args, "port", settings.PORT))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
