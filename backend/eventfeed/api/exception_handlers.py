"""
Translate errors into HTTP responses.

EventFeedError → JSON body with the status chosen by the error itself
Starlette HTTPException (unknown path, wrong method) → plain text
Anything else is left to RequestLoggingMiddleware, which answers 500.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventfeed.core.errors import EventFeedError
from eventfeed.core.logging import get_logger

logger = get_logger(__name__)


async def eventfeed_error_handler(request: Request, exc: EventFeedError) -> JSONResponse:
    status_code = exc.http_status
    if not exc.is_client_error:
        logger.warning(
            "upstream_error_response",
            kind=exc.kind.value,
            error=exc.message,
            upstream_status=exc.status,
            status_code=status_code,
        )
    return JSONResponse(exc.to_body(), status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EventFeedError, eventfeed_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
