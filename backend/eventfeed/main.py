"""
Eventbrite Event Feed - Main Application Entry Point

A thin proxy in front of the Eventbrite API:
- Flattens live events of every organization the token owns
- Single event lookup with expanded organizer/venue/category
- Serves the static listing pages and their assets
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventfeed.api.exception_handlers import register_exception_handlers
from eventfeed.api.middleware import RequestLoggingMiddleware
from eventfeed.api.router import api_router
from eventfeed.core.config import get_settings
from eventfeed.core.logging import get_logger, setup_logging
from eventfeed.core.metrics import metrics_endpoint
from eventfeed.infrastructure.http_client import close_http_client, get_http_client

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        eventbrite_api=settings.EVENTBRITE_API_BASE,
    )
    if not settings.API_KEY:
        logger.warning("api_key_missing", message="Eventbrite will reject every call")

    await get_http_client()

    yield

    await close_http_client()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Live Eventbrite events of all organizations owned by the API token",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe. Does not call Eventbrite."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "api_key_configured": bool(settings.API_KEY),
    }


@app.get("/metrics", include_in_schema=False)
def metrics():
    return metrics_endpoint()
