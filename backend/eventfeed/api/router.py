"""
Central router that aggregates all route modules.
"""

from fastapi import APIRouter

from eventfeed.api.routes import events, pages

api_router = APIRouter()
api_router.include_router(events.router)
api_router.include_router(pages.router)
