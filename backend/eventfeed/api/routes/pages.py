"""
Static pages and assets.

Assets under /css, /js, /images and /fonts resolve inside STATIC_DIR. A path
that resolves outside it is refused with 403 whether or not the file exists.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse, Response

from eventfeed.core.config import get_settings
from eventfeed.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(include_in_schema=False)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
ASSET_PREFIXES = ("css", "js", "images", "fonts")

CONTENT_TYPES = {
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".ico": "image/x-icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
    ".map": "application/json; charset=utf-8",
}


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_asset(root: Path, relative: str) -> Optional[Path]:
    """Absolute path of ``relative`` under ``root``, or None if it escapes the root."""
    root = root.resolve()
    candidate = (root / relative).resolve()
    if not candidate.is_relative_to(root):
        return None
    return candidate


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("Not Found", status_code=404)


def _page(name: str) -> Response:
    path = get_settings().STATIC_DIR / name
    if not path.is_file():
        logger.error("page_missing", page=name, static_dir=str(path.parent))
        return _not_found()
    return FileResponse(path, media_type=HTML_CONTENT_TYPE)


@router.get("/")
@router.get("/index.html")
async def index_page():
    return _page("index.html")


@router.get("/event-single.html")
async def event_single_page():
    return _page("event-single.html")


def asset_response(relative: str) -> Response:
    try:
        path = resolve_asset(get_settings().STATIC_DIR, relative)
    except (OSError, ValueError):
        return _not_found()

    if path is None:
        logger.warning("asset_path_rejected", asset=relative)
        return PlainTextResponse("Forbidden", status_code=403)
    if not path.is_file():
        return _not_found()
    return FileResponse(path, media_type=content_type_for(path))


def _asset_endpoint(prefix: str):
    async def serve_asset(asset_path: str):
        return asset_response(f"{prefix}/{asset_path}")

    serve_asset.__name__ = f"serve_{prefix}_asset"
    return serve_asset


for _prefix in ASSET_PREFIXES:
    router.add_api_route(f"/{_prefix}/{{asset_path:path}}", _asset_endpoint(_prefix), methods=["GET"])
