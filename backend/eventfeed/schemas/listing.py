"""
Pydantic schemas for the rendered listing consumed by the browser shell.
"""

from pydantic import BaseModel


class BucketResponse(BaseModel):
    tiles: list[str]
    visible: int
    total: int
    has_more: bool
    empty_message: str


class ListingResponse(BaseModel):
    upcoming: BucketResponse
    past: BucketResponse
    page_size: int
    poll_seconds: int
