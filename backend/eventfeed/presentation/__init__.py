from eventfeed.presentation.formatting import build_tile, render_tile
from eventfeed.presentation.listing import (
    DISPLAY_LIMIT,
    POLL_SECONDS,
    ListingState,
    render_listing,
    split_buckets,
)

__all__ = [
    "build_tile", "render_tile",
    "DISPLAY_LIMIT", "POLL_SECONDS", "ListingState", "render_listing", "split_buckets",
]
