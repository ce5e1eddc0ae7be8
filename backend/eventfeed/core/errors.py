"""Uniform error type shared by the Eventbrite client, the services and the API."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

NO_ORGANIZATIONS_MESSAGE = "No organizations returned; check auth token and API response."


class ErrorKind(Enum):
    """Error variants."""

    UPSTREAM_HTTP = "UPSTREAM_HTTP"
    UPSTREAM_UNREACHABLE = "UPSTREAM_UNREACHABLE"
    BAD_PAYLOAD = "BAD_PAYLOAD"
    CONFIG = "CONFIG"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"


CLIENT_KINDS = frozenset({ErrorKind.NOT_FOUND, ErrorKind.BAD_REQUEST})


@dataclass(eq=False)
class EventFeedError(Exception):
    """Tagged error carrying an optional upstream status and payload.

    Every failure the rest of the system observes is one of these; the
    variant is in ``kind``. Build instances with the classmethods below.
    """

    kind: ErrorKind
    message: str
    status: Optional[int] = None
    payload: Any = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def upstream_http(cls, context: str, status: int, payload: Any = None) -> "EventFeedError":
        return cls(ErrorKind.UPSTREAM_HTTP, f"{context} failed (status {status})", status, payload)

    @classmethod
    def upstream_unreachable(cls, context: str) -> "EventFeedError":
        return cls(ErrorKind.UPSTREAM_UNREACHABLE, f"{context} failed (no response)")

    @classmethod
    def bad_payload(cls, context: str, payload: Any = None) -> "EventFeedError":
        return cls(ErrorKind.BAD_PAYLOAD, f"{context} failed (unexpected payload)", payload=payload)

    @classmethod
    def config(cls, message: str = NO_ORGANIZATIONS_MESSAGE) -> "EventFeedError":
        return cls(ErrorKind.CONFIG, message)

    @classmethod
    def not_found(cls, message: str) -> "EventFeedError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def bad_request(cls, message: str) -> "EventFeedError":
        return cls(ErrorKind.BAD_REQUEST, message)

    @property
    def is_client_error(self) -> bool:
        return self.kind in CLIENT_KINDS

    @property
    def http_status(self) -> int:
        """Status to answer with: fixed for client kinds, upstream status or 502 otherwise."""
        if self.kind is ErrorKind.NOT_FOUND:
            return 404
        if self.kind is ErrorKind.BAD_REQUEST:
            return 400
        if isinstance(self.status, int) and 400 <= self.status <= 599:
            return self.status
        return 502

    def to_body(self) -> dict:
        if self.is_client_error:
            return {"error": self.message}
        return {"error": self.message, "details": self.payload}
