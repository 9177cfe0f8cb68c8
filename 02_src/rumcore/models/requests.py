"""Request lifecycle data models."""

from dataclasses import dataclass
from enum import Enum


class RequestType(str, Enum):
    """Network call mechanism that produced the request."""

    FETCH = "fetch"  # awaitable client
    XHR = "xhr"  # blocking client


class RequestEventKind(str, Enum):
    """Phase of a request."""

    START = "start"
    END = "end"


@dataclass
class RequestDetails:
    """Timing, status and correlation metadata of a single call."""

    type: RequestType
    method: str
    url: str  # normalized absolute URL
    start_time: float  # monotonic ms
    duration: float  # ms, 0 on START
    status: int | None = None  # 0 on network-level failure
    response: str | None = None  # body, or failure text
    response_type: str | None = None
    trace_id: int | None = None


@dataclass
class RequestEvent:
    """A START or END notification for one request_id."""

    request_id: str
    kind: RequestEventKind
    details: RequestDetails


def is_rejected(request: RequestDetails) -> bool:
    """Network-level failure that is not an intentionally opaque response."""
    return request.status == 0 and request.response_type != "opaque"


def is_server_error(request: RequestDetails) -> bool:
    return request.status is not None and request.status >= 500
