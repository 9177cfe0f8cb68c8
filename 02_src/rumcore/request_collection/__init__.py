"""Request collection module."""

from .collection import (
    RequestObservable,
    get_trace_id,
    is_collecting,
    normalize_url,
    start_request_collection,
    stop_request_collection,
)
from .tracker import IRequestTracker, RequestTracker

__all__ = [
    "RequestObservable",
    "start_request_collection",
    "stop_request_collection",
    "is_collecting",
    "normalize_url",
    "get_trace_id",
    "IRequestTracker",
    "RequestTracker",
]
