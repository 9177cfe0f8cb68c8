"""Instrumentation of the httpx clients.

Both entry points are replaced by reference on their classes:

- ``httpx.AsyncClient.send`` is tracked as a FETCH request,
- ``httpx.Client.send`` is tracked as an XHR request.

Every call publishes a START event before the original send runs and exactly
one END event once it returns or raises. Failures, cancellation included, are
reported with status 0 and the exception is re-raised untouched, so callers observe
the same behavior as without instrumentation.
"""

import functools
import sys
import uuid
from dataclasses import dataclass
from typing import Callable
from urllib.parse import urljoin

import httpx

from ..config import DEFAULT_DOCUMENT_ORIGIN
from ..internal_monitoring import monitor
from ..logging_config import get_logger
from ..models import RequestDetails, RequestEvent, RequestEventKind, RequestType
from ..observable import Observable
from ..timing import monotonic_ms

logger = get_logger(__name__)

RequestObservable = Observable[RequestEvent]


@dataclass
class _PendingRequest:
    request_id: str
    type: RequestType
    method: str
    url: str
    start_time: float
    trace_id: int | None


class _RequestInstrumentation:
    """Process-wide state of the installed wrappers."""

    def __init__(self, origin: str, clock: Callable[[], float]):
        self.observable: RequestObservable = Observable()
        self.origin = origin
        self.clock = clock
        self.original_sync_send = httpx.Client.send
        self.original_async_send = httpx.AsyncClient.send

    @monitor
    def start(self, request_type: RequestType, request: httpx.Request) -> _PendingRequest:
        pending = _PendingRequest(
            request_id=str(uuid.uuid4()),
            type=request_type,
            method=request.method,
            url=normalize_url(str(request.url), self.origin),
            start_time=self.clock(),
            trace_id=get_trace_id(),
        )
        self._publish(
            RequestEvent(
                request_id=pending.request_id,
                kind=RequestEventKind.START,
                details=self._details(pending, duration=0),
            )
        )
        return pending

    @monitor
    def complete(self, pending: _PendingRequest | None, response: httpx.Response) -> None:
        if pending is None:
            return
        details = self._details(pending, duration=self.clock() - pending.start_time)
        details.status = response.status_code
        details.response = _read_response(response)
        self._publish(RequestEvent(pending.request_id, RequestEventKind.END, details))

    @monitor
    def fail(self, pending: _PendingRequest | None, error: BaseException) -> None:
        if pending is None:
            return
        details = self._details(pending, duration=self.clock() - pending.start_time)
        details.status = 0
        details.response = f"{type(error).__name__}: {error}"
        self._publish(RequestEvent(pending.request_id, RequestEventKind.END, details))

    @monitor
    def _publish(self, event: RequestEvent) -> None:
        self.observable.notify(event)

    @staticmethod
    def _details(pending: _PendingRequest, duration: float) -> RequestDetails:
        return RequestDetails(
            type=pending.type,
            method=pending.method,
            url=pending.url,
            start_time=pending.start_time,
            duration=duration,
            trace_id=pending.trace_id,
        )


_instrumentation: _RequestInstrumentation | None = None


def start_request_collection(
    origin: str = DEFAULT_DOCUMENT_ORIGIN,
    clock: Callable[[], float] = monotonic_ms,
) -> RequestObservable:
    """Install the client wrappers once and return the shared request observable.

    Later calls return the same observable; origin and clock of the first call win.
    """
    global _instrumentation
    if _instrumentation is None:
        _instrumentation = _RequestInstrumentation(origin, clock)
        track_sync_client(_instrumentation)
        track_async_client(_instrumentation)
        logger.info("Request collection installed (origin=%s)", origin)
    return _instrumentation.observable


def stop_request_collection() -> None:
    """Restore the original client entry points."""
    global _instrumentation
    if _instrumentation is None:
        return
    httpx.Client.send = _instrumentation.original_sync_send
    httpx.AsyncClient.send = _instrumentation.original_async_send
    _instrumentation = None
    logger.info("Request collection removed")


def is_collecting() -> bool:
    return _instrumentation is not None


def track_sync_client(instrumentation: _RequestInstrumentation) -> None:
    original_send = instrumentation.original_sync_send

    @functools.wraps(original_send)
    def send(client, request, *args, **kwargs):
        pending = instrumentation.start(RequestType.XHR, request)
        try:
            response = original_send(client, request, *args, **kwargs)
        except BaseException as exc:
            instrumentation.fail(pending, exc)
            raise
        instrumentation.complete(pending, response)
        return response

    httpx.Client.send = send


def track_async_client(instrumentation: _RequestInstrumentation) -> None:
    original_send = instrumentation.original_async_send

    @functools.wraps(original_send)
    async def send(client, request, *args, **kwargs):
        pending = instrumentation.start(RequestType.FETCH, request)
        try:
            response = await original_send(client, request, *args, **kwargs)
        except BaseException as exc:
            instrumentation.fail(pending, exc)
            raise
        instrumentation.complete(pending, response)
        return response

    httpx.AsyncClient.send = send


def _read_response(response: httpx.Response) -> str:
    # Streamed responses are left unread for the caller
    try:
        return response.text
    except Exception as e:
        return f"Unable to retrieve response: {e}"


def normalize_url(url: str, origin: str = DEFAULT_DOCUMENT_ORIGIN) -> str:
    """Resolve url against the document origin."""
    return urljoin(origin, url)


def get_trace_id() -> int | None:
    """Trace id of the active ddtrace span, if the host runs ddtrace.

    The agent never imports ddtrace itself; it only looks at a tracer the
    host already loaded.
    """
    ddtrace = sys.modules.get("ddtrace")
    tracer = getattr(ddtrace, "tracer", None)
    current_span = getattr(tracer, "current_span", None)
    if not callable(current_span):
        return None
    try:
        span = current_span()
    except Exception:
        logger.debug("Trace id probe failed", exc_info=True)
        return None
    return getattr(span, "trace_id", None) if span is not None else None
