"""RequestTracker: forwards collected requests onto the LifeCycle."""

from typing import Protocol

from ..config import DEFAULT_DOCUMENT_ORIGIN
from ..lifecycle import ILifeCycle, LifeCycleEventType
from ..logging_config import get_logger
from ..models import RequestEvent, RequestEventKind
from ..observable import Subscription
from .collection import start_request_collection

logger = get_logger(__name__)


class IRequestTracker(Protocol):
    """Publishing request START/END events on the LifeCycle."""

    def start_collection(self) -> None:
        """Install interception (once) and start forwarding."""
        ...

    def stop_collection(self) -> None:
        """Stop forwarding."""
        ...


class RequestTracker:
    """Bridges the process-wide request observable onto one LifeCycle."""

    def __init__(self, lifecycle: ILifeCycle, origin: str = DEFAULT_DOCUMENT_ORIGIN):
        self._lifecycle = lifecycle
        self._origin = origin
        self._subscription: Subscription | None = None

    def start_collection(self) -> None:
        """Install interception (once) and start forwarding. Idempotent."""
        if self._subscription is not None:
            return
        observable = start_request_collection(self._origin)
        self._subscription = observable.subscribe(self._handle_request_event)

    def stop_collection(self) -> None:
        """Stop forwarding; interception stays installed."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _handle_request_event(self, event: RequestEvent) -> None:
        if event.kind is RequestEventKind.START:
            event_type = LifeCycleEventType.REQUEST_STARTED
        else:
            event_type = LifeCycleEventType.REQUEST_COMPLETED
            logger.debug(
                "Request %s %s finished with status %s in %.1f ms",
                event.details.method,
                event.details.url,
                event.details.status,
                event.details.duration,
            )
        self._lifecycle.notify(event_type, event)
