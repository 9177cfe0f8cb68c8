"""ActivityCorrelator: folds page signals into a busy/idle stream."""

from typing import Any

from ..lifecycle import ILifeCycle, LifeCycleEventType
from ..logging_config import get_logger
from ..models import ActivityChange, PerformanceEntry, RequestEvent
from ..observable import Observable, Subscription

logger = get_logger(__name__)


class ActivityCorrelator:
    """Tracks pending requests and reports every activity signal.

    Signals: DOM mutations, "resource" performance entries, request start and
    end. Each signal produces one ActivityChange whose is_busy tells whether a
    request is still pending. A request END is reported only when its START was
    seen by this correlator. No timers here; timing policy belongs to the
    InteractionDetector.
    """

    def __init__(self, lifecycle: ILifeCycle):
        self._lifecycle = lifecycle
        self._pending_requests: set[str] = set()
        self._subscriptions: list[Subscription] = []
        self.observable: Observable[ActivityChange] = Observable()

    @property
    def is_busy(self) -> bool:
        return len(self._pending_requests) > 0

    @property
    def pending_request_count(self) -> int:
        return len(self._pending_requests)

    def start(self) -> None:
        """Subscribe to activity signals on the LifeCycle."""
        if self._subscriptions:
            return
        self._subscriptions = [
            self._lifecycle.subscribe(
                LifeCycleEventType.DOM_MUTATED, self._handle_dom_mutated
            ),
            self._lifecycle.subscribe(
                LifeCycleEventType.PERFORMANCE_ENTRY_COLLECTED,
                self._handle_performance_entry,
            ),
            self._lifecycle.subscribe(
                LifeCycleEventType.REQUEST_STARTED, self._handle_request_started
            ),
            self._lifecycle.subscribe(
                LifeCycleEventType.REQUEST_COMPLETED, self._handle_request_completed
            ),
        ]

    def stop(self) -> None:
        """Unsubscribe from the LifeCycle."""
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    def _handle_dom_mutated(self, _: Any = None) -> None:
        self._notify_change("dom_mutated")

    def _handle_performance_entry(self, entry: PerformanceEntry) -> None:
        if entry.entry_type != "resource":
            return

        details = []
        initiator_type = getattr(entry, "initiator_type", None)
        if initiator_type:
            details.append(f"initiatorType: {initiator_type}")
        if entry.name:
            details.append(f"name: {entry.name}")
        self._notify_change("performance_entry_collected", details)

    def _handle_request_started(self, event: RequestEvent) -> None:
        self._pending_requests.add(event.request_id)
        self._notify_change("request_start", [f"Url: {event.details.url}"])

    def _handle_request_completed(self, event: RequestEvent) -> None:
        if event.request_id not in self._pending_requests:
            # Started before this correlator attached
            return
        self._pending_requests.discard(event.request_id)
        self._notify_change("request_end", [f"Url: {event.details.url}"])

    def _notify_change(self, reason: str, details: list[str] | None = None) -> None:
        change = ActivityChange(is_busy=self.is_busy, reason=reason, details=details)
        logger.debug(
            "Activity %s (busy=%s, pending=%d)",
            reason,
            change.is_busy,
            len(self._pending_requests),
        )
        self.observable.notify(change)
