"""InteractionCollector: turns user inputs into interaction reports."""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..config import (
    DEFAULT_BUSY_DELAY_MS,
    DEFAULT_IDLE_DELAY_MS,
    DEFAULT_MAX_QUEUED_INPUTS,
)
from ..lifecycle import ILifeCycle, LifeCycleEventType
from ..logging_config import get_logger
from ..models import (
    InputEvent,
    InteractionContext,
    InteractionExtension,
    InteractionReport,
    InteractionReportName,
)
from ..observable import Subscription
from ..timing import AsyncioScheduler, IScheduler
from .content import get_element_as_string, get_element_content
from .detector import (
    InteractionDetector,
    InteractionLifecycleEvent,
    InteractionLifecycleKind,
)

logger = get_logger(__name__)


class OverlapPolicy(str, Enum):
    """What to do with a trigger that arrives while an interaction is open."""

    RACE = "race"  # open another independent interaction
    DROP = "drop"  # ignore the new trigger
    QUEUE = "queue"  # open it once the current one is resolved


@dataclass
class _Trigger:
    input_type: str
    element: str | None
    content: str | None
    last_reason: str | None = None
    last_details: list[str] | None = None


class IInteractionCollector(Protocol):
    """Detecting interactions from USER_INPUT events."""

    def start(self) -> None:
        """Subscribe to USER_INPUT."""
        ...

    def stop(self) -> None:
        """Unsubscribe and drop open interactions."""
        ...

    def handle_input(self, event: InputEvent) -> str | None:
        """Open an interaction for an input; return its id if opened."""
        ...


class InteractionCollector:
    """Opens an InteractionDetector per trigger and publishes its outcome."""

    def __init__(
        self,
        lifecycle: ILifeCycle,
        scheduler: IScheduler | None = None,
        busy_delay: float = DEFAULT_BUSY_DELAY_MS,
        idle_delay: float = DEFAULT_IDLE_DELAY_MS,
        overlap_policy: OverlapPolicy | str = OverlapPolicy.RACE,
        max_queued: int = DEFAULT_MAX_QUEUED_INPUTS,
    ):
        if busy_delay < 0 or idle_delay < 0:
            raise ValueError("busy_delay and idle_delay must be >= 0")
        if max_queued < 1:
            raise ValueError("max_queued must be >= 1")

        self._lifecycle = lifecycle
        self._scheduler = scheduler or AsyncioScheduler()
        self._busy_delay = busy_delay
        self._idle_delay = idle_delay
        self._overlap_policy = OverlapPolicy(overlap_policy)
        self._max_queued = max_queued
        self._subscription: Subscription | None = None
        self._active: dict[str, InteractionDetector] = {}
        self._queued: deque[InputEvent] = deque()

    @property
    def active_interaction_ids(self) -> list[str]:
        return list(self._active)

    @property
    def queued_count(self) -> int:
        return len(self._queued)

    def start(self) -> None:
        """Subscribe to USER_INPUT."""
        if self._subscription is None:
            self._subscription = self._lifecycle.subscribe(
                LifeCycleEventType.USER_INPUT, self.handle_input
            )

    def stop(self) -> None:
        """Unsubscribe and drop open interactions without reporting them."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for detector in list(self._active.values()):
            detector.dispose()
        self._active.clear()
        self._queued.clear()

    def handle_input(self, event: InputEvent) -> str | None:
        """Open an interaction for an input; return its id if opened."""
        if self._active and self._overlap_policy is OverlapPolicy.DROP:
            logger.debug("Input %s dropped: interaction already open", event.type)
            return None
        if self._active and self._overlap_policy is OverlapPolicy.QUEUE:
            if len(self._queued) >= self._max_queued:
                logger.warning(
                    "Input %s dropped: %d inputs already queued", event.type, len(self._queued)
                )
                return None
            self._queued.append(event)
            return None
        return self._open(event)

    def _open(self, event: InputEvent) -> str:
        trigger = _Trigger(input_type=event.type, element=None, content=None)
        if event.target is not None:
            trigger.element = get_element_as_string(event.target) or None
            trigger.content = get_element_content(event.target)

        detector = InteractionDetector(
            self._lifecycle,
            self._scheduler,
            busy_delay=self._busy_delay,
            idle_delay=self._idle_delay,
        )
        self._active[detector.id] = detector
        detector.observable.subscribe(
            lambda lifecycle_event: self._handle_lifecycle_event(
                detector, trigger, lifecycle_event
            )
        )
        detector.start()
        return detector.id

    def _handle_lifecycle_event(
        self,
        detector: InteractionDetector,
        trigger: _Trigger,
        event: InteractionLifecycleEvent,
    ) -> None:
        if event.kind is InteractionLifecycleKind.EXTENDED:
            trigger.last_reason = event.reason
            trigger.last_details = event.details
            self._lifecycle.notify(
                LifeCycleEventType.INTERACTION_EXTENDED,
                InteractionExtension(
                    interaction_id=event.id,
                    time=event.time,
                    elapsed=event.elapsed,
                    reason=event.reason,
                    details=event.details,
                ),
            )
            return

        self._active.pop(detector.id, None)
        if event.kind is InteractionLifecycleKind.ABORTED:
            report = InteractionReport(
                name=InteractionReportName.IGNORED,
                interaction_id=event.id,
                start_time=detector.start_time,
                context=InteractionContext(
                    element=trigger.element, content=trigger.content
                ),
                input_type=trigger.input_type,
            )
        else:
            report = InteractionReport(
                name=InteractionReportName.COMPLETED,
                interaction_id=event.id,
                start_time=detector.start_time,
                duration=event.elapsed,
                context=InteractionContext(
                    element=trigger.element,
                    content=trigger.content,
                    reason=trigger.last_reason,
                    details=trigger.last_details,
                ),
                input_type=trigger.input_type,
            )
        logger.info(
            "Interaction %s %s",
            report.interaction_id,
            report.name.value,
            extra={"context": {"duration": report.duration, "content": trigger.content}},
        )
        self._lifecycle.notify(LifeCycleEventType.INTERACTION_COLLECTED, report)
        self._open_next_queued()

    def _open_next_queued(self) -> None:
        if self._overlap_policy is OverlapPolicy.QUEUE and self._queued and not self._active:
            self._open(self._queued.popleft())
