"""InteractionDetector: per-interaction state machine.

An interaction opens on a trigger and then:

- is aborted when no activity arrives within ``busy_delay``,
- is extended by every activity signal while open,
- ends once ``idle_delay`` passes with no new activity and no pending request.

Exactly one of ABORTED or ENDED is emitted per interaction, and it is the last
event emitted for that id.
"""

import uuid
from dataclasses import dataclass
from enum import Enum

from ..activity import ActivityCorrelator
from ..config import DEFAULT_BUSY_DELAY_MS, DEFAULT_IDLE_DELAY_MS
from ..lifecycle import ILifeCycle
from ..logging_config import get_logger
from ..models import ActivityChange, InteractionState
from ..observable import Observable
from ..timing import IScheduler, ITimer

logger = get_logger(__name__)

_current_interaction_id: str | None = None


def get_current_interaction_id() -> str | None:
    """Id of the interaction that most recently saw activity, if still open."""
    return _current_interaction_id


def _set_current_interaction_id(interaction_id: str | None) -> None:
    global _current_interaction_id
    _current_interaction_id = interaction_id


def _release_current_interaction_id(interaction_id: str) -> None:
    global _current_interaction_id
    if _current_interaction_id == interaction_id:
        _current_interaction_id = None


class InteractionLifecycleKind(str, Enum):
    EXTENDED = "extended"
    ABORTED = "aborted"
    ENDED = "ended"


@dataclass
class InteractionLifecycleEvent:
    """Emitted by a detector; ABORTED and ENDED are terminal."""

    kind: InteractionLifecycleKind
    id: str
    time: float  # monotonic ms
    elapsed: float  # ms since trigger
    reason: str | None = None
    details: list[str] | None = None


class InteractionDetector:
    """Decides whether one interaction is aborted, extended or completed."""

    def __init__(
        self,
        lifecycle: ILifeCycle,
        scheduler: IScheduler,
        busy_delay: float = DEFAULT_BUSY_DELAY_MS,
        idle_delay: float = DEFAULT_IDLE_DELAY_MS,
        interaction_id: str | None = None,
    ):
        if busy_delay < 0 or idle_delay < 0:
            raise ValueError("busy_delay and idle_delay must be >= 0")

        self.id = interaction_id or str(uuid.uuid4())
        self.state = InteractionState.OPEN
        self.start_time: float | None = None
        self.last_activity_time: float | None = None
        self.observable: Observable[InteractionLifecycleEvent] = Observable()

        self._scheduler = scheduler
        self._busy_delay = busy_delay
        self._idle_delay = idle_delay
        self._correlator = ActivityCorrelator(lifecycle)
        self._change_subscription = None
        self._validation_timer: ITimer | None = None
        self._idle_timer: ITimer | None = None

    @property
    def is_open(self) -> bool:
        return self.state is InteractionState.OPEN

    def start(self) -> None:
        """Open the correlation window and arm the validation timer."""
        if self.start_time is not None:
            raise RuntimeError(f"Interaction {self.id} already started")

        self.start_time = self._scheduler.now()
        self._change_subscription = self._correlator.observable.subscribe(
            self._handle_change
        )
        self._correlator.start()
        self._validation_timer = self._scheduler.call_later(
            self._busy_delay, self._handle_validation_timeout
        )
        logger.debug("Interaction %s opened", self.id)

    def dispose(self) -> None:
        """Release timers and subscriptions without emitting a terminal event."""
        if self.is_open:
            self.state = InteractionState.DISPOSED
        self._cancel_timers()
        self._stop_tracking()
        _release_current_interaction_id(self.id)

    def _handle_validation_timeout(self) -> None:
        self._validation_timer = None
        if not self.is_open:
            return

        time = self._scheduler.now()
        self._finish(InteractionState.ABORTED)
        logger.debug("Interaction %s aborted: no activity", self.id)
        self.observable.notify(
            InteractionLifecycleEvent(
                kind=InteractionLifecycleKind.ABORTED,
                id=self.id,
                time=time,
                elapsed=time - self.start_time,
            )
        )

    def _handle_change(self, change: ActivityChange) -> None:
        if not self.is_open:
            return

        self._cancel_timers()
        time = self._scheduler.now()
        self.last_activity_time = time
        _set_current_interaction_id(self.id)

        self.observable.notify(
            InteractionLifecycleEvent(
                kind=InteractionLifecycleKind.EXTENDED,
                id=self.id,
                time=time,
                elapsed=time - self.start_time,
                reason=change.reason,
                details=change.details,
            )
        )

        if self.is_open and not self._correlator.is_busy:
            self._arm_idle_timer()

    def _arm_idle_timer(self) -> None:
        if self._idle_timer is not None:
            self._idle_timer.cancel()
        self._idle_timer = self._scheduler.call_later(
            self._idle_delay, self._handle_idle_timeout
        )

    def _handle_idle_timeout(self) -> None:
        self._idle_timer = None
        if not self.is_open:
            return

        time = self._scheduler.now()
        self._finish(InteractionState.ENDED)
        duration = time - self.start_time
        logger.debug("Interaction %s ended after %.1f ms", self.id, duration)
        self.observable.notify(
            InteractionLifecycleEvent(
                kind=InteractionLifecycleKind.ENDED,
                id=self.id,
                time=time,
                elapsed=duration,
            )
        )

    def _finish(self, state: InteractionState) -> None:
        self.state = state
        self._cancel_timers()
        self._stop_tracking()
        _release_current_interaction_id(self.id)

    def _stop_tracking(self) -> None:
        self._correlator.stop()
        if self._change_subscription is not None:
            self._change_subscription.unsubscribe()
            self._change_subscription = None

    def _cancel_timers(self) -> None:
        if self._validation_timer is not None:
            self._validation_timer.cancel()
            self._validation_timer = None
        if self._idle_timer is not None:
            self._idle_timer.cancel()
            self._idle_timer = None
