"""Process-wide multiplexer for agent lifecycle events."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from ..observable import Observable, Subscription


class LifeCycleEventType(str, Enum):
    """Closed set of event kinds carried by the LifeCycle."""

    REQUEST_STARTED = "request_started"  # RequestEvent
    REQUEST_COMPLETED = "request_completed"  # RequestEvent
    DOM_MUTATED = "dom_mutated"  # no payload
    PERFORMANCE_ENTRY_COLLECTED = "performance_entry_collected"  # PerformanceEntry
    USER_INPUT = "user_input"  # InputEvent
    INTERACTION_EXTENDED = "interaction_extended"  # InteractionExtension
    INTERACTION_COLLECTED = "interaction_collected"  # InteractionReport


@dataclass(frozen=True)
class LifeCycleEvent:
    """A tagged event: kind plus its payload."""

    type: LifeCycleEventType
    data: Any = None


class ILifeCycle(Protocol):
    """Type-filtered pub/sub over LifeCycleEventType."""

    def subscribe(
        self, event_type: LifeCycleEventType, handler: Callable[[Any], None]
    ) -> Subscription:
        """Subscribe a handler to one event kind."""
        ...

    def notify(self, event_type: LifeCycleEventType, data: Any = None) -> None:
        """Publish an event of the given kind."""
        ...


class LifeCycle:
    """Single bus carrying every LifeCycleEvent.

    Subscribers register for one kind and receive only that kind's payload.
    Producers never assume a consumer exists.
    """

    def __init__(self) -> None:
        self._bus: Observable[LifeCycleEvent] = Observable()

    def subscribe(
        self, event_type: LifeCycleEventType, handler: Callable[[Any], None]
    ) -> Subscription:
        """Subscribe a handler to one event kind."""
        event_type = LifeCycleEventType(event_type)

        def dispatch(event: LifeCycleEvent) -> None:
            if event.type is event_type:
                handler(event.data)

        return self._bus.subscribe(dispatch)

    def notify(self, event_type: LifeCycleEventType, data: Any = None) -> None:
        """Publish an event of the given kind."""
        self._bus.notify(LifeCycleEvent(LifeCycleEventType(event_type), data))
