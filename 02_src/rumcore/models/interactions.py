"""Interaction correlation data models."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class ActivityChange:
    """One activity signal folded by the ActivityCorrelator."""

    is_busy: bool  # any request pending when the signal fired
    reason: str  # "dom_mutated", "performance_entry_collected", "request_start", "request_end"
    details: list[str] | None = None


class InteractionState(str, Enum):
    """States of an interaction window."""

    OPEN = "open"
    ABORTED = "aborted"
    ENDED = "ended"
    DISPOSED = "disposed"  # released without a terminal report


class InteractionReportName(str, Enum):
    """Outcome carried by a terminal report."""

    IGNORED = "ignored"
    COMPLETED = "completed"


@dataclass
class InteractionExtension:
    """Observation that an open interaction was extended by activity."""

    interaction_id: str
    time: float  # monotonic ms
    elapsed: float  # ms since trigger
    reason: str
    details: list[str] | None = None


@dataclass
class InteractionContext:
    """Trigger context attached to a terminal report."""

    element: str | None = None
    content: str | None = None
    reason: str | None = None  # last activity reason (completed only)
    details: list[str] | None = None


@dataclass
class InteractionReport:
    """Terminal report: exactly one per interaction id."""

    name: InteractionReportName
    interaction_id: str
    start_time: float  # monotonic ms of the trigger
    duration: float | None = None  # None when ignored
    context: InteractionContext = field(default_factory=InteractionContext)
    input_type: str = "click"
