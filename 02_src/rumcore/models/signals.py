"""Host signal data models: performance entries, elements and inputs."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PerformanceEntry:
    """A performance-timeline entry as reported by the host."""

    entry_type: str  # e.g. "resource", "paint", "longtask"
    name: str = ""
    start_time: float = 0.0
    duration: float = 0.0
    initiator_type: str | None = None  # resource entries only


@dataclass
class Element:
    """Snapshot of the element an input targeted, with its ancestor chain."""

    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    text_content: str | None = None
    value: str | None = None  # current value of form controls
    has_child_nodes: bool = False
    parent: Optional["Element"] = None


@dataclass
class InputEvent:
    """A user input that may open an interaction."""

    type: str = "click"
    target: Element | None = None
