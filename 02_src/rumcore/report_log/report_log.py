"""ReportLog: bounded in-memory view of recent interaction events."""

import uuid
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Protocol

from ..lifecycle import ILifeCycle, LifeCycleEventType
from ..models import InteractionExtension, InteractionReport
from ..observable import Subscription


@dataclass
class ReportEntry:
    """A single interaction event kept for the observability API."""

    id: str
    event_type: str  # "interaction_extended" or "interaction_collected"
    interaction_id: str
    data: dict  # full self-contained data for display
    timestamp: datetime


class IReportLog(Protocol):
    """Recent INTERACTION_* events. Two channels: LifeCycle subscription + direct record()."""

    def record(self, event_type: str, interaction_id: str, data: dict) -> ReportEntry:
        """Append an entry."""
        ...

    def get_entries(
        self,
        event_types: list[str] | None = None,
        interaction_id: str | None = None,
        limit: int = 100,
    ) -> list[ReportEntry]:
        """Most recent entries first, with optional filters."""
        ...


class ReportLog:
    """Ring buffer fed by INTERACTION_EXTENDED and INTERACTION_COLLECTED."""

    def __init__(self, lifecycle: ILifeCycle, max_entries: int = 100):
        self._lifecycle = lifecycle
        self._entries: deque[ReportEntry] = deque(maxlen=max_entries)
        self._subscriptions: list[Subscription] = []

    def start(self) -> None:
        """Subscribe to interaction events."""
        if self._subscriptions:
            return
        self._subscriptions = [
            self._lifecycle.subscribe(
                LifeCycleEventType.INTERACTION_EXTENDED, self._handle_extension
            ),
            self._lifecycle.subscribe(
                LifeCycleEventType.INTERACTION_COLLECTED, self._handle_report
            ),
        ]

    def stop(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    def clear(self) -> None:
        self._entries.clear()

    def _handle_extension(self, extension: InteractionExtension) -> None:
        self.record(
            LifeCycleEventType.INTERACTION_EXTENDED.value,
            extension.interaction_id,
            asdict(extension),
        )

    def _handle_report(self, report: InteractionReport) -> None:
        data = asdict(report)
        data["name"] = report.name.value
        self.record(
            LifeCycleEventType.INTERACTION_COLLECTED.value,
            report.interaction_id,
            data,
        )

    def record(self, event_type: str, interaction_id: str, data: dict) -> ReportEntry:
        """Append an entry."""
        entry = ReportEntry(
            id=str(uuid.uuid4()),
            event_type=event_type,
            interaction_id=interaction_id,
            data=data,
            timestamp=datetime.now(timezone.utc),
        )
        self._entries.append(entry)
        return entry

    def get_entries(
        self,
        event_types: list[str] | None = None,
        interaction_id: str | None = None,
        limit: int = 100,
    ) -> list[ReportEntry]:
        """Most recent entries first, with optional filters."""
        result = []
        for entry in reversed(self._entries):
            if event_types and entry.event_type not in event_types:
                continue
            if interaction_id and entry.interaction_id != interaction_id:
                continue
            result.append(entry)
            if len(result) >= limit:
                break
        return result
