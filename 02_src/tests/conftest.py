"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeTimer:
    """Timer handle of FakeScheduler."""

    def __init__(self, due: float, seq: int, callback):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic clock and timers; time only moves on advance()."""

    def __init__(self, start: float = 0.0):
        self.current = start
        self._timers: list[FakeTimer] = []
        self._seq = 0

    def now(self) -> float:
        return self.current

    def call_later(self, delay: float, callback) -> FakeTimer:
        self._seq += 1
        timer = FakeTimer(self.current + delay, self._seq, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self._timers if not t.cancelled and not t.fired]

    def advance(self, ms: float) -> None:
        """Move time forward, firing due timers in order."""
        target = self.current + ms
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.current = timer.due
            timer.fired = True
            timer.callback()
        self.current = target

    def advance_to(self, time: float) -> None:
        self.advance(time - self.current)


@pytest.fixture
def scheduler():
    """Create a deterministic scheduler starting at t=0."""
    return FakeScheduler()


@pytest.fixture
def lifecycle():
    """Create a fresh LifeCycle."""
    from rumcore.lifecycle import LifeCycle

    return LifeCycle()


@pytest.fixture
def recorder():
    """Collect payloads published on a LifeCycle, per event kind."""

    class Recorder:
        def __init__(self):
            self.events = []  # (event_type, data)

        def attach(self, lifecycle, *event_types):
            from rumcore.lifecycle import LifeCycleEventType

            for event_type in event_types or list(LifeCycleEventType):
                lifecycle.subscribe(
                    event_type,
                    lambda data, event_type=event_type: self.events.append(
                        (event_type, data)
                    ),
                )
            return self

        def of(self, event_type):
            return [data for kind, data in self.events if kind is event_type]

    return Recorder()


@pytest.fixture(autouse=True)
def reset_current_interaction():
    """Clear the process-wide interaction id around each test."""
    from rumcore.interaction import detector

    detector._set_current_interaction_id(None)
    yield
    detector._set_current_interaction_id(None)


@pytest.fixture(autouse=True)
def uninstall_request_collection():
    """Restore httpx entry points after each test."""
    yield
    from rumcore.request_collection import stop_request_collection

    stop_request_collection()


@pytest.fixture
def agent_config():
    """Config for in-process tests: no httpx interception."""
    from rumcore.config import AgentConfig

    return AgentConfig(track_requests=False)
