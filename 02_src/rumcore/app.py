"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .config import AgentConfig
from .interaction import IInteractionCollector, InteractionCollector
from .lifecycle import LifeCycle
from .logging_config import get_logger
from .report_log import IReportLog, ReportLog
from .request_collection import RequestTracker, stop_request_collection
from .timing import AsyncioScheduler

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, config: AgentConfig | None = None):
        self._config = config or AgentConfig.from_env()

        # Components (will be initialized in start())
        self._lifecycle: LifeCycle | None = None
        self._request_tracker: RequestTracker | None = None
        self._collector: InteractionCollector | None = None
        self._report_log: ReportLog | None = None

    @property
    def config(self) -> AgentConfig:
        return self._config

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. LifeCycle (no dependencies)
        self._lifecycle = LifeCycle()

        # 2. RequestTracker (depends on LifeCycle)
        if self._config.track_requests:
            self._request_tracker = RequestTracker(
                self._lifecycle, origin=self._config.document_origin
            )
            self._request_tracker.start_collection()
            logger.info("Request collection started")

        # 3. InteractionCollector (depends on LifeCycle + the running loop)
        self._collector = InteractionCollector(
            self._lifecycle,
            AsyncioScheduler(),
            busy_delay=self._config.busy_delay,
            idle_delay=self._config.idle_delay,
            overlap_policy=self._config.overlap_policy,
        )
        self._collector.start()
        logger.info(
            "InteractionCollector started (policy=%s)", self._config.overlap_policy
        )

        # 4. ReportLog (depends on LifeCycle)
        self._report_log = ReportLog(
            self._lifecycle, max_entries=self._config.report_history_size
        )
        self._report_log.start()
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._report_log:
            self._report_log.stop()
        if self._collector:
            self._collector.stop()
        if self._request_tracker:
            self._request_tracker.stop_collection()
            stop_request_collection()
        logger.info("Application stopped")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._collector:
            self._collector.stop()
            self._collector.start()
        if self._report_log:
            self._report_log.clear()
            logger.info("Report log cleared")

    @property
    def lifecycle(self) -> LifeCycle:
        """Get lifecycle instance."""
        if not self._lifecycle:
            raise RuntimeError("Application not started")
        return self._lifecycle

    @property
    def collector(self) -> IInteractionCollector:
        """Get interaction collector instance."""
        if not self._collector:
            raise RuntimeError("Application not started")
        return self._collector

    @property
    def report_log(self) -> IReportLog:
        """Get report log instance."""
        if not self._report_log:
            raise RuntimeError("Application not started")
        return self._report_log
