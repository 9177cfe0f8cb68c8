"""Interaction correlation core."""

from .activity import ActivityCorrelator
from .app import Application, IApplication
from .config import AgentConfig
from .interaction import (
    InteractionCollector,
    InteractionDetector,
    OverlapPolicy,
    get_current_interaction_id,
)
from .lifecycle import LifeCycle, LifeCycleEventType
from .models import (
    ActivityChange,
    Element,
    InputEvent,
    InteractionContext,
    InteractionExtension,
    InteractionReport,
    InteractionReportName,
    PerformanceEntry,
    RequestDetails,
    RequestEvent,
    RequestEventKind,
    RequestType,
    is_rejected,
    is_server_error,
)
from .observable import Observable, Subscription
from .report_log import ReportLog
from .request_collection import (
    RequestTracker,
    normalize_url,
    start_request_collection,
    stop_request_collection,
)

__all__ = [
    # Application
    "Application",
    "IApplication",
    "AgentConfig",
    # Models
    "RequestType",
    "RequestEventKind",
    "RequestDetails",
    "RequestEvent",
    "PerformanceEntry",
    "Element",
    "InputEvent",
    "ActivityChange",
    "InteractionExtension",
    "InteractionContext",
    "InteractionReport",
    "InteractionReportName",
    "is_rejected",
    "is_server_error",
    # Components
    "Observable",
    "Subscription",
    "LifeCycle",
    "LifeCycleEventType",
    "RequestTracker",
    "start_request_collection",
    "stop_request_collection",
    "normalize_url",
    "ActivityCorrelator",
    "InteractionDetector",
    "InteractionCollector",
    "OverlapPolicy",
    "get_current_interaction_id",
    "ReportLog",
]
