"""Core data models for the interaction agent."""

from .interactions import (
    ActivityChange,
    InteractionContext,
    InteractionExtension,
    InteractionReport,
    InteractionReportName,
    InteractionState,
)
from .requests import (
    RequestDetails,
    RequestEvent,
    RequestEventKind,
    RequestType,
    is_rejected,
    is_server_error,
)
from .signals import Element, InputEvent, PerformanceEntry

__all__ = [
    # Requests
    "RequestType",
    "RequestEventKind",
    "RequestDetails",
    "RequestEvent",
    "is_rejected",
    "is_server_error",
    # Signals
    "PerformanceEntry",
    "Element",
    "InputEvent",
    # Interactions
    "ActivityChange",
    "InteractionState",
    "InteractionReportName",
    "InteractionExtension",
    "InteractionContext",
    "InteractionReport",
]
