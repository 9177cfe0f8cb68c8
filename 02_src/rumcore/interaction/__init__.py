"""Interaction detection module."""

from .collector import IInteractionCollector, InteractionCollector, OverlapPolicy
from .content import get_element_as_string, get_element_content
from .detector import (
    InteractionDetector,
    InteractionLifecycleEvent,
    InteractionLifecycleKind,
    get_current_interaction_id,
)

__all__ = [
    "IInteractionCollector",
    "InteractionCollector",
    "OverlapPolicy",
    "InteractionDetector",
    "InteractionLifecycleEvent",
    "InteractionLifecycleKind",
    "get_current_interaction_id",
    "get_element_as_string",
    "get_element_content",
]
