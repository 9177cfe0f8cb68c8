"""LifeCycle module."""

from .lifecycle import ILifeCycle, LifeCycle, LifeCycleEvent, LifeCycleEventType

__all__ = ["ILifeCycle", "LifeCycle", "LifeCycleEvent", "LifeCycleEventType"]
