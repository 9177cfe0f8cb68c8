"""Activity correlation module."""

from .correlator import ActivityCorrelator

__all__ = ["ActivityCorrelator"]
