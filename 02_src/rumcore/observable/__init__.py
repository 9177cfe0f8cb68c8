"""Observable module."""

from .observable import IObservable, Observable, Subscription

__all__ = ["IObservable", "Observable", "Subscription"]
