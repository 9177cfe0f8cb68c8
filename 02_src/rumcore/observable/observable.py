"""Synchronous publish/subscribe primitive."""

from typing import Callable, Generic, Protocol, TypeVar

T = TypeVar("T")

Handler = Callable[[T], None]


class Subscription:
    """Handle returned by subscribe(); holds only the unsubscribe capability."""

    def __init__(self, unsubscribe: Callable[[], None]):
        self._unsubscribe = unsubscribe

    def unsubscribe(self) -> None:
        """Detach the handler. Safe to call more than once."""
        self._unsubscribe()


class IObservable(Protocol[T]):
    """Typed channel of events."""

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        """Register a handler, return its subscription."""
        ...

    def notify(self, event: T) -> None:
        """Deliver event to current subscribers."""
        ...


class Observable(Generic[T]):
    """In-memory channel delivering events synchronously, in registration order.

    Delivery goes to a snapshot of the subscribers taken when notify() is
    called, so (un)subscribing from inside a handler only affects later
    notifications. Handler exceptions propagate to the notifier. Events
    published while nobody is subscribed are dropped.
    """

    def __init__(self) -> None:
        # (token, handler) pairs; the token tells apart repeated registrations
        self._handlers: list[tuple[object, Callable[[T], None]]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        """Register a handler, return its subscription."""
        token = object()
        self._handlers.append((token, handler))

        def unsubscribe() -> None:
            self._handlers = [
                entry for entry in self._handlers if entry[0] is not token
            ]

        return Subscription(unsubscribe)

    def notify(self, event: T) -> None:
        """Deliver event to current subscribers."""
        for _, handler in list(self._handlers):
            handler(event)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)
