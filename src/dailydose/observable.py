"""Observable values pushed to presentation-layer subscribers."""

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(Generic[T]):
    """A value holder that notifies subscribers on every set.

    Subscribers receive the current value immediately on subscription and
    every subsequent value. A failing subscriber is logged and does not
    prevent delivery to the others.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener[T]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        """The most recently set value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers."""
        with self._lock:
            self._value = value
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(value)
            except Exception:
                logger.exception("Observer %r failed", listener)

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Called with each new value.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)
            current = self._value
        listener(current)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        """Number of registered listeners."""
        return len(self._listeners)
