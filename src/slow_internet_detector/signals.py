# slow_internet_detector/signals.py
"""Observable values published by the monitor.

A :class:`ValueSignal` holds a single value that UI code can read at any
time or subscribe to. Subscribers are called synchronously, in
subscription order, only when the value actually changes.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class ValueSignal(Generic[T]):
    """A readable, subscribable value with change notification."""

    def __init__(self, initial: T, name: str = "signal"):
        self.name = name
        self._value = initial
        self._listeners: list[Listener[T]] = []
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"ValueSignal(name={self.name!r}, value={self._value!r})"

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    def set(self, new_value: T) -> bool:
        """Publish a new value.

        Returns:
            True if the value changed and listeners were notified.
        """
        with self._lock:
            if new_value == self._value:
                return False
            self._value = new_value
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(new_value)
            except Exception:
                logger.exception(f"Listener for {self.name} failed")
        return True

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
