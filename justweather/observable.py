"""Subscription handles and observable values used by the store and state holders."""

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Cancellable handle returned by every subscribe call."""

    def __init__(self, on_cancel: Callable[[], None]):
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            self._active = False
            self._on_cancel()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()


class ListenerRegistry(Generic[T]):
    """Thread-safe set of callbacks; dispatch happens outside the lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: dict[int, Callable[[T], None]] = {}
        self._next_token = 0

    def add(self, callback: Callable[[T], None]) -> Subscription:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._listeners[token] = callback
        return Subscription(lambda: self._remove(token))

    def _remove(self, token: int) -> None:
        with self._lock:
            self._listeners.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def notify(self, value: T) -> None:
        with self._lock:
            callbacks = list(self._listeners.values())
        for callback in callbacks:
            deliver(callback, value)


def deliver(callback: Callable[[T], None], value: T) -> None:
    try:
        callback(value)
    except Exception:
        logger.exception("Subscriber %r failed", callback)


class Observable(Generic[T]):
    """Holds a current value; subscribers get it immediately and on every distinct change."""

    def __init__(self, initial: T):
        self._value = initial
        self._listeners: ListenerRegistry[T] = ListenerRegistry()

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        self._listeners.notify(value)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        subscription = self._listeners.add(callback)
        deliver(callback, self._value)
        return subscription
