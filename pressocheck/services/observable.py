"""
Observable state holders for the presentation boundary.

An Observable keeps the latest value, lets callers read it synchronously and
pushes changes to subscribers. New subscribers receive the current value
immediately, so a screen that attaches late still renders the right state.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription:
    """Handle returned by ``subscribe``. Disposing twice is harmless."""

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose: Callable[[], None] | None = on_dispose

    @property
    def active(self) -> bool:
        return self._on_dispose is not None

    def dispose(self) -> None:
        if self._on_dispose is None:
            return
        on_dispose, self._on_dispose = self._on_dispose, None
        on_dispose()


class Observable(Generic[T]):
    """Holds a current value and notifies listeners when it changes."""

    def __init__(self, initial: T, name: str = "observable") -> None:
        self.name = name
        self._value: T = initial
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def set(self, value: T) -> None:
        """
        Replace the value. Equal values are conflated and do not notify.

        A listener that raises is logged and skipped; the rest still receive
        the value and the caller never sees the error.
        """
        if value == self._value:
            return
        self._value = value
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("observable_listener_failed", observable=self.name)

    def subscribe(self, listener: Listener[T]) -> Subscription:
        self._listeners.append(listener)
        logger.debug("observable_subscribed", observable=self.name, count=len(self._listeners))
        listener(self._value)
        return Subscription(lambda: self._unsubscribe(listener))

    def _unsubscribe(self, listener: Listener[T]) -> None:
        self._listeners.remove(listener)
        logger.debug("observable_unsubscribed", observable=self.name, count=len(self._listeners))
