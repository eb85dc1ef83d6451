"""
Observable values for view-model state.

An Observable holds the current value of one piece of UI-facing state and
notifies subscribers whenever a new value is published. Values are delivered
on the thread that owns the attached event loop: set_value() must be called
there, post_value() may be called from anywhere.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar('T')

Subscriber = Callable[[T], None]

logger = logging.getLogger(__name__)


class Observable(Generic[T]):
    """
    A value container with subscribe, get current, and publish operations.

    Example::

        loading = Observable(False)
        unsubscribe = loading.subscribe(lambda visible: print('spinner', visible))
        loading.set_value(True)
        unsubscribe()
    """

    def __init__(self, initial: T, *, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._value = initial
        self._loop = loop
        self._subscribers: list[Subscriber[T]] = []
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f'Observable({self._value!r})'

    @property
    def value(self) -> T:
        """The most recently published value."""
        return self._value

    def attach(self, loop: asyncio.AbstractEventLoop) -> None:
        """Bind delivery to the given event loop (the consuming context)."""
        self._loop = loop

    def subscribe(self, callback: Subscriber[T], *, emit_current: bool = False) -> Callable[[], None]:
        """
        Register a callback for future values.

        Args:
            callback: Called with each published value
            emit_current: Also call it immediately with the current value

        Returns:
            A function that removes the subscription. Safe to call twice.
        """
        with self._lock:
            self._subscribers.append(callback)
        if emit_current:
            callback(self._value)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def set_value(self, value: T) -> None:
        """Publish a value synchronously on the caller's context."""
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(value)
            except Exception:
                logger.exception('Observable subscriber %r failed', callback)

    def post_value(self, value: T) -> None:
        """
        Publish a value from any thread.

        When a running loop is attached and the caller is not on it, the
        update is handed to the loop with call_soon_threadsafe and subscribers
        run there. Otherwise this is set_value().
        """
        loop = self._loop
        if loop is None or not loop.is_running() or _running_loop() is loop:
            self.set_value(value)
            return
        loop.call_soon_threadsafe(self.set_value, value)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
