"""Debounced value holder"""

import asyncio
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class DebouncedValue(Generic[T]):
    """
    Holds a value plus a debounced setter.

    ``schedule_update`` cancels any pending update and arms a new timer, so
    only the last value given before a quiet period of ``delay`` seconds is
    applied. Intermediate values are dropped, never queued. ``force_set``
    applies a value immediately and cancels anything pending.

    Timers run on the asyncio event loop that is running when the update is
    scheduled.
    """

    def __init__(
        self,
        delay: float,
        initial: T,
        on_change: Optional[Callable[[T], None]] = None,
    ):
        self.delay = delay
        self._value = initial
        self._on_change = on_change
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def value(self) -> T:
        return self._value

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule_update(self, value: T) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._apply, value)

    def force_set(self, value: T) -> None:
        self.cancel()
        self._set(value)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _apply(self, value: T) -> None:
        self._handle = None
        self._set(value)

    def _set(self, value: T) -> None:
        changed = value != self._value
        self._value = value
        if changed and self._on_change is not None:
            self._on_change(value)
