"""Cancellable one-shot timers on top of an asyncio-style scheduler."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """The subset of :class:`asyncio.AbstractEventLoop` the timers rely on."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

    def time(self) -> float: ...


class ExpiryTimer:
    """A single pending callback that can be restarted or cancelled.

    Starting the timer again cancels whatever was pending, so at most one
    callback is ever scheduled. When no scheduler is given the running
    event loop is used at the time :meth:`start` is called.
    """

    def __init__(self, scheduler: Scheduler | None = None):
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None

    @property
    def scheduler(self) -> Scheduler:
        if self._scheduler is None:
            return asyncio.get_running_loop()
        return self._scheduler

    @property
    def active(self) -> bool:
        return self._handle is not None

    def now(self) -> float:
        return self.scheduler.time()

    def start(self, delay: float, callback: Callable[[], None]) -> None:
        self.cancel()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = self.scheduler.call_later(delay, fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
