"""Holder for the single transient status message shown to the user."""

from __future__ import annotations

from collections.abc import Callable

from taskpad_cli.models.notification import Notification, NotificationKind
from taskpad_cli.utils.logger import get_logger
from taskpad_cli.utils.timers import ExpiryTimer, Scheduler

DEFAULT_DURATION_MS = 3000

NotificationListener = Callable[[Notification | None], None]


class NotificationCenter:
    """Keeps at most one notification and expires it after a fixed duration.

    A new notification replaces the current one immediately and restarts
    the expiry window. Listeners are called with the new notification, or
    with ``None`` when it is cleared.
    """

    def __init__(
        self,
        duration_ms: int = DEFAULT_DURATION_MS,
        scheduler: Scheduler | None = None,
    ):
        self.duration_ms = duration_ms
        self._timer = ExpiryTimer(scheduler)
        self._current: Notification | None = None
        self._listeners: list[NotificationListener] = []
        self._closed = False
        self.logger = get_logger()

    @property
    def current(self) -> Notification | None:
        return self._current

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, message: str, kind: NotificationKind) -> Notification | None:
        if self._closed:
            self.logger.debug("notification dropped after close: %s", message)
            return None

        delay = self.duration_ms / 1000
        now = self._timer.now()
        notification = Notification(
            message=message,
            kind=kind,
            created_at=now,
            expires_at=now + delay,
        )
        self._current = notification
        self._timer.start(delay, self.clear)
        self.logger.info("notification (%s): %s", kind.value, message)
        self._emit(notification)
        return notification

    def success(self, message: str) -> Notification | None:
        return self.notify(message, NotificationKind.SUCCESS)

    def error(self, message: str) -> Notification | None:
        return self.notify(message, NotificationKind.ERROR)

    def clear(self) -> None:
        self._timer.cancel()
        if self._current is None:
            return
        self._current = None
        self._emit(None)

    def close(self) -> None:
        """Cancel any pending expiry and stop accepting notifications."""
        self._timer.cancel()
        self._current = None
        self._closed = True
        self._listeners.clear()

    def _emit(self, notification: Notification | None) -> None:
        for listener in list(self._listeners):
            listener(notification)
