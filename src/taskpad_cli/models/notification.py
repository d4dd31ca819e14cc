"""Notification models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class NotificationKind(str, Enum):
    """Kind of a status message."""

    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A transient status message.

    ``created_at`` and ``expires_at`` are readings of the scheduler clock
    (seconds), not wall-clock timestamps.
    """

    message: str
    kind: NotificationKind
    created_at: float
    expires_at: float

    @property
    def is_error(self) -> bool:
        return self.kind is NotificationKind.ERROR
