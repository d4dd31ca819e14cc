"""Exceptions raised by the task store and the remote boundary."""

from __future__ import annotations


class TaskpadError(Exception):
    """Base exception for all taskpad errors."""


class ValidationError(TaskpadError):
    """Raised when a local check rejects an operation before any network call.

    ``reason`` is one of ``"empty"``, ``"duplicate"`` or ``"not_found"``.
    """

    EMPTY = "empty"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"

    def __init__(self, reason: str, message: str | None = None):
        super().__init__(message or reason)
        self.reason = reason


class NetworkError(TaskpadError):
    """Raised when the remote service fails or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
