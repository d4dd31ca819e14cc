"""Taskpad domain models.

Pydantic models and small state holders shared by the services,
commands and the Textual board.
"""

from .config_models import AppConfig
from .edit_state import EditState
from .exceptions import NetworkError, TaskpadError, ValidationError
from .notification import Notification, NotificationKind
from .task import Task
from .user import CurrentUser

__all__ = [
    "AppConfig",
    "CurrentUser",
    "EditState",
    "NetworkError",
    "Notification",
    "NotificationKind",
    "Task",
    "TaskpadError",
    "ValidationError",
]
