"""Services module for taskpad - task synchronization and view state."""

from .notification_center import NotificationCenter
from .pagination import PaginationView
from .task_session import TaskSession
from .task_store import TaskStore

__all__ = [
    "NotificationCenter",
    "PaginationView",
    "TaskSession",
    "TaskStore",
]
