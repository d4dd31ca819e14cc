"""Helpers shared by the task commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from taskpad_cli.models.task import TaskId
from taskpad_cli.services.api.client import get_client
from taskpad_cli.services.task_session import TaskSession, build_session
from taskpad_cli.services.task_store import TaskStore
from taskpad_cli.utils.ui.formatters import format_notification


@asynccontextmanager
async def open_session() -> AsyncIterator[TaskSession]:
    """Yield a session that prints its notifications, then tear it down."""
    client = get_client()
    session = build_session(client)
    session.notifications.subscribe(format_notification)
    try:
        yield session
    finally:
        session.teardown()
        await client.close()


def resolve_task_id(store: TaskStore, raw: str) -> TaskId:
    """Match a command-line id against the loaded tasks' ids."""
    for task in store.tasks:
        if str(task.id) == raw:
            return task.id
    if raw.isdigit():
        return int(raw)
    return raw
