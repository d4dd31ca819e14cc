"""Task session - view model for the signed-in task list.

A session is mounted when a user is signed in and torn down on sign-out.
It wires a :class:`TaskStore`, a :class:`PaginationView` and a
:class:`NotificationCenter` together and owns the purely visual state:
the add-input draft and the inline :class:`EditState`.

Store errors are reported through notifications and never escape the
session's methods.
"""

from __future__ import annotations

from collections.abc import Callable

from taskpad_cli.models.edit_state import EditState
from taskpad_cli.models.exceptions import TaskpadError
from taskpad_cli.models.notification import Notification
from taskpad_cli.models.task import Task, TaskId
from taskpad_cli.services.api.client import APIClient
from taskpad_cli.services.api.tasks import TasksAPI
from taskpad_cli.services.config_service import ConfigService, get_config_service
from taskpad_cli.services.notification_center import (
    DEFAULT_DURATION_MS,
    NotificationCenter,
)
from taskpad_cli.services.pagination import DEFAULT_PAGE_SIZE, PaginationView
from taskpad_cli.services.task_store import TaskStore
from taskpad_cli.utils.logger import get_logger
from taskpad_cli.utils.timers import Scheduler


class TaskSession:
    """Mounted task-list view state."""

    def __init__(
        self,
        store: TaskStore,
        pagination: PaginationView,
        notifications: NotificationCenter,
    ):
        self.store = store
        self.pagination = pagination
        self.notifications = notifications
        self.edit = EditState()
        self.add_draft = ""
        self.mounted = False
        self.torn_down = False
        self._unsubscribers: list[Callable[[], None]] = [
            store.subscribe(self._drop_stale_edit)
        ]
        self.logger = get_logger()

    @classmethod
    def create(
        cls,
        tasks_api: TasksAPI,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        duration_ms: int = DEFAULT_DURATION_MS,
        scheduler: Scheduler | None = None,
    ) -> "TaskSession":
        notifications = NotificationCenter(duration_ms=duration_ms, scheduler=scheduler)
        store = TaskStore(tasks_api, notifications)
        pagination = PaginationView(store, page_size=page_size)
        return cls(store, pagination, notifications)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.store.tasks

    @property
    def visible_tasks(self) -> list[Task]:
        return self.pagination.visible_slice()

    @property
    def notification(self) -> Notification | None:
        return self.notifications.current

    async def mount(self) -> bool:
        """Load the task list once; returns False if the fetch failed."""
        if self.mounted:
            return True
        self.mounted = True
        try:
            await self.store.refresh()
        except TaskpadError:
            return False
        return True

    async def submit_add(self) -> Task | None:
        """Add the current draft; the draft is cleared only on success."""
        try:
            task = await self.store.add(self.add_draft)
        except TaskpadError as e:
            self.logger.debug("add not applied: %s", e)
            return None
        if task is not None:
            self.add_draft = ""
        return task

    def begin_edit(self, task_id: TaskId) -> bool:
        task = self.store.get(task_id)
        if task is None:
            return False
        self.edit.begin(task)
        return True

    def set_edit_draft(self, text: str) -> None:
        self.edit.set_draft(text)

    def cancel_edit(self) -> None:
        self.edit.cancel()

    async def save_edit(self) -> bool:
        """Send the edit draft; edit mode is left only when the update succeeds."""
        if not self.edit.is_editing:
            return False
        task_id = self.edit.editing_id
        try:
            await self.store.update(task_id, self.edit.draft)
        except TaskpadError as e:
            self.logger.debug("update not applied: %s", e)
            return False
        if self.torn_down:
            return False
        if self.edit.is_editing_task(task_id):
            self.edit.cancel()
        return True

    async def delete(self, task_id: TaskId) -> bool:
        try:
            await self.store.remove(task_id)
        except TaskpadError as e:
            self.logger.debug("delete not applied: %s", e)
            return False
        return not self.torn_down

    def next_page(self) -> None:
        self.pagination.next()

    def previous_page(self) -> None:
        self.pagination.previous()

    def teardown(self) -> None:
        """Detach from the store and cancel pending timers. Idempotent."""
        if self.torn_down:
            return
        self.torn_down = True
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.pagination.close()
        self.store.close()
        self.notifications.close()
        self.edit.cancel()
        self.logger.info("task session torn down")

    def _drop_stale_edit(self) -> None:
        if self.edit.is_editing and self.store.get(self.edit.editing_id) is None:
            self.edit.cancel()


def build_session(
    client: APIClient, config_service: ConfigService | None = None
) -> TaskSession:
    """Create a session configured from the current settings."""
    ui = (config_service or get_config_service()).config.ui
    return TaskSession.create(
        TasksAPI(client),
        page_size=ui.page_size,
        duration_ms=ui.notification_duration_ms,
    )
