"""Task store - the single source of truth for the signed-in user's tasks.

The store validates user intents locally, forwards them to the remote
service, and reconciles its in-memory list by task id once the remote
call settles. It is the only component that mutates the list; views
read it through :attr:`TaskStore.tasks` and :meth:`TaskStore.subscribe`.

There is no locking. Overlapping calls proceed independently and the
last response to settle decides the final local state for its task id.
"""

from __future__ import annotations

from collections.abc import Callable

from taskpad_cli.models.exceptions import NetworkError, ValidationError
from taskpad_cli.models.task import Task, TaskId
from taskpad_cli.services.api.tasks import TasksAPI
from taskpad_cli.services.notification_center import NotificationCenter
from taskpad_cli.utils.logger import get_logger

MSG_FETCH_FAILED = "Error fetching tasks. Please try again."
MSG_EMPTY = "Task cannot be empty."
MSG_DUPLICATE = "Task already exists."
MSG_NOT_FOUND = "Task not found."
MSG_ADDED = "Task added successfully!"
MSG_ADD_FAILED = "Error adding task. Please try again."
MSG_UPDATED = "Task updated successfully!"
MSG_UPDATE_FAILED = "Error updating task. Please try again."
MSG_DELETED = "Task deleted successfully!"
MSG_DELETE_FAILED = "Error deleting task. Please try again."

ChangeListener = Callable[[], None]


def _failure_message(base: str, error: NetworkError) -> str:
    if error.detail:
        return f"{base} ({error.detail})"
    return base


class TaskStore:
    """In-memory task list kept in step with the remote task service."""

    def __init__(self, tasks_api: TasksAPI, notifications: NotificationCenter):
        self.api = tasks_api
        self.notifications = notifications
        self._tasks: list[Task] = []
        self._listeners: list[ChangeListener] = []
        self._alive = True
        self.logger = get_logger()

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Current tasks in display order."""
        return tuple(self._tasks)

    @property
    def alive(self) -> bool:
        return self._alive

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: TaskId) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def find_duplicate(self, text: str, *, ignore_id: TaskId | None = None) -> Task | None:
        """Return the task whose text equals *text* ignoring case, if any."""
        for task in self._tasks:
            if task.id is not None and task.id == ignore_id:
                continue
            if task.matches(text):
                return task
        return None

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Call *listener* after every change to the list."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Detach the store; responses that settle afterwards are discarded."""
        self._alive = False
        self._listeners.clear()

    async def refresh(self) -> list[Task] | None:
        """Replace the local list with the server's.

        Raises:
            NetworkError: The fetch failed; the local list is unchanged
        """
        if self._closed("refresh"):
            return None
        self.logger.info("refreshing tasks")
        try:
            tasks = await self.api.fetch_all()
        except NetworkError as e:
            if not self._settled("refresh"):
                return None
            self.logger.error("refresh failed: %s", e)
            self.notifications.error(_failure_message(MSG_FETCH_FAILED, e))
            raise

        if not self._settled("refresh"):
            return None
        self._replace(list(tasks))
        self.logger.info("refreshed %d tasks", len(tasks))
        return list(tasks)

    async def add(self, text: str) -> Task | None:
        """Create a task with *text* and append it once the server assigns an id.

        Raises:
            ValidationError: *text* is blank or duplicates an existing task
            NetworkError: The remote call failed; the list is unchanged
        """
        if self._closed("add"):
            return None
        self._validate_text(text)

        self.logger.info("adding task: %r", text)
        try:
            task_id = await self.api.create(text)
        except NetworkError as e:
            if not self._settled("add"):
                return None
            self.logger.error("add failed: %s", e)
            self.notifications.error(_failure_message(MSG_ADD_FAILED, e))
            raise

        if not self._settled("add"):
            return None
        task = Task(id=task_id, text=text, completed=False)
        self._merge(task)
        self.notifications.success(MSG_ADDED)
        return task

    async def update(self, task_id: TaskId, new_text: str) -> Task | None:
        """Replace the text of task *task_id*, keeping its id and completion flag.

        Raises:
            ValidationError: Unknown id, blank text or duplicate text
            NetworkError: The remote call failed; the list is unchanged
        """
        if self._closed("update"):
            return None
        if self.get(task_id) is None:
            self.logger.warning("update rejected: no task %r", task_id)
            self.notifications.error(MSG_NOT_FOUND)
            raise ValidationError(ValidationError.NOT_FOUND, MSG_NOT_FOUND)
        self._validate_text(new_text, ignore_id=task_id)

        self.logger.info("updating task %r: %r", task_id, new_text)
        try:
            await self.api.update_text(task_id, new_text)
        except NetworkError as e:
            if not self._settled("update"):
                return None
            self.logger.error("update of %r failed: %s", task_id, e)
            self.notifications.error(_failure_message(MSG_UPDATE_FAILED, e))
            raise

        if not self._settled("update"):
            return None
        current = self.get(task_id)
        updated = None
        if current is None:
            # Removed while the update was in flight; do not revive it.
            self.logger.warning("task %r vanished during update", task_id)
        else:
            updated = current.model_copy(update={"text": new_text})
            self._merge(updated)
        self.notifications.success(MSG_UPDATED)
        return updated

    async def remove(self, task_id: TaskId) -> None:
        """Delete task *task_id*.

        Raises:
            NetworkError: The remote call failed; the list is unchanged
        """
        if self._closed("delete"):
            return
        self.logger.info("deleting task %r", task_id)
        try:
            await self.api.delete(task_id)
        except NetworkError as e:
            if not self._settled("delete"):
                return
            self.logger.error("delete of %r failed: %s", task_id, e)
            self.notifications.error(_failure_message(MSG_DELETE_FAILED, e))
            raise

        if not self._settled("delete"):
            return
        self._replace([t for t in self._tasks if t.id != task_id])
        self.notifications.success(MSG_DELETED)

    def _validate_text(self, text: str, *, ignore_id: TaskId | None = None) -> None:
        if not text.strip():
            self.notifications.error(MSG_EMPTY)
            raise ValidationError(ValidationError.EMPTY, MSG_EMPTY)
        if self.find_duplicate(text, ignore_id=ignore_id) is not None:
            self.notifications.error(MSG_DUPLICATE)
            raise ValidationError(ValidationError.DUPLICATE, MSG_DUPLICATE)

    def _closed(self, operation: str) -> bool:
        if not self._alive:
            self.logger.debug("ignoring %s on a closed store", operation)
        return not self._alive

    def _settled(self, operation: str) -> bool:
        if not self._alive:
            self.logger.debug("discarding %s result after teardown", operation)
        return self._alive

    def _merge(self, task: Task) -> None:
        """Replace the task with the same id in place, or append it."""
        merged = list(self._tasks)
        for index, existing in enumerate(merged):
            if existing.id == task.id:
                merged[index] = task
                break
        else:
            merged.append(task)
        self._replace(merged)

    def _replace(self, tasks: list[Task]) -> None:
        self._tasks = tasks
        for listener in list(self._listeners):
            listener()
