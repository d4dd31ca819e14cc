"""Inline edit state for the task list view."""

from __future__ import annotations

from taskpad_cli.models.task import Task, TaskId


class EditState:
    """Tracks which task, if any, is being edited and its draft text.

    At most one task is in editing mode at a time; starting an edit on
    another task discards the previous draft.
    """

    def __init__(self):
        self.editing_id: TaskId | None = None
        self.draft: str = ""

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def is_editing_task(self, task_id: TaskId | None) -> bool:
        return self.is_editing and self.editing_id == task_id

    def begin(self, task: Task) -> None:
        self.editing_id = task.id
        self.draft = task.text

    def set_draft(self, text: str) -> None:
        if not self.is_editing:
            raise RuntimeError("No task is being edited")
        self.draft = text

    def cancel(self) -> None:
        self.editing_id = None
        self.draft = ""

    def __repr__(self) -> str:
        if not self.is_editing:
            return "EditState(Viewing)"
        return f"EditState(Editing({self.editing_id!r}, {self.draft!r}))"
