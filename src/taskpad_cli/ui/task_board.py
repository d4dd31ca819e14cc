"""Textual TUI for the signed-in task list."""

from __future__ import annotations

from collections.abc import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Static

from taskpad_cli.models.notification import Notification
from taskpad_cli.models.task import Task, TaskId
from taskpad_cli.models.user import CurrentUser
from taskpad_cli.services.api.client import APIClient, get_client
from taskpad_cli.services.auth_service import AuthService
from taskpad_cli.services.task_session import TaskSession, build_session
from taskpad_cli.utils.logger import get_logger


class TaskActionButton(Button):
    """A button bound to one action on one task."""

    def __init__(self, label: str, action: str, task_id: TaskId | None, **kwargs):
        super().__init__(label, classes=f"task-action {action}", **kwargs)
        self.action_name = action
        self.task_id = task_id


class TaskRow(Horizontal):
    """A task in viewing or editing mode."""

    def __init__(self, model: Task, *, editing: bool = False, draft: str = ""):
        super().__init__(classes="task-row completed" if model.completed else "task-row")
        self.model = model
        self.editing = editing
        self.draft = draft

    def compose(self) -> ComposeResult:
        if self.editing:
            yield Input(value=self.draft, id="edit-input")
            yield TaskActionButton("Save", "save", self.model.id, variant="success")
            yield TaskActionButton("Cancel", "cancel", self.model.id, variant="error")
            return

        style = "strike dim" if self.model.completed else ""
        yield Static(Text(self.model.text, style=style), classes="task-text")
        yield TaskActionButton("Edit", "edit", self.model.id, variant="warning")
        yield TaskActionButton("Delete", "delete", self.model.id, variant="error")


class TaskListPanel(VerticalScroll):
    """The visible page of tasks."""

    app: "TaskBoardApp"

    def compose(self) -> ComposeResult:
        session = self.app.session
        if session is None:
            return
        tasks = session.visible_tasks
        if not tasks:
            yield Static("No tasks yet.", classes="empty")
        for task in tasks:
            editing = session.edit.is_editing_task(task.id)
            yield TaskRow(task, editing=editing, draft=session.edit.draft if editing else "")


class TaskBoardApp(App):
    """Task list with inline editing, pagination and status messages."""

    TITLE = "Taskpad"
    CSS = """
    #welcome { text-align: center; padding: 1 0; }
    #notification { height: auto; padding: 0 1; display: none; }
    #notification.success { display: block; background: $success 30%; }
    #notification.error { display: block; background: $error 30%; }
    #add-row { height: auto; }
    #add-input { width: 1fr; }
    .task-row { height: auto; padding: 0 1; }
    .task-row.completed { background: $success 10%; }
    .task-text { width: 1fr; padding: 1 0; }
    #edit-input { width: 1fr; }
    #pager { height: auto; align: center middle; }
    #page-label { width: auto; padding: 1 2; }
    """
    BINDINGS = [
        Binding("pagedown", "next_page", "Next page", priority=True),
        Binding("pageup", "previous_page", "Previous page", priority=True),
        Binding("ctrl+o", "sign_out", "Sign out"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, auth: AuthService | None = None, client: APIClient | None = None):
        super().__init__()
        self.auth = auth or AuthService()
        self._client = client
        self.session: TaskSession | None = None
        self.user: CurrentUser | None = None
        self._unsubscribe_auth: Callable[[], None] | None = None
        self.logger = get_logger()

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Static("", id="welcome")
            yield Static("", id="notification")
            with Horizontal(id="add-row"):
                yield Input(placeholder="Enter a new task...", id="add-input")
                yield Button("Add Task", id="add-button", variant="primary")
            yield TaskListPanel(id="task-list")
            with Horizontal(id="pager"):
                yield Button("Previous", id="previous-button")
                yield Static("", id="page-label")
                yield Button("Next", id="next-button")
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe_auth = self.auth.subscribe(self._on_user_changed)

    async def on_unmount(self) -> None:
        if self._unsubscribe_auth is not None:
            self._unsubscribe_auth()
        self._teardown_session()
        await self.auth.close()
        if self._client is not None:
            await self._client.close()

    def _on_user_changed(self, user: CurrentUser | None) -> None:
        """Mount the task session only while a user is signed in."""
        self.user = user
        if user is None:
            self._teardown_session()
            self.exit(message="Not signed in. Use 'taskpad login' to authenticate.")
            return
        if self.session is not None:
            return

        if self._client is None:
            self._client = get_client()
        self.session = build_session(self._client)
        self.session.store.subscribe(self.refresh_tasks)
        self.session.notifications.subscribe(self.show_notification)
        self.query_one("#welcome", Static).update(Text(f"Welcome, {user.greeting_name}!"))
        self.refresh_tasks()
        self.run_worker(self.session.mount(), group="session")

    def _teardown_session(self) -> None:
        if self.session is None:
            return
        self.session.teardown()
        self.session = None

    def refresh_tasks(self) -> None:
        session = self.session
        if session is None:
            return
        self.query_one(TaskListPanel).refresh(recompose=True)
        pagination = session.pagination
        self.query_one("#page-label", Static).update(
            f"Page {pagination.current_page} of {pagination.total_pages()}"
        )
        self.query_one("#previous-button", Button).disabled = not pagination.has_previous
        self.query_one("#next-button", Button).disabled = not pagination.has_next

        add_input = self.query_one("#add-input", Input)
        if add_input.value != session.add_draft:
            add_input.value = session.add_draft

    def show_notification(self, notification: Notification | None) -> None:
        banner = self.query_one("#notification", Static)
        banner.remove_class("success", "error")
        if notification is None:
            banner.update("")
            return
        label = "Error" if notification.is_error else "Success"
        banner.update(Text.assemble((f"{label}: ", "bold"), notification.message))
        banner.add_class(notification.kind.value)

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.session is None:
            return
        if event.input.id == "add-input":
            self.session.add_draft = event.value
        elif event.input.id == "edit-input" and self.session.edit.is_editing:
            self.session.set_edit_draft(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.session is None:
            return
        if event.input.id == "add-input":
            self.run_worker(self._add(), group="tasks")
        elif event.input.id == "edit-input":
            self.run_worker(self._save_edit(), group="tasks")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        session = self.session
        if session is None:
            return
        button = event.button
        if button.id == "add-button":
            self.run_worker(self._add(), group="tasks")
        elif button.id == "next-button":
            self.action_next_page()
        elif button.id == "previous-button":
            self.action_previous_page()
        elif isinstance(button, TaskActionButton):
            if button.action_name == "edit":
                session.begin_edit(button.task_id)
                self.refresh_tasks()
            elif button.action_name == "cancel":
                session.cancel_edit()
                self.refresh_tasks()
            elif button.action_name == "save":
                self.run_worker(self._save_edit(), group="tasks")
            elif button.action_name == "delete":
                self.run_worker(session.delete(button.task_id), group="tasks")

    async def _add(self) -> None:
        if self.session is not None:
            await self.session.submit_add()
            self.refresh_tasks()

    async def _save_edit(self) -> None:
        if self.session is not None:
            await self.session.save_edit()
            self.refresh_tasks()

    def action_next_page(self) -> None:
        if self.session is not None:
            self.session.next_page()
            self.refresh_tasks()

    def action_previous_page(self) -> None:
        if self.session is not None:
            self.session.previous_page()
            self.refresh_tasks()

    def action_sign_out(self) -> None:
        self.auth.sign_out()
