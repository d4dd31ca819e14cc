"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state:
config and log directories under tmp paths, an in-memory stand-in for
the remote task API, and a manually advanced clock for timers.
"""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest

from taskpad_cli.models.exceptions import NetworkError
from taskpad_cli.models.task import Task
from taskpad_cli.services.notification_center import NotificationCenter
from taskpad_cli.services.pagination import PaginationView
from taskpad_cli.services.task_session import TaskSession
from taskpad_cli.services.task_store import TaskStore


# ---------------------------------------------------------------------------
# Logging / config isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Route the application log file into a temporary directory."""
    import taskpad_cli.utils.logger as logger_mod

    log_dir = tmp_path_factory.mktemp("logs")
    logger_mod._logger = None
    with patch("taskpad_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        logger_mod.get_logger()
    yield log_dir


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from taskpad_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "taskpad_cli.services.config_service.user_config_dir", return_value=str(tmp_path)
    ):
        svc = ConfigService()
        svc.load_config()
        yield svc
    get_config_service.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TASKPAD_API_BASE_URL", raising=False)
    monkeypatch.delenv("TASKPAD_AUTH_API_KEY", raising=False)


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip authentication checks in all tests by default."""
    with patch("taskpad_cli.commands.decorators._require_auth"):
        yield


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeHandle:
    def __init__(self, when: float, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Scheduler with a clock that only moves when told to."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in sorted(self.pending, key=lambda h: h.when):
            if handle.when <= self.now and not handle.cancelled:
                handle.fired = True
                handle.callback()


class FakeTasksAPI:
    """In-memory remote task service.

    ``failing`` names operations that raise :class:`NetworkError`; ``gates``
    maps an operation to an :class:`asyncio.Event` it waits on before
    settling, so tests can control resolution order.
    """

    def __init__(self, tasks: list[dict] | None = None):
        self.server: list[dict] = [dict(t) for t in tasks or []]
        ids = [t["id"] for t in self.server if isinstance(t.get("id"), int)]
        self.next_id = max(ids, default=0) + 1
        self.failing: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple] = []
        self.error_detail: str | None = None

    async def _enter(self, op: str, *args) -> None:
        self.calls.append((op, *args))
        gate = self.gates.get(op)
        if gate is not None:
            await gate.wait()
        if op in self.failing:
            raise NetworkError(f"{op} failed", status_code=500, detail=self.error_detail)

    async def fetch_all(self) -> list[Task]:
        await self._enter("fetch_all")
        return [Task.model_validate(t) for t in self.server]

    async def create(self, text: str):
        await self._enter("create", text)
        task_id = self.next_id
        self.next_id += 1
        self.server.append({"id": task_id, "task": text, "completed": False})
        return task_id

    async def update_text(self, task_id, text: str) -> None:
        await self._enter("update_text", task_id, text)
        for t in self.server:
            if t["id"] == task_id:
                t["task"] = text

    async def delete(self, task_id) -> None:
        await self._enter("delete", task_id)
        self.server = [t for t in self.server if t["id"] != task_id]


def make_tasks(n: int, *, start: int = 1) -> list[dict]:
    return [
        {"id": i, "task": f"Task {i}", "completed": False}
        for i in range(start, start + n)
    ]


@pytest.fixture()
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture()
def fake_api() -> FakeTasksAPI:
    return FakeTasksAPI()


@pytest.fixture()
def notifications(fake_loop) -> NotificationCenter:
    return NotificationCenter(duration_ms=3000, scheduler=fake_loop)


@pytest.fixture()
def store(fake_api, notifications) -> TaskStore:
    return TaskStore(fake_api, notifications)


@pytest.fixture()
def pagination(store) -> PaginationView:
    return PaginationView(store, page_size=4)


@pytest.fixture()
def session(fake_api, fake_loop) -> TaskSession:
    return TaskSession.create(fake_api, page_size=4, duration_ms=3000, scheduler=fake_loop)


@pytest.fixture()
def make_api():
    """Factory for a fake remote service pre-loaded with *n* tasks."""

    def factory(n: int = 0, tasks: list[dict] | None = None) -> FakeTasksAPI:
        return FakeTasksAPI(tasks if tasks is not None else make_tasks(n))

    return factory
