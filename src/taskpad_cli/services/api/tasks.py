"""Tasks API endpoints."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from taskpad_cli.models.exceptions import NetworkError
from taskpad_cli.models.task import Task, TaskId
from taskpad_cli.services.api.client import APIClient


def _body(response: httpx.Response, endpoint: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise NetworkError(
            f"Unexpected response from {endpoint}: body is not JSON",
            status_code=response.status_code,
        ) from e


class TasksAPI:
    """Boundary to the remote task CRUD API.

    Each method is one request/response round trip with no caching and no
    retries. Every failure, including a 2xx body that cannot be read,
    surfaces as :class:`NetworkError`.
    """

    def __init__(self, client: APIClient):
        self.client = client

    async def fetch_all(self) -> list[Task]:
        """List all tasks in server order."""
        response = await self.client.get("/tasks")
        data = _body(response, "GET /tasks")
        if not isinstance(data, list):
            raise NetworkError("Unexpected response from GET /tasks")
        try:
            return [Task.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise NetworkError(
                "Unexpected response from GET /tasks: malformed task",
                status_code=response.status_code,
            ) from e

    async def create(self, text: str) -> TaskId:
        """Create a task and return the id assigned by the server."""
        response = await self.client.post(
            "/tasks", json={"task": text, "completed": False}
        )
        data = _body(response, "POST /tasks")
        if not isinstance(data, dict) or data.get("id") is None:
            raise NetworkError("Unexpected response from POST /tasks: no id")
        return data["id"]

    async def update_text(self, task_id: TaskId, text: str) -> None:
        """Replace a task's text."""
        await self.client.put(f"/tasks/{task_id}", json={"task": text})

    async def delete(self, task_id: TaskId) -> None:
        """Delete a task."""
        await self.client.delete(f"/tasks/{task_id}")
