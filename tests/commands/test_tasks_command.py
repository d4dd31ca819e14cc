"""Unit tests for the task commands (list, add, edit, delete)."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from taskpad_cli.commands.tasks import app
from taskpad_cli.services.task_session import TaskSession
from taskpad_cli.utils.ui.formatters import format_notification

runner = CliRunner()


@pytest.fixture()
def remote(tmp_config, make_api):
    """Route the commands to an in-memory service holding six tasks."""
    api = make_api(6)

    @asynccontextmanager
    async def fake_open_session():
        session = TaskSession.create(api, page_size=4)
        session.notifications.subscribe(format_notification)
        try:
            yield session
        finally:
            session.teardown()

    with patch("taskpad_cli.commands.tasks.open_session", fake_open_session):
        yield api


class TestList:
    def test_json_first_page(self, remote):
        result = runner.invoke(app, ["list", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [t["id"] for t in data["tasks"]] == [1, 2, 3, 4]
        assert data["page"] == 1
        assert data["total_pages"] == 2
        assert data["total"] == 6

    def test_second_page(self, remote):
        result = runner.invoke(app, ["list", "--page", "2", "-o", "json"])

        data = json.loads(result.output)
        assert [t["task"] for t in data["tasks"]] == ["Task 5", "Task 6"]

    def test_page_out_of_range_is_clamped(self, remote):
        result = runner.invoke(app, ["list", "-p", "9", "--json"])

        assert json.loads(result.output)["page"] == 2

    def test_pretty_output(self, remote):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Your Tasks" in result.output
        assert "Task 1" in result.output
        assert "Page 1 of 2" in result.output

    def test_quiet_output(self, remote):
        result = runner.invoke(app, ["list", "-o", "quiet"])

        assert result.output.split() == ["1", "2", "3", "4"]

    def test_fetch_failure(self, remote):
        remote.failing.add("fetch_all")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 4
        assert "Error fetching tasks. Please try again." in result.output


class TestAdd:
    def test_add(self, remote):
        result = runner.invoke(app, ["add", "Buy milk"])

        assert result.exit_code == 0, result.output
        assert "Task added successfully!" in result.output
        assert "id: 7" in result.output
        assert remote.server[-1]["task"] == "Buy milk"

    def test_add_duplicate_ignores_case(self, remote):
        result = runner.invoke(app, ["add", "task 3"])

        assert result.exit_code == 2
        assert "Task already exists." in result.output
        assert ("create", "task 3") not in remote.calls

    def test_add_blank(self, remote):
        result = runner.invoke(app, ["add", "   "])

        assert result.exit_code == 2
        assert "Task cannot be empty." in result.output

    def test_add_server_failure_includes_detail(self, remote):
        remote.failing.add("create")
        remote.error_detail = "quota exceeded"

        result = runner.invoke(app, ["add", "Buy milk"])

        assert result.exit_code == 4
        assert "Error adding task. Please try again. (quota exceeded)" in result.output


def test_markup_like_text_round_trips_through_table_output(remote):
    runner.invoke(app, ["add", "close tag [/]"])

    result = runner.invoke(app, ["list", "-p", "2", "-o", "table"])

    assert result.exit_code == 0, result.output
    assert "close tag [/]" in result.output


class TestEdit:
    def test_edit(self, remote):
        result = runner.invoke(app, ["edit", "2", "Walk dog"])

        assert result.exit_code == 0, result.output
        assert "Task updated successfully!" in result.output
        assert ("update_text", 2, "Walk dog") in remote.calls

    def test_edit_to_own_text_in_other_case(self, remote):
        result = runner.invoke(app, ["edit", "2", "TASK 2"])

        assert result.exit_code == 0

    def test_edit_unknown_task(self, remote):
        result = runner.invoke(app, ["edit", "99", "Anything"])

        assert result.exit_code == 5
        assert "Task not found." in result.output

    def test_edit_to_duplicate(self, remote):
        result = runner.invoke(app, ["edit", "2", "Task 1"])

        assert result.exit_code == 2
        assert "Task already exists." in result.output


class TestDelete:
    def test_delete_with_yes(self, remote):
        result = runner.invoke(app, ["delete", "3", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Task deleted successfully!" in result.output
        assert [t["id"] for t in remote.server] == [1, 2, 4, 5, 6]

    def test_delete_confirm_declined(self, remote):
        result = runner.invoke(app, ["delete", "3"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert remote.calls == []

    def test_delete_confirm_accepted(self, remote):
        result = runner.invoke(app, ["delete", "3"], input="y\n")

        assert result.exit_code == 0
        assert ("delete", 3) in remote.calls

    def test_delete_failure(self, remote):
        remote.failing.add("delete")

        result = runner.invoke(app, ["delete", "3", "-y"])

        assert result.exit_code == 4
        assert "Error deleting task. Please try again." in result.output
        assert len(remote.server) == 6


def test_board_launches_app():
    with patch("taskpad_cli.ui.task_board.TaskBoardApp") as board_cls:
        result = runner.invoke(app, ["board"])

    assert result.exit_code == 0
    board_cls.return_value.run.assert_called_once_with()
