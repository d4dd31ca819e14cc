"""Unit tests for SuggestingGroup."""

from __future__ import annotations

from typer.testing import CliRunner

from taskpad_cli.main import app
from taskpad_cli.utils import exit_codes
from taskpad_cli.utils.typer_helpers import suggest_commands

runner = CliRunner()


def test_suggest_commands():
    candidates = ["list", "add", "edit", "delete", "board"]

    assert suggest_commands("lst", candidates) == ["list"]
    assert suggest_commands("zzzz", candidates) == []


def test_typo_suggests_command():
    result = runner.invoke(app, ["tasks", "lst"])

    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "Did you mean this?" in result.output
    assert "list" in result.output


def test_typo_in_root_group():
    result = runner.invoke(app, ["confg"])

    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "config" in result.output


def test_markup_in_attempted_command_is_printed_literally():
    result = runner.invoke(app, ["tasks", "list[/]"])

    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert '"list[/]"' in result.output


def test_unknown_command_without_match_is_usage_error():
    result = runner.invoke(app, ["tasks", "zzzzzz"])

    assert result.exit_code == 2
    assert "Did you mean" not in result.output
