"""Tests for the root command line application."""

from __future__ import annotations

from typer.testing import CliRunner

from taskpad_cli import __version__
from taskpad_cli.main import app

runner = CliRunner()


def test_help_lists_command_groups():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for name in ("tasks", "auth", "config", "login", "board"):
        assert name in result.output


def test_version(tmp_config):
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_top_level_login_shortcut(tmp_config):
    result = runner.invoke(app, ["login", "--help"])

    assert result.exit_code == 0
    assert "--email" in result.output
