"""Configuration management commands."""

import json

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.markup import escape

from taskpad_cli.services.config_service import get_config_service
from taskpad_cli.utils import exit_codes
from taskpad_cli.utils.typer_helpers import SuggestingGroup
from taskpad_cli.utils.ui.console import get_console
from taskpad_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")
console = get_console()


@app.command("show")
@command_wrapper(auth_required=False)
def show_config() -> None:
    """Show the full configuration."""
    config_service = get_config_service()
    console.print_json(json.dumps(config_service.config.model_dump()))
    console.print(f"[dim]Effective API endpoint: {escape(config_service.api_endpoint)}[/dim]")


@app.command("get")
@command_wrapper(auth_required=False)
def get_config(key: str = typer.Argument(..., help="Dot-separated key")) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS)
    console.print(escape(str(value)))


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: str = typer.Argument(..., help="Dot-separated key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS) from e
    except PydanticValidationError as e:
        raise AppError(
            f"Invalid value for {key}: {e.errors()[0]['msg']}",
            exit_codes.ERROR_INVALID_ARGS,
        ) from e
    format_success(f"Set {key} = {value}")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    key: str | None = typer.Argument(None, help="Key to reset (all if omitted)"),
) -> None:
    """Reset configuration to defaults."""
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS) from e
    format_success(f"Reset {key or 'all settings'} to defaults")
