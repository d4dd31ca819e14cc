"""Typer helper utilities."""

from __future__ import annotations

from difflib import get_close_matches

import click
import typer
from rich.markup import escape
from typer.core import TyperGroup

from taskpad_cli.utils import exit_codes
from taskpad_cli.utils.ui.console import get_console

MAX_SUGGESTIONS = 3
SIMILARITY_CUTOFF = 0.6


def suggest_commands(attempted: str, candidates: list[str]) -> list[str]:
    """Return up to three command names that look like *attempted*."""
    return get_close_matches(
        attempted, candidates, n=MAX_SUGGESTIONS, cutoff=SIMILARITY_CUTOFF
    )


class SuggestingGroup(TyperGroup):
    """Typer group that answers a mistyped subcommand with close matches.

    ``taskpad tasks lst`` prints "Did you mean this? list" and exits with
    ``ERROR_INVALID_ARGS``. Unknown names with no close match fall through
    to click's own usage error.
    """

    def resolve_command(self, ctx: click.Context, args: list[str]):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            visible = [
                name
                for name in self.list_commands(ctx)
                if not self.commands[name].hidden
            ]
            suggestions = suggest_commands(args[0], visible)
            if not suggestions:
                raise
            self._print_suggestions(ctx, args[0], suggestions)
            raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e

    @staticmethod
    def _print_suggestions(
        ctx: click.Context, attempted: str, suggestions: list[str]
    ) -> None:
        console = get_console()
        console.print(
            f'[red]Error:[/red] unknown command "{escape(attempted)}" '
            f'for "{ctx.command_path}"'
        )
        console.print()
        if len(suggestions) == 1:
            console.print("[yellow]Did you mean this?[/yellow]")
        else:
            console.print("[yellow]Did you mean one of these?[/yellow]")
        for suggestion in suggestions:
            console.print(f"        {suggestion}")
