"""Main entry point for taskpad."""

import typer
from rich.markup import escape

from taskpad_cli import __version__
from taskpad_cli.commands import auth, config, tasks
from taskpad_cli.services.config_service import get_config_service
from taskpad_cli.utils.typer_helpers import SuggestingGroup
from taskpad_cli.utils.ui.console import get_console

app = typer.Typer(
    name="taskpad",
    cls=SuggestingGroup,
    help="Manage your personal task list from the terminal",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")

# Top-level shortcuts
app.command("login")(auth.login)
app.command("signup")(auth.signup)
app.command("logout")(auth.logout)
app.command("whoami")(auth.whoami)
app.command("board")(tasks.board)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]taskpad[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]API endpoint: {escape(get_config_service().api_endpoint)}[/dim]")


if __name__ == "__main__":
    app()
