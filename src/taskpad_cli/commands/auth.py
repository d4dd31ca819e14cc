"""Authentication commands."""

import typer
from rich.markup import escape
from rich.prompt import Prompt

from taskpad_cli.services.auth_service import AuthService
from taskpad_cli.utils.typer_helpers import SuggestingGroup
from taskpad_cli.utils.ui.console import get_console
from taskpad_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


@app.command()
@command_wrapper(auth_required=False)
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Sign in with email and password."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)

    auth = AuthService()
    try:
        user = await auth.sign_in(email, password)
    finally:
        await auth.close()
    format_success("Signed in successfully!")
    console.print(f"Welcome, {escape(user.greeting_name)}!")


@app.command()
@command_wrapper(auth_required=False)
async def signup(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Register a new account."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)

    auth = AuthService()
    try:
        await auth.sign_up(email, password)
    finally:
        await auth.close()
    format_success("Registration successful! Please login.")


@app.command()
@command_wrapper(auth_required=False)
def logout() -> None:
    """Sign out and forget stored credentials."""
    auth = AuthService()
    if not auth.is_authenticated():
        format_info("Not signed in")
        return
    auth.sign_out()
    format_success("Signed out successfully!")


@app.command()
@command_wrapper
def whoami() -> None:
    """Show the signed-in user."""
    user = AuthService().current_user()
    console.print(f"Welcome, {escape(user.greeting_name)}!")
    console.print(f"[dim]{escape(user.email)} ({escape(user.uid)})[/dim]")
