"""Task management commands."""

import typer
from rich.markup import escape

from taskpad_cli.services.config_service import get_config_service
from taskpad_cli.utils.typer_helpers import SuggestingGroup
from taskpad_cli.utils.ui.console import get_console
from taskpad_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .utils import open_session, resolve_task_id

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()


@app.command("list")
@command_wrapper
async def list_tasks(
    page: int = typer.Option(1, "--page", "-p", help="Page to show"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """List one page of tasks."""
    if json_opt:
        output = "json"
    if output is None:
        output = get_config_service().config.output.format

    async with open_session() as session:
        await session.store.refresh()
        session.pagination.go_to(page)

        result = {
            "tasks": [t.to_wire() for t in session.visible_tasks],
            "page": session.pagination.current_page,
            "total_pages": session.pagination.total_pages(),
            "total": len(session.store),
        }
        format_output(result, output)


@app.command("add")
@command_wrapper
async def add_task(
    text: str = typer.Argument(..., help="Task text"),
) -> None:
    """Add a new task."""
    async with open_session() as session:
        await session.store.refresh()
        task = await session.store.add(text)
        if task is not None:
            console.print(f"[dim]id: {escape(str(task.id))}[/dim]")


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    text: str = typer.Argument(..., help="New task text"),
) -> None:
    """Change the text of a task."""
    async with open_session() as session:
        await session.store.refresh()
        await session.store.update(resolve_task_id(session.store, task_id), text)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes and not typer.confirm(f"Delete task {task_id}?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    async with open_session() as session:
        await session.store.refresh()
        await session.store.remove(resolve_task_id(session.store, task_id))


@app.command("board")
@command_wrapper
def board() -> None:
    """Open the interactive task board."""
    from taskpad_cli.ui.task_board import TaskBoardApp

    TaskBoardApp().run()
