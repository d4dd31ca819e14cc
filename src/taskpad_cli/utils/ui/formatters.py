"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from taskpad_cli.models.notification import Notification
from taskpad_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_tasks_table(data.get("tasks", []))
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_tasks_pretty(data)


def format_tasks_table(tasks: list[dict]) -> None:
    """Format a list of tasks as a table."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Id")
    table.add_column("Task")
    table.add_column("Completed")

    for task in tasks:
        table.add_row(
            str(task.get("id", "-")),
            Text(task.get("task", "")),
            "✓" if task.get("completed") else "✗",
        )

    console.print(table)


def format_tasks_pretty(data: dict) -> None:
    """Format one page of tasks with a page footer."""
    tasks = data.get("tasks", [])
    page = data.get("page", 1)
    total_pages = data.get("total_pages", 1)

    header = Text()
    header.append("Your Tasks ", style="bold cyan")
    header.append(f"({data.get('total', len(tasks))} total)", style="dim")
    console.print(header)
    console.print()

    if not tasks:
        console.print("[yellow]No tasks yet. Add one with 'taskpad tasks add'.[/yellow]")
    for task in tasks:
        format_task_item(task)

    console.print()
    console.print(f"[bold]Page {page} of {total_pages}[/bold]")


def format_task_item(task: dict, indent: str = "  ") -> None:
    """Format a single task; completed tasks are struck through."""
    line = Text(indent)
    line.append(f"[{task.get('id')}] ", style="dim")
    if task.get("completed"):
        line.append(task.get("task", ""), style="strike dim")
    else:
        line.append(task.get("task", ""))
    console.print(line)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    for item in data.get("tasks", []):
        print(item["id"])


def format_notification(notification: Notification | None) -> None:
    """Print a notification in the same style as success and error messages."""
    if notification is None:
        return
    if notification.is_error:
        format_error(notification.message)
    else:
        format_success(notification.message)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")
