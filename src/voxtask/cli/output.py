"""Rich console output helpers."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ..sync.reconciler import SyncResult

# Shared console instance
console = Console()
error_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def create_table(title: str, columns: list[tuple[str, str]]) -> Table:
    """Create a styled table.

    Args:
        title: Table title
        columns: List of (name, style) tuples
    """
    table = Table(title=title, show_header=True, header_style="bold")
    for name, style in columns:
        table.add_column(name, style=style)
    return table


def print_sync_result(result: SyncResult) -> None:
    """Print one row per conversation touched by a sync run."""
    if not (result.new_conversations or result.skipped or result.failed):
        print_info("No new conversations.")
        return

    table = create_table(
        f"Conversations for agent {result.agent_id}",
        [("Conversation", "cyan"), ("Outcome", ""), ("Detail", "dim")],
    )
    for conversation_id in result.new_conversations:
        table.add_row(conversation_id, "[green]stored[/green]", "")
    for conversation_id in result.skipped:
        table.add_row(conversation_id, "[yellow]in progress[/yellow]", "retried on next sync")
    for failure in result.failed:
        table.add_row(failure.conversation_id, "[red]failed[/red]", failure.error)
    console.print(table)
