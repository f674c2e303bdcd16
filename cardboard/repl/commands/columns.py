"""
FILE: cardboard/repl/commands/columns.py
PURPOSE: Column handlers for REPL (column add, rename, rm, clear)
"""

from ..main import console, repl_context
from ..parser import ParseResult, parse_id
from ...core.constants import KIND_COLUMN
from ...core.exceptions import CardboardError


def ask_confirmation(message: str) -> bool:
    """Ask user for confirmation (y/n)."""
    response = input(f"{message} (y/n): ").strip().lower()
    return response in ('y', 'yes')


def handle_column_command(result: ParseResult) -> None:
    """
    Handle 'column' command - dispatch to column subcommands.

    Usage:
        column add In Review
        column rename 2 Doing
        column rm 3 [--yes]
        column clear 3 [--yes]
    """
    if not result.args:
        console.print("[red]Error:[/red] Column subcommand required")
        console.print("[dim]Usage: column add|rename|rm|clear ...[/dim]")
        return

    subcommand = result.args[0].lower()
    handlers = {
        "add": _column_add,
        "rename": _column_rename,
        "rm": _column_rm,
        "clear": _column_clear,
    }
    handler = handlers.get(subcommand)
    if handler is None:
        console.print(f"[red]Unknown column command:[/red] {subcommand}")
        return

    try:
        handler(result)
    except CardboardError as e:
        console.print(f"[red]Error:[/red] {e}")


def _column_add(result: ParseResult) -> None:
    column = repl_context.board.add_column(result.rest(1))
    console.print(f"[green]✓ Created column [bold]column-{column.id}[/bold]:[/green] {column.title}")


def _column_rename(result: ParseResult) -> None:
    if len(result.args) < 3:
        console.print("[dim]Usage: column rename <column_id> <title>[/dim]")
        return

    column_id = parse_id(result.args[1], KIND_COLUMN)
    column = repl_context.board.rename_column(column_id, result.rest(2))
    console.print(f"[green]✓ Renamed column-{column.id}:[/green] {column.title}")


def _column_rm(result: ParseResult) -> None:
    if len(result.args) < 2:
        console.print("[dim]Usage: column rm <column_id> [--yes][/dim]")
        return

    board = repl_context.board
    column = board.get_column(parse_id(result.args[1], KIND_COLUMN))

    if not result.flags.get("yes"):
        message = f"Delete '{column.title}' and its {len(column.tasks)} card(s)? There is no undo."
        if not ask_confirmation(message):
            console.print("[yellow]Cancelled[/yellow]")
            return

    board.delete_column(column.id)
    console.print(f"[green]✓ Deleted column-{column.id}:[/green] {column.title}")


def _column_clear(result: ParseResult) -> None:
    if len(result.args) < 2:
        console.print("[dim]Usage: column clear <column_id> [--yes][/dim]")
        return

    board = repl_context.board
    column = board.get_column(parse_id(result.args[1], KIND_COLUMN))

    if not result.flags.get("yes"):
        if not ask_confirmation(f"Remove all {len(column.tasks)} card(s) from '{column.title}'?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    board.delete_all_cards_in_column(column.id)
    console.print(f"[green]✓ Cleared {len(column.tasks)} card(s) from column-{column.id}[/green]")
