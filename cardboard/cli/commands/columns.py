"""
FILE: cardboard/cli/commands/columns.py
PURPOSE: Column commands (column add, rename, rm, clear)
"""

import typer

from ..main import column_app, console, error_console, open_board
from ...core.exceptions import (
    CardboardError,
    ColumnNotFoundError,
    InvalidInputError,
)


@column_app.command("add")
def column_add(
    title: str = typer.Argument(..., help="Column title"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Add a column to the right end of the board.

    Example:
        cardboard column add "In Review"
    """
    try:
        board = open_board()
        column = board.add_column(title)

        if json_output:
            console.print(column.to_json())
        elif raw:
            console.print(f"column-{column.id}: {column.title}", markup=False, highlight=False)
        else:
            console.print(f"[green]✓ Created column [bold]column-{column.id}[/bold]:[/green] {column.title}")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@column_app.command("rename")
def column_rename(
    column_id: int = typer.Argument(..., help="Column ID"),
    title: str = typer.Argument(..., help="New title"),
):
    """
    Rename a column.

    Example:
        cardboard column rename 2 "Doing"
    """
    try:
        board = open_board()
        column = board.rename_column(column_id, title)
        console.print(f"[green]✓ Renamed column-{column.id}:[/green] {column.title}")

    except (InvalidInputError, ColumnNotFoundError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@column_app.command("rm")
def column_rm(
    column_id: int = typer.Argument(..., help="Column ID to delete"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete a column together with its cards and their comments.

    Example:
        cardboard column rm 3
        cardboard column rm 3 --yes
    """
    try:
        board = open_board()
        column = board.get_column(column_id)

        if not yes:
            console.print(
                f"[yellow]This deletes '{column.title}' and its {len(column.tasks)} card(s). "
                "There is no undo.[/yellow]"
            )
            if not typer.confirm("Continue?", default=False):
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)

        board.delete_column(column_id)
        console.print(f"[green]✓ Deleted column-{column_id}:[/green] {column.title}")

    except ColumnNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@column_app.command("clear")
def column_clear(
    column_id: int = typer.Argument(..., help="Column ID to empty"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete every card in a column (and their comments), keeping the column.

    Example:
        cardboard column clear 3 --yes
    """
    try:
        board = open_board()
        column = board.get_column(column_id)

        if not yes:
            console.print(
                f"[yellow]This removes all {len(column.tasks)} card(s) from '{column.title}'.[/yellow]"
            )
            if not typer.confirm("Continue?", default=False):
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)

        board.delete_all_cards_in_column(column_id)
        console.print(f"[green]✓ Cleared {len(column.tasks)} card(s) from column-{column_id}[/green]")

    except ColumnNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
