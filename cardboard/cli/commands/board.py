"""
FILE: cardboard/cli/commands/board.py
PURPOSE: Board commands (show, drag)
"""

import json
from typing import Optional

import typer

from ..main import app, console, error_console, open_board
from ...core.exceptions import CardboardError, InvalidInputError
from ...core.reorder import NOOP, ReorderEngine, DragEnd, DragStart
from ...formatting import BoardFormatter


@app.command()
def show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show the board: every column with its cards, in order.

    Example:
        cardboard show
        cardboard show --json
    """
    try:
        board = open_board()

        if json_output:
            console.print(BoardFormatter.to_json(board.columns, board.comment_counts))
        elif raw:
            for line in BoardFormatter.to_raw_lines(board.columns):
                console.print(line, markup=False, highlight=False)
        else:
            if not board.columns:
                console.print("[dim]No columns yet[/dim]")
                console.print("[dim]Use 'cardboard column add <title>' to create one[/dim]")
                return

            title = board.board.title if board.board else "Board"
            console.print(f"[bold cyan]{title}[/bold cyan]")
            console.print(BoardFormatter.create_board(board.columns, board.comment_counts))

    except CardboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def drag(
    dragged_id: str = typer.Argument(..., help="What to drag: column-<id> or task-<id>"),
    drop_target_id: Optional[str] = typer.Argument(None, help="Where to drop it: column-<id> or task-<id>"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Drag a column or card and drop it on another column or card.

    Dropping a card on a card puts it at that card's position; dropping it
    on a column appends it to that column. Leaving out the drop target
    cancels the drag.

    Example:
        cardboard drag column-3 column-1
        cardboard drag task-10 task-11
        cardboard drag task-10 column-2
    """
    try:
        start = DragStart.from_ids(dragged_id)
        end = DragEnd.from_ids(dragged_id, drop_target_id)

        board = open_board()
        engine = ReorderEngine(board)

        if engine.drag_start(start) is None:
            error_console.print(f"[red]Error:[/red] Nothing to drag at {dragged_id}")
            raise typer.Exit(1)

        result = engine.drag_end(end)

        if json_output:
            console.print(json.dumps({
                "kind": result.kind,
                "outcome": result.outcome,
                "writes": result.writes,
            }, indent=2))
        elif result.moved:
            console.print(f"[green]✓ Moved {dragged_id}[/green] [dim]({result.writes} writes)[/dim]")
        elif result.outcome == NOOP:
            console.print("[dim]Already there, nothing to do[/dim]")
        else:
            console.print("[yellow]Drop cancelled[/yellow]")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
