"""
FILE: cardboard/cli/commands/tasks.py
PURPOSE: Task and comment commands (add, comment, comments)
"""

import json

import typer

from ..main import app, console, error_console, open_board
from ...core.exceptions import (
    CardboardError,
    ColumnNotFoundError,
    TaskNotFoundError,
    InvalidInputError,
)
from ...formatting import BoardFormatter


@app.command()
def add(
    title: str = typer.Argument(..., help="Card title"),
    column_id: int = typer.Option(..., "--column", "-c", help="Column ID to add the card to"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Add a card to the bottom of a column.

    Example:
        cardboard add "Write documentation" --column 1
    """
    try:
        board = open_board()
        task = board.add_task(column_id, title)

        if json_output:
            console.print(task.to_json())
        elif raw:
            console.print(f"task-{task.id}: {task.title}", markup=False, highlight=False)
        else:
            console.print(f"[green]✓ Created card [bold]task-{task.id}[/bold]:[/green] {task.title}")

    except (InvalidInputError, ColumnNotFoundError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def comment(
    task_id: int = typer.Argument(..., help="Card ID"),
    content: str = typer.Argument(..., help="Comment text"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Add a comment to a card.

    Example:
        cardboard comment 10 "Blocked on review"
    """
    try:
        board = open_board()
        new_comment = board.add_comment(task_id, content)

        if json_output:
            console.print(new_comment.to_json())
        else:
            count = board.comment_counts.get(task_id, 0)
            console.print(f"[green]✓ Commented on task-{task_id}[/green] [dim]({count} total)[/dim]")

    except (InvalidInputError, TaskNotFoundError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def comments(
    task_id: int = typer.Argument(..., help="Card ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List a card's comments, oldest first.

    Example:
        cardboard comments 10
    """
    try:
        board = open_board()
        task = board.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        items = board.list_comments(task_id)

        if json_output:
            console.print(json.dumps([
                {"id": c.id, "task_id": c.task_id, "content": c.content, "created_at": c.created_at}
                for c in items
            ], indent=2))
        elif not items:
            console.print(f"[dim]No comments on task-{task_id}[/dim]")
        else:
            console.print(BoardFormatter.comments_table(task, items))

    except TaskNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CardboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
