"""
FILE: cardboard/repl/commands/board.py
PURPOSE: Board, card and comment handlers for REPL
"""

from ..main import console, repl_context
from ..parser import ParseResult, parse_id
from ...core.constants import KIND_COLUMN, KIND_TASK
from ...core.exceptions import CardboardError, TaskNotFoundError
from ...core.reorder import NOOP, DragEnd, DragStart
from ...formatting import BoardFormatter


def handle_show_command(result: ParseResult) -> None:
    """
    Handle 'show' / 'ls' command - draw the board.

    Usage:
        show
    """
    board = repl_context.board
    if not board.columns:
        console.print("[dim]No columns yet[/dim]")
        console.print("[dim]Use 'column add <title>' to create one[/dim]")
        return

    console.print(BoardFormatter.create_board(board.columns, board.comment_counts))


def handle_add_command(result: ParseResult) -> None:
    """
    Handle 'add' command - add a card to a column.

    Usage:
        add 1 Buy groceries
        add column-1 "Card with spaces"
    """
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Column and title required")
        console.print("[dim]Usage: add <column_id> <title>[/dim]")
        return

    try:
        column_id = parse_id(result.args[0], KIND_COLUMN)
        task = repl_context.board.add_task(column_id, result.rest(1))
        console.print(f"[green]✓ Created card [bold]task-{task.id}[/bold]:[/green] {task.title}")
    except CardboardError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_drag_command(result: ParseResult) -> None:
    """
    Handle 'drag' command - one complete drag gesture.

    Usage:
        drag column-3 column-1     # move column 3 to column 1's place
        drag task-10 task-11       # move card 10 to card 11's place
        drag task-10 column-2      # move card 10 to the end of column 2
        drag task-10               # pick up and drop nowhere (cancel)
    """
    if not result.args:
        console.print("[red]Error:[/red] Drag id required")
        console.print("[dim]Usage: drag <column-id|task-id> [<drop target>][/dim]")
        return

    engine = repl_context.engine
    try:
        dragged_id = result.args[0]
        drop_target_id = result.args[1] if len(result.args) > 1 else None
        start = DragStart.from_ids(dragged_id)
        end = DragEnd.from_ids(dragged_id, drop_target_id)

        ghost = engine.drag_start(start)
        if ghost is None:
            console.print(f"[red]Error:[/red] Nothing to drag at {dragged_id}")
            return

        console.print(f"[dim]Dragging {ghost.title}...[/dim]")
        outcome = engine.drag_end(end)
    except CardboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    if outcome.moved:
        console.print(f"[green]✓ Moved {dragged_id}[/green]")
        handle_show_command(result)
    elif outcome.outcome == NOOP:
        console.print("[dim]Already there, nothing to do[/dim]")
    else:
        console.print("[yellow]Drop cancelled[/yellow]")


def handle_comment_command(result: ParseResult) -> None:
    """
    Handle 'comment' command - add a comment to a card.

    Usage:
        comment 10 Blocked on review
    """
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Card id and comment required")
        console.print("[dim]Usage: comment <task_id> <text>[/dim]")
        return

    try:
        task_id = parse_id(result.args[0], KIND_TASK)
        repl_context.board.add_comment(task_id, result.rest(1))
        count = repl_context.board.comment_counts.get(task_id, 0)
        console.print(f"[green]✓ Commented on task-{task_id}[/green] [dim]({count} total)[/dim]")
    except CardboardError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_comments_command(result: ParseResult) -> None:
    """
    Handle 'comments' command - list a card's comments.

    Counts are refreshed afterwards, like closing a comment view.

    Usage:
        comments 10
    """
    if not result.args:
        console.print("[red]Error:[/red] Card id required")
        console.print("[dim]Usage: comments <task_id>[/dim]")
        return

    board = repl_context.board
    try:
        task_id = parse_id(result.args[0], KIND_TASK)
        task = board.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        items = board.list_comments(task_id)
        if items:
            console.print(BoardFormatter.comments_table(task, items))
        else:
            console.print(f"[dim]No comments on task-{task_id}[/dim]")

        board.recompute_comment_counts()
    except CardboardError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_reload_command(result: ParseResult) -> None:
    """
    Handle 'reload' command - re-read the board from disk.

    Usage:
        reload
    """
    try:
        repl_context.board.load()
        console.print("[green]✓ Board reloaded[/green]")
    except CardboardError as e:
        console.print(f"[red]Error:[/red] {e}")
