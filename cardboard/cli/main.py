"""
FILE: cardboard/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - column_app (Typer sub-application for column commands)
  - main() (entry point)
  - open_board() -> BoardService (loaded)
  - configure_logging(verbose) -> None
  - show() / drag() - Board view and drag gestures
  - add() / comment() / comments() - Task and comment commands
  - column_add() / column_rename() / column_rm() / column_clear()
  - version() / help() / repl()
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output, log handler)
  - cardboard.core.service (board state manager)
  - cardboard.repl (interactive mode)
NOTES:
  - Output commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Every invocation loads the board fresh from the store
"""

import logging
import sys

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import __version__
from ..core.service import BoardService

# Typer app setup
app = typer.Typer(
    name="cardboard",
    help="Terminal kanban board with drag-style reordering",
    add_completion=False,
)

# Column sub-command group
column_app = typer.Typer(
    name="column",
    help="Column management commands",
)
app.add_typer(column_app, name="column")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through Rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def open_board() -> BoardService:
    """Create a board service and load it from the store."""
    board = BoardService()
    board.load()
    return board


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    Default callback - launches REPL when no command is specified.

    If a subcommand is invoked, this only configures logging.
    """
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # Board commands
    show,
    drag,
    # Task commands
    add,
    comment,
    comments,
    # Column commands
    column_add,
    column_rename,
    column_rm,
    column_clear,
    # System commands
    version,
    help,
    repl,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
