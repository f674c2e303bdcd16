"""
FILE: cardboard/repl/main.py
PURPOSE: Interactive board session on top of prompt-toolkit
EXPORTS:
  - REPLContext (session state: board + reorder engine)
  - repl_context (the session's context)
  - execute_command(result) -> bool
  - run_repl() - read/dispatch loop
  - main() - `cardboard repl` entry point
DEPENDENCIES:
  - prompt_toolkit (line editing, history, completion, toolbar)
  - rich (output)
  - cardboard.core.service (board state manager)
  - cardboard.core.reorder (drag engine)
  - cardboard.repl.parser / cardboard.repl.completer
NOTES:
  - The board is loaded once at start and kept in memory for the session
  - Every mutation goes through the board service, so memory and disk agree
  - Bottom toolbar shows column and card counts
  - Without a TTY the loop falls back to input() with no completion
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from ..core.exceptions import CardboardError
from ..core.reorder import ReorderEngine
from ..core.service import BoardService
from .completer import create_completer
from .parser import ParseResult, parse_command

logger = logging.getLogger(__name__)

console = Console()

EXIT_COMMANDS = ("exit", "quit")


@dataclass
class REPLContext:
    """
    State shared by every handler during one session.

    Attributes:
        board: The board service holding the in-memory board
        engine: Drag engine bound to the same board
    """
    board: BoardService = field(default_factory=BoardService)
    engine: Optional[ReorderEngine] = None

    def __post_init__(self):
        if self.engine is None:
            self.engine = ReorderEngine(self.board)

    def plain_prompt(self) -> str:
        """Prompt text for the input() fallback."""
        if self.board.board:
            return f"cardboard:[{self.board.board.title}]> "
        return "cardboard> "


repl_context = REPLContext()


def styled_prompt() -> HTML:
    if repl_context.board.board:
        return HTML(f"<b>cardboard:[<cyan>{repl_context.board.board.title}</cyan>]&gt; </b>")
    return HTML("<b>cardboard&gt; </b>")


def toolbar() -> HTML:
    board = repl_context.board
    return HTML(
        f"<style bg='#444444' fg='#ffffff'> {len(board.columns)} columns"
        f" | {len(board.all_tasks())} cards"
        " | drag task-&lt;id&gt; column-&lt;id&gt; | Tab to complete </style>"
    )


# Handlers import console/repl_context from this module
from .commands import (
    handle_show_command,
    handle_add_command,
    handle_drag_command,
    handle_comment_command,
    handle_comments_command,
    handle_reload_command,
    handle_column_command,
    handle_help_command,
    handle_clear_command,
)

HANDLERS: Dict[str, Callable[[ParseResult], None]] = {
    "show": handle_show_command,
    "ls": handle_show_command,
    "add": handle_add_command,
    "drag": handle_drag_command,
    "comment": handle_comment_command,
    "comments": handle_comments_command,
    "reload": handle_reload_command,
    "column": handle_column_command,
    "help": handle_help_command,
    "clear": handle_clear_command,
}


def execute_command(result: ParseResult) -> bool:
    """
    Dispatch one parsed line to its handler.

    Returns:
        False when the session should end, True otherwise
    """
    if result.command in EXIT_COMMANDS:
        console.print("[dim]Goodbye![/dim]")
        return False

    if not result.command:
        return True

    handler = HANDLERS.get(result.command)
    if handler is None:
        console.print(f"[red]Unknown command:[/red] {result.command}")
        console.print("[dim]Type 'help' to list commands[/dim]")
    else:
        handler(result)
    console.print()
    return True


def _make_session() -> Optional[PromptSession]:
    """A prompt_toolkit session, or None when stdin/stdout aren't terminals."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return None
    try:
        return PromptSession(
            history=InMemoryHistory(),
            completer=create_completer(repl_context.board),
            complete_while_typing=True,
            bottom_toolbar=toolbar,
        )
    except Exception as e:
        logger.debug("prompt_toolkit unavailable", exc_info=True)
        console.print(f"[yellow]Warning:[/yellow] falling back to plain input: {e}")
        return None


def run_repl() -> None:
    """Load the board, then read and run commands until exit or EOF."""
    repl_context.board.load()
    session = _make_session()

    console.print("[bold cyan]Cardboard REPL[/bold cyan] - 'help' lists commands, 'exit' leaves")
    if session is None:
        console.print("[dim](plain input mode, no completion)[/dim]")
    console.print()

    while True:
        try:
            if session is None:
                line = input(repl_context.plain_prompt())
            else:
                line = session.prompt(styled_prompt())
        except KeyboardInterrupt:
            console.print("[dim]^C (Ctrl+D or 'exit' to leave)[/dim]")
            continue
        except EOFError:
            console.print("\n[dim]Goodbye![/dim]")
            return

        try:
            if not execute_command(parse_command(line)):
                return
        except CardboardError as e:
            console.print(f"[red]Error:[/red] {e}")
        except Exception as e:
            # Keep the session alive; the traceback helps when reporting bugs
            logger.debug("REPL command failed", exc_info=True)
            console.print(f"[red]Unexpected error:[/red] {e}")
            console.print("[dim]" + traceback.format_exc() + "[/dim]")


def main() -> None:
    """Entry point for `cardboard repl` (and bare `cardboard`)."""
    try:
        run_repl()
    except CardboardError as e:
        console.print(f"[red]Could not open board:[/red] {e}")
        sys.exit(1)
