"""
FILE: cardboard/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and drag ids
EXPORTS:
  - CardboardCompleter (Completer for command/arg completion)
  - create_completer(board) -> CardboardCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - typing (type hints)
  - cardboard.core.service (live board for id completion)
NOTES:
  - Suggests command names when at start of line
  - Suggests column subcommands after "column"
  - Suggests column-<id> / task-<id> after "drag", from the live board
  - Suggests bare column ids for "add" and column subcommands
  - Suggests bare task ids for "comment" and "comments"
  - Case-insensitive matching
"""

from typing import Iterable, List, Optional, Tuple

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.service import BoardService


class CardboardCompleter(Completer):
    """
    Custom completer for the Cardboard REPL.

    Provides context-aware autocomplete:
    - Command names at start of input
    - Column subcommands after "column"
    - Drag identifiers and ids taken from the current board
    """

    COMMANDS = [
        "show", "ls", "add", "drag", "column", "comment", "comments",
        "reload", "help", "clear", "exit", "quit",
    ]

    COLUMN_SUBCOMMANDS = ["add", "rename", "rm", "clear"]

    COMMAND_DESCRIPTIONS = {
        "show": "Show the board",
        "ls": "Show the board",
        "add": "Add a card to a column",
        "drag": "Drag a column or card onto another",
        "column": "Column commands (add, rename, rm, clear)",
        "comment": "Comment on a card",
        "comments": "List a card's comments",
        "reload": "Reload the board from disk",
        "help": "Show help",
        "clear": "Clear screen",
        "exit": "Exit REPL",
        "quit": "Exit REPL",
    }

    def __init__(self, board: Optional[BoardService] = None):
        self.board = board

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Args:
            document: Current document with cursor position
            complete_event: Event that triggered completion

        Yields:
            Completion objects for matching suggestions
        """
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_new_word = text_before_cursor.endswith(" ")

        # Empty input or typing the first word -> commands
        if not words or (not at_new_word and len(words) == 1):
            word = words[0] if words else ""
            yield from self._complete_from(word, self.COMMANDS, self.COMMAND_DESCRIPTIONS)
            return

        command = words[0].lower()
        # Position of the argument being typed (1 = first argument)
        position = len(words) if at_new_word else len(words) - 1
        word = "" if at_new_word else words[-1]

        if command == "drag" and position in (1, 2):
            yield from self._complete_from(word, self._drag_ids())
            return

        if command == "column":
            if position == 1:
                yield from self._complete_from(word, self.COLUMN_SUBCOMMANDS)
            elif position == 2 and words[1].lower() != "add":
                yield from self._complete_from(word, self._column_ids())
            return

        if command == "add" and position == 1:
            yield from self._complete_from(word, self._column_ids())
            return

        if command in ("comment", "comments") and position == 1:
            yield from self._complete_from(word, self._task_ids())
            return

    def _complete_from(
        self,
        word: str,
        candidates: Iterable,
        descriptions: Optional[dict] = None,
    ) -> Iterable[Completion]:
        """Yield candidates that start with word (case-insensitive)."""
        descriptions = descriptions or {}
        word_lower = word.lower()
        for candidate in candidates:
            text, meta = candidate if isinstance(candidate, tuple) else (candidate, descriptions.get(candidate, ""))
            if text.lower().startswith(word_lower):
                yield Completion(
                    text,
                    start_position=-len(word),
                    display=text,
                    display_meta=meta,
                )

    def _column_ids(self) -> List[Tuple[str, str]]:
        if self.board is None:
            return []
        return [(str(c.id), c.title) for c in self.board.columns]

    def _task_ids(self) -> List[Tuple[str, str]]:
        if self.board is None:
            return []
        return [(str(t.id), t.title) for t in self.board.all_tasks()]

    def _drag_ids(self) -> List[Tuple[str, str]]:
        if self.board is None:
            return []
        ids = [(f"column-{c.id}", c.title) for c in self.board.columns]
        ids += [(f"task-{t.id}", t.title) for t in self.board.all_tasks()]
        return ids


def create_completer(board: Optional[BoardService] = None) -> CardboardCompleter:
    """
    Create a completer bound to a board.

    Returns:
        CardboardCompleter reading ids from the board on every keystroke
    """
    return CardboardCompleter(board)
