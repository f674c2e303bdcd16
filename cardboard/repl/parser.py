"""
FILE: cardboard/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
  - parse_id(value, kind) -> int
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
  - cardboard.core.exceptions (InvalidInputError)
  - cardboard.core.reorder (DragRef for prefixed ids)
NOTES:
  - Handles quoted strings: add 1 "card with spaces"
  - Supports flags: --json, --yes
  - Case-insensitive command names; arguments keep their case
  - Accepts "column-3" / "task-10" wherever a bare id of that kind is expected
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Union

from ..core.constants import DRAG_ID_SEPARATOR
from ..core.exceptions import InvalidInputError
from ..core.reorder import DragRef


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "drag", "column")
        args: Positional arguments (e.g., ["1", "card title"])
        flags: Flag arguments as dict (e.g., {"yes": True})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""

    def rest(self, start: int) -> str:
        """Join the positional args from `start` on (unquoted titles)."""
        return " ".join(self.args[start:])


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("add 1 Buy milk")
        ParseResult(command="add", args=["1", "Buy", "milk"], flags={})

        >>> parse_command('column add "In Review"')
        ParseResult(command="column", args=["add", "In Review"], flags={})

        >>> parse_command("drag task-10 column-2")
        ParseResult(command="drag", args=["task-10", "column-2"], flags={})

        >>> parse_command("column rm 3 --yes")
        ParseResult(command="column", args=["rm", "3"], flags={"yes": True})

    Notes:
        - Flags start with -- and are boolean unless followed by a value
        - An unclosed quote falls back to a plain whitespace split
        - Empty input returns command="" with no args/flags
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()

    args = []
    flags = {}
    i = 1

    while i < len(tokens):
        token = tokens[i]

        if token.startswith("--"):
            flag_name = token[2:]

            if i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
                flags[flag_name] = tokens[i + 1]
                i += 2
            else:
                flags[flag_name] = True
                i += 1
        else:
            args.append(token)
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)


def parse_id(value: str, kind: str) -> int:
    """
    Read a numeric id, with or without its drag prefix.

    Examples:
        parse_id("3", "column") -> 3
        parse_id("column-3", "column") -> 3
        parse_id("task-3", "column") -> InvalidInputError

    Raises:
        InvalidInputError: If no number can be read, or the prefix names
            the other kind
    """
    text = value.strip()
    if DRAG_ID_SEPARATOR in text:
        ref = DragRef.parse(text)
        if ref.kind != kind:
            raise InvalidInputError(f"Expected a {kind} id, got '{value}'")
        return ref.id

    try:
        return int(text)
    except ValueError:
        raise InvalidInputError(f"Invalid {kind} id '{value}'")
