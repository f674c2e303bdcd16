"""
FILE: cardboard/repl/commands/system.py
PURPOSE: System command handlers for REPL
"""

from ..main import console
from ..parser import ParseResult


def handle_help_command(result: ParseResult) -> None:
    """
    Handle 'help' command - show available commands.

    Args:
        result: Parsed command (unused)
    """
    console.print("\n[bold cyan]Cardboard REPL Commands[/bold cyan]\n")

    commands = [
        ("show", "Show the board", "show"),
        ("add", "Add a card to a column", "add 1 Buy milk"),
        ("drag", "Drag a column or card onto another", "drag task-10 column-2"),
        ("comment", "Comment on a card", "comment 10 Looks good"),
        ("comments", "List a card's comments", "comments 10"),
        ("column add", "Add a column", "column add In Review"),
        ("column rename", "Rename a column", "column rename 2 Doing"),
        ("column rm", "Delete a column and its cards", "column rm 3 --yes"),
        ("column clear", "Delete all cards in a column", "column clear 3"),
        ("reload", "Reload the board from disk", "reload"),
        ("clear", "Clear screen", "clear"),
        ("exit", "Exit REPL", "exit"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:13}[/green] {desc}")
        console.print(f"                [dim]{example}[/dim]")

    console.print("\n[dim]Drag ids: column-<id> and task-<id>. Press Tab to complete them.[/dim]")


def handle_clear_command(result: ParseResult) -> None:
    """Handle 'clear' command - clear the screen."""
    console.clear()
