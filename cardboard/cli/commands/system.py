"""
FILE: cardboard/cli/commands/system.py
PURPOSE: System commands (version, help, repl)
"""

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, __version__


@app.command()
def version():
    """Show Cardboard version."""
    console.print(f"Cardboard v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]Cardboard[/bold cyan] - Terminal kanban board\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  cardboard [command] [options]")
    console.print("  cardboard                    [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("show", "Show the board", "cardboard show [--json] [--raw]"),
        ("add", "Add a card to a column", 'cardboard add "Card title" --column <id>'),
        ("drag", "Drag a column or card onto another", "cardboard drag task-10 column-2"),
        ("comment", "Comment on a card", 'cardboard comment <task_id> "Text"'),
        ("comments", "List a card's comments", "cardboard comments <task_id>"),
        ("column add", "Add a column", 'cardboard column add "Title"'),
        ("column rename", "Rename a column", 'cardboard column rename <id> "Title"'),
        ("column rm", "Delete a column and its cards", "cardboard column rm <id> [--yes]"),
        ("column clear", "Delete all cards in a column", "cardboard column clear <id> [--yes]"),
        ("repl", "Launch interactive REPL", "cardboard repl"),
        ("version", "Show version", "cardboard version"),
        ("help", "Show this help message", "cardboard help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:13}[/green] {desc}")
        console.print(f"                [dim]{example}[/dim]\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--verbose[/yellow] Show debug logging on stderr")
    console.print("  [yellow]--json[/yellow]    Output as JSON (for scripting)")
    console.print("  [yellow]--raw[/yellow]     Plain text output (no colors)")
    console.print("  [yellow]--help[/yellow]    Show detailed help for a command\n")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    The REPL provides:
    - Command history (up/down arrows)
    - Autocomplete (Tab key), including column-<id> / task-<id> drag ids
    - All board commands
    - Exit with Ctrl+D or type 'exit'

    Example:
        cardboard repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main()
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
