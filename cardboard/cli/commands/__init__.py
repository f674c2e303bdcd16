"""
FILE: cardboard/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .board import (
    show,
    drag,
)
from .tasks import (
    add,
    comment,
    comments,
)
from .columns import (
    column_add,
    column_rename,
    column_rm,
    column_clear,
)
from .system import (
    version,
    help,
    repl,
)

__all__ = [
    "show",
    "drag",
    "add",
    "comment",
    "comments",
    "column_add",
    "column_rename",
    "column_rm",
    "column_clear",
    "version",
    "help",
    "repl",
]
