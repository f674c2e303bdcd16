"""
FILE: cardboard/repl/commands/__init__.py
PURPOSE: REPL command handler modules
"""

# Export all command handlers for easy importing
from .board import (
    handle_show_command,
    handle_add_command,
    handle_drag_command,
    handle_comment_command,
    handle_comments_command,
    handle_reload_command,
)
from .columns import (
    handle_column_command,
)
from .system import (
    handle_help_command,
    handle_clear_command,
)

__all__ = [
    "handle_show_command",
    "handle_add_command",
    "handle_drag_command",
    "handle_comment_command",
    "handle_comments_command",
    "handle_reload_command",
    "handle_column_command",
    "handle_help_command",
    "handle_clear_command",
]
