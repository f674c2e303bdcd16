"""
FILE: cardboard/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - BoardFormatter: Class for rendering the board, columns and comments
DEPENDENCIES:
  - rich (tables and column layout)
  - json (for JSON serialization)
  - typing (type hints)
  - cardboard.core.models (Column, Task, Comment)
NOTES:
  - Used by both CLI and REPL so the board looks the same everywhere
  - Tasks are shown with their drag id (task-<id>) so they can be dragged
  - Comment counts come from the board service's cache
"""

import json
from typing import Dict, List, Optional

from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from .core.models import Column, Comment, Task


class BoardFormatter:
    """Centralized board display formatting."""

    @staticmethod
    def column_panel(
        column: Column,
        comment_counts: Optional[Dict[int, int]] = None,
    ) -> Panel:
        """
        Create a Rich panel for one column.

        Args:
            column: Column (with tasks) to display
            comment_counts: task_id -> number of comments

        Returns:
            Rich Panel ready for display
        """
        comment_counts = comment_counts or {}

        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Comments", style="yellow", justify="right", no_wrap=True)

        for task in column.tasks:
            count = comment_counts.get(task.id, 0)
            table.add_row(
                f"task-{task.id}",
                task.title,
                f"💬 {count}" if count else "",
            )

        if not column.tasks:
            table.add_row("", "[dim]No cards[/dim]", "")

        return Panel(
            table,
            title=f"[bold]{column.title}[/bold]",
            subtitle=f"[dim]column-{column.id} · {len(column.tasks)}[/dim]",
            border_style="blue",
        )

    @staticmethod
    def create_board(
        columns: List[Column],
        comment_counts: Optional[Dict[int, int]] = None,
    ) -> Columns:
        """Lay the board's columns out side by side."""
        return Columns(
            [BoardFormatter.column_panel(c, comment_counts) for c in columns],
            equal=True,
            expand=True,
        )

    @staticmethod
    def to_json(columns: List[Column], comment_counts: Optional[Dict[int, int]] = None) -> str:
        """
        Convert the board to a JSON string.

        Each task carries a comment_count field.
        """
        comment_counts = comment_counts or {}
        data = []
        for column in columns:
            column_data = column.to_dict()
            for task_data in column_data["tasks"]:
                task_data["comment_count"] = comment_counts.get(task_data["id"], 0)
            data.append(column_data)
        return json.dumps(data, indent=2)

    @staticmethod
    def to_raw_lines(columns: List[Column]) -> List[str]:
        """
        Convert the board to plain text lines.

        Columns are unindented, tasks indented beneath them.
        """
        lines = []
        for column in columns:
            lines.append(f"column-{column.id}: {column.title}")
            for task in column.tasks:
                lines.append(f"  task-{task.id}: {task.title}")
        return lines

    @staticmethod
    def comments_table(task: Task, comments: List[Comment]) -> Table:
        table = Table(title=f"Comments for {task.title}", header_style="bold cyan")
        table.add_column("When", style="dim", no_wrap=True)
        table.add_column("Comment", style="white")
        for comment in comments:
            when = (comment.created_at or "")[:19].replace("T", " ")
            table.add_row(when, comment.content)
        return table
