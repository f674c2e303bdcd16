"""
FILE: cardboard/core/models.py
PURPOSE: Domain models for boards, columns, tasks, and comments
EXPORTS:
  - Board (dataclass)
  - Column (dataclass, carries its ordered tasks in memory)
  - Task (dataclass)
  - Comment (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - json (stdlib)
  - typing (stdlib)
NOTES:
  - All models have from_row() for SQLite row conversion
  - All models have to_json() for serialization
  - Column.tasks is in-memory only, never written to the columns table
  - Timestamps stored as ISO-8601 strings
"""

from dataclasses import dataclass, asdict, field
from typing import List, Optional
import json


@dataclass
class Board:
    """The board that owns every column."""

    id: int
    title: str
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "Board":
        """Convert SQLite row to Board object."""
        return cls(
            id=row["id"],
            title=row["title"],
            created_at=row["created_at"],
        )

    def to_json(self) -> str:
        """Serialize board to JSON string."""
        return json.dumps(asdict(self), indent=2)


@dataclass
class Task:
    """A card inside a column, ranked by order."""

    id: int
    column_id: int
    title: str
    order: int = 0
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "Task":
        """Convert SQLite row to Task object."""
        return cls(
            id=row["id"],
            column_id=row["column_id"],
            title=row["title"],
            order=row["order"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Column:
    """A list on the board (e.g., To Do, Doing, Done) with its tasks."""

    id: int
    title: str
    board_id: int = 1
    order: int = 0
    tasks: List[Task] = field(default_factory=list)

    @classmethod
    def from_row(cls, row, tasks: Optional[List[Task]] = None) -> "Column":
        """Convert SQLite row to Column object."""
        return cls(
            id=row["id"],
            title=row["title"],
            board_id=row["board_id"],
            order=row["order"],
            tasks=list(tasks or []),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        """Serialize column (with its tasks) to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Comment:
    """A note attached to a task."""

    id: int
    task_id: int
    content: str
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "Comment":
        """Convert SQLite row to Comment object."""
        return cls(
            id=row["id"],
            task_id=row["task_id"],
            content=row["content"],
            created_at=row["created_at"],
        )

    def to_json(self) -> str:
        """Serialize comment to JSON string."""
        return json.dumps(asdict(self), indent=2)
