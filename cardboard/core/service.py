"""
FILE: cardboard/core/service.py
PURPOSE: Board state manager (in-memory column/task tree + CRUD)
EXPORTS:
  - TaskSlice (dataclass: new task list for one column + fields to write)
  - BoardService
      - load() -> List[Column]
      - add_column(title) -> Column
      - add_task(column_id, title) -> Task
      - rename_column(column_id, title) -> Column
      - delete_column(column_id) -> WriteResult
      - delete_all_cards_in_column(column_id) -> WriteResult
      - comment_counts_for(tasks) -> Dict[int, int]
      - recompute_comment_counts() -> Dict[int, int]
      - add_comment(task_id, content) -> Comment
      - list_comments(task_id) -> List[Comment]
      - find_column(column_id) / locate_task(task_id) / all_tasks()
      - commit_columns(columns) -> WriteResult
      - commit_task_slices(slices) -> WriteResult
DEPENDENCIES:
  - cardboard.core.repository (store calls)
  - cardboard.core.batch (WriteBatch for multi-record writes)
  - cardboard.core.models (Board, Column, Task, Comment)
  - cardboard.core.exceptions (ColumnNotFoundError, TaskNotFoundError, InvalidInputError)
NOTES:
  - The service is the only writer of self.columns
  - State is copy-on-write: lists and columns are replaced, never edited in place
  - Memory is swapped only after every write of an operation succeeded
  - Titles are validated here (trimmed, must not be empty) before any write
  - comment_counts is a derived cache, rebuilt wholesale, never persisted
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import repository
from .batch import WriteBatch, WriteResult
from .constants import BOARDS, COLUMNS, TASKS, COMMENTS, DEFAULT_BOARD_ID
from .exceptions import ColumnNotFoundError, TaskNotFoundError, InvalidInputError
from .models import Board, Column, Task, Comment

logger = logging.getLogger(__name__)


@dataclass
class TaskSlice:
    """
    Replacement task list for one column.

    Attributes:
        column_id: Column whose task list is replaced
        tasks: The new ordered task list
        fields: Task fields to persist for every task in the list
    """
    column_id: int
    tasks: List[Task]
    fields: Tuple[str, ...] = ("order",)


def _clean_title(title: str, what: str) -> str:
    title = title.strip()
    if not title:
        raise InvalidInputError(f"{what} title cannot be empty")
    return title


def _next_order(items: Sequence) -> int:
    """Rank for a new child: one past the highest existing order, or 0."""
    return max(item.order for item in items) + 1 if items else 0


class BoardService:
    """
    Canonical in-memory board plus the mutations that keep the store in step.

    Attributes:
        board_id: Board whose columns are managed
        board: Board record (set by load)
        columns: Ordered columns, each carrying its ordered tasks
        comment_counts: task_id -> number of comments
    """

    def __init__(self, board_id: int = DEFAULT_BOARD_ID):
        self.board_id = board_id
        self.board: Optional[Board] = None
        self.columns: List[Column] = []
        self.comment_counts: Dict[int, int] = {}

    # --- Loading ---

    def load(self) -> List[Column]:
        """
        Read the whole board from the store.

        Columns come sorted by order, each with its tasks sorted by order.
        Comment counts are recomputed afterwards.

        Raises:
            PersistenceError: If the store can't be read (state is left as it was)
        """
        row = repository.get(BOARDS, self.board_id)
        board = Board.from_row(row) if row else None

        columns = []
        for column_row in repository.query_by_equality(
            COLUMNS, "board_id", self.board_id, sort_by="order"
        ):
            task_rows = repository.query_by_equality(
                TASKS, "column_id", column_row["id"], sort_by="order"
            )
            columns.append(
                Column.from_row(column_row, [Task.from_row(r) for r in task_rows])
            )

        counts = self.comment_counts_for(
            task for column in columns for task in column.tasks
        )

        self.board = board
        self.columns = columns
        self.comment_counts = counts

        logger.debug("Loaded board %s: %d columns", self.board_id, len(columns))
        return self.columns

    # --- Lookups ---

    def find_column(self, column_id: int) -> Optional[Column]:
        return next((c for c in self.columns if c.id == column_id), None)

    def get_column(self, column_id: int) -> Column:
        """Like find_column, but raises ColumnNotFoundError."""
        column = self.find_column(column_id)
        if column is None:
            raise ColumnNotFoundError(column_id)
        return column

    def locate_task(self, task_id: int) -> Optional[Tuple[Column, int]]:
        """
        Find a task in the current state.

        Returns:
            (column holding the task, index of the task in that column),
            or None if no column holds it
        """
        for column in self.columns:
            for index, task in enumerate(column.tasks):
                if task.id == task_id:
                    return column, index
        return None

    def find_task(self, task_id: int) -> Optional[Task]:
        located = self.locate_task(task_id)
        if located is None:
            return None
        column, index = located
        return column.tasks[index]

    def all_tasks(self) -> List[Task]:
        return [task for column in self.columns for task in column.tasks]

    # --- Column CRUD ---

    def add_column(self, title: str) -> Column:
        """
        Append a new, empty column to the board.

        Args:
            title: Column title (trimmed, must not be empty)

        Returns:
            The new Column

        Raises:
            InvalidInputError: If title is empty or whitespace-only
        """
        title = _clean_title(title, "Column")
        order = _next_order(self.columns)

        column_id = repository.insert(
            COLUMNS, {"board_id": self.board_id, "title": title, "order": order}
        )
        column = Column(id=column_id, title=title, board_id=self.board_id, order=order)
        self.columns = self.columns + [column]

        logger.info("Added column %s (%s) at %d", column_id, title, order)
        return column

    def rename_column(self, column_id: int, title: str) -> Column:
        """
        Persist a new title for a column.

        Raises:
            InvalidInputError: If title is empty or whitespace-only
            ColumnNotFoundError: If the column doesn't exist
        """
        title = _clean_title(title, "Column")
        column = self.get_column(column_id)

        repository.update_fields(COLUMNS, column_id, {"title": title})

        renamed = replace(column, title=title)
        self.columns = [renamed if c.id == column_id else c for c in self.columns]
        logger.info("Renamed column %s to %s", column_id, title)
        return renamed

    def delete_column(self, column_id: int) -> WriteResult:
        """
        Delete a column with all its tasks and their comments.

        Comments go before their task, tasks before the column, so a failure
        partway never leaves children whose parent is gone.

        Raises:
            ColumnNotFoundError: If the column doesn't exist
            PartialWriteError: If the store fails partway (memory untouched)
        """
        column = self.get_column(column_id)

        batch = WriteBatch(f"delete column {column_id}")
        self._queue_task_cascade(batch, column.tasks)
        batch.add(repository.delete, COLUMNS, column_id)
        result = batch.run()

        self.columns = [c for c in self.columns if c.id != column_id]
        self._forget_counts(column.tasks)

        logger.info("Deleted column %s with %d tasks", column_id, len(column.tasks))
        return result

    def delete_all_cards_in_column(self, column_id: int) -> WriteResult:
        """
        Delete every task in a column (and their comments), keeping the column.

        Raises:
            ColumnNotFoundError: If the column doesn't exist
            PartialWriteError: If the store fails partway (memory untouched)
        """
        column = self.get_column(column_id)

        batch = WriteBatch(f"clear column {column_id}")
        self._queue_task_cascade(batch, column.tasks)
        result = batch.run()

        self.columns = [
            replace(c, tasks=[]) if c.id == column_id else c for c in self.columns
        ]
        self._forget_counts(column.tasks)

        logger.info("Cleared %d tasks from column %s", len(column.tasks), column_id)
        return result

    def _queue_task_cascade(self, batch: WriteBatch, tasks: Iterable[Task]) -> None:
        for task in tasks:
            batch.add(repository.delete_by_equality, COMMENTS, "task_id", task.id)
            batch.add(repository.delete, TASKS, task.id)

    def _forget_counts(self, tasks: Iterable[Task]) -> None:
        gone = {task.id for task in tasks}
        self.comment_counts = {
            task_id: count
            for task_id, count in self.comment_counts.items()
            if task_id not in gone
        }

    # --- Task CRUD ---

    def add_task(self, column_id: int, title: str) -> Task:
        """
        Append a new task to a column.

        Args:
            column_id: Column to add the task to
            title: Task title (trimmed, must not be empty)

        Returns:
            The new Task (its comment count is seeded to 0)

        Raises:
            InvalidInputError: If title is empty or whitespace-only
            ColumnNotFoundError: If the column doesn't exist
        """
        title = _clean_title(title, "Task")
        column = self.get_column(column_id)

        order = _next_order(column.tasks)
        now = datetime.now().isoformat()

        task_id = repository.insert(
            TASKS,
            {"column_id": column_id, "title": title, "order": order, "created_at": now},
        )
        task = Task(id=task_id, column_id=column_id, title=title, order=order, created_at=now)

        self.columns = [
            replace(c, tasks=c.tasks + [task]) if c.id == column_id else c
            for c in self.columns
        ]
        self.comment_counts = {**self.comment_counts, task_id: 0}

        logger.info("Added task %s to column %s at %d", task_id, column_id, order)
        return task

    # --- Comments ---

    def comment_counts_for(self, tasks: Iterable[Task]) -> Dict[int, int]:
        """Count comments for each task that has an id."""
        return {
            task.id: repository.count_by_equality(COMMENTS, "task_id", task.id)
            for task in tasks
            if task.id is not None
        }

    def recompute_comment_counts(self) -> Dict[int, int]:
        """Rebuild the comment-count cache from the store for every loaded task."""
        self.comment_counts = self.comment_counts_for(self.all_tasks())
        return self.comment_counts

    def add_comment(self, task_id: int, content: str) -> Comment:
        """
        Attach a comment to a task.

        Raises:
            InvalidInputError: If content is empty or whitespace-only
            TaskNotFoundError: If the task isn't on the board
        """
        content = content.strip()
        if not content:
            raise InvalidInputError("Comment cannot be empty")
        if self.find_task(task_id) is None:
            raise TaskNotFoundError(task_id)

        now = datetime.now().isoformat()
        comment_id = repository.insert(
            COMMENTS, {"task_id": task_id, "content": content, "created_at": now}
        )
        self.recompute_comment_counts()

        logger.info("Added comment %s to task %s", comment_id, task_id)
        return Comment(id=comment_id, task_id=task_id, content=content, created_at=now)

    def list_comments(self, task_id: int) -> List[Comment]:
        """Comments for a task, oldest first."""
        rows = repository.query_by_equality(
            COMMENTS, "task_id", task_id, sort_by="created_at"
        )
        return [Comment.from_row(row) for row in rows]

    # --- Persistence path for reordering ---

    def commit_columns(self, columns: List[Column]) -> WriteResult:
        """
        Persist every column's order, then swap the column sequence in.

        Writes go out in list order, one per column.
        """
        batch = WriteBatch("reorder columns")
        for column in columns:
            batch.add(repository.update_fields, COLUMNS, column.id, {"order": column.order})
        result = batch.run()

        self.columns = list(columns)
        return result

    def commit_task_slices(
        self, slices: List[TaskSlice], operation: str = "reorder tasks"
    ) -> WriteResult:
        """
        Persist new task lists for one or more columns, then swap them in.

        For each slice, the slice's fields are written for every task in
        index order. All affected columns are replaced in memory together,
        after the last write.
        """
        batch = WriteBatch(operation)
        for task_slice in slices:
            for task in task_slice.tasks:
                batch.add(
                    repository.update_fields,
                    TASKS,
                    task.id,
                    {name: getattr(task, name) for name in task_slice.fields},
                )
        result = batch.run()

        by_column = {s.column_id: s.tasks for s in slices}
        self.columns = [
            replace(c, tasks=list(by_column[c.id])) if c.id in by_column else c
            for c in self.columns
        ]
        return result
