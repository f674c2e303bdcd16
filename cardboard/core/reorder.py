"""
FILE: cardboard/core/reorder.py
PURPOSE: Turn drag gestures into new column/task orderings and persist them
EXPORTS:
  - DragRef (tagged drag identifier: kind + id)
  - DragStart / DragEnd (gesture events)
  - MoveResult (outcome of one gesture)
  - list_move(items, from_index, to_index) -> list
  - ReorderEngine
      - drag_start(event) -> Column | Task | None
      - drag_end(event) -> MoveResult
      - move(dragged, over) -> MoveResult
DEPENDENCIES:
  - dataclasses (stdlib)
  - cardboard.core.service (BoardService, TaskSlice)
  - cardboard.core.constants (drag kinds)
  - cardboard.core.exceptions (InvalidInputError)
NOTES:
  - Identifiers are decoded once, at the event boundary ("task-10" -> DragRef)
  - The engine never edits state in place: it builds new lists and hands them
    to the board service, which writes them and swaps them in
  - A target that can't be found abandons the gesture without writing
  - Dropping an entity onto its own position is a no-op (zero writes)
  - Cross-column moves rewrite column_id + order for every task in the target
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, TypeVar, Union

from .constants import KIND_COLUMN, KIND_TASK, DRAG_KINDS, DRAG_ID_SEPARATOR
from .exceptions import InvalidInputError
from .models import Column, Task
from .service import BoardService, TaskSlice

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Gesture outcomes
MOVED = "moved"
NOOP = "noop"
ABANDONED = "abandoned"


@dataclass(frozen=True)
class DragRef:
    """
    A decoded drag identifier.

    Attributes:
        kind: "column" or "task"
        id: Numeric id of the column or task
    """
    kind: str
    id: int

    @classmethod
    def parse(cls, raw: str) -> "DragRef":
        """
        Decode "<kind>-<id>" (e.g., "column-3", "task-10").

        Raises:
            InvalidInputError: If the kind is unknown or the id isn't a number
        """
        kind, sep, number = str(raw).strip().partition(DRAG_ID_SEPARATOR)
        kind = kind.lower()
        if not sep or kind not in DRAG_KINDS:
            raise InvalidInputError(
                f"Invalid drag id '{raw}'. Expected column-<id> or task-<id>"
            )
        try:
            return cls(kind=kind, id=int(number))
        except ValueError:
            raise InvalidInputError(f"Invalid drag id '{raw}': '{number}' is not a number")

    @classmethod
    def column(cls, column_id: int) -> "DragRef":
        return cls(KIND_COLUMN, column_id)

    @classmethod
    def task(cls, task_id: int) -> "DragRef":
        return cls(KIND_TASK, task_id)

    def __str__(self) -> str:
        return f"{self.kind}{DRAG_ID_SEPARATOR}{self.id}"


def _decode(dragged_id: str, kind: Optional[str]) -> DragRef:
    ref = DragRef.parse(dragged_id)
    if kind is not None and kind != ref.kind:
        raise InvalidInputError(f"Drag id '{dragged_id}' is not a {kind}")
    return ref


@dataclass(frozen=True)
class DragStart:
    """A drag has begun on an entity."""
    dragged: DragRef

    @classmethod
    def from_ids(cls, dragged_id: str, kind: Optional[str] = None) -> "DragStart":
        return cls(_decode(dragged_id, kind))


@dataclass(frozen=True)
class DragEnd:
    """A drag has been released, over a drop target or over nothing."""
    dragged: DragRef
    over: Optional[DragRef] = None

    @classmethod
    def from_ids(
        cls,
        dragged_id: str,
        drop_target_id: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> "DragEnd":
        over = DragRef.parse(drop_target_id) if drop_target_id else None
        return cls(_decode(dragged_id, kind), over)


@dataclass
class MoveResult:
    """
    What a gesture did.

    Attributes:
        kind: Kind of the dragged entity
        outcome: "moved", "noop" (dropped in place) or "abandoned"
        writes: Number of store writes issued
        source_column_id: Column the task left (task moves only)
        target_column_id: Column the task landed in (task moves only)
    """
    kind: str
    outcome: str
    writes: int = 0
    source_column_id: Optional[int] = None
    target_column_id: Optional[int] = None

    @property
    def moved(self) -> bool:
        return self.outcome == MOVED


def list_move(items: List[T], from_index: int, to_index: int) -> List[T]:
    """
    Return a copy of items with one element moved.

    Elements between the old and new position shift by one (not a swap).
    """
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


def _index_of(columns: List[Column], column_id: int) -> int:
    return next((i for i, c in enumerate(columns) if c.id == column_id), -1)


class ReorderEngine:
    """
    Drag-and-drop state machine for one board.

    Idle until drag_start finds the dragged entity (kept in `active` for the
    drag overlay); drag_end always returns to idle, then applies the move.
    """

    def __init__(self, board: BoardService):
        self.board = board
        self.active: Optional[Union[Column, Task]] = None

    @property
    def dragging(self) -> bool:
        return self.active is not None

    def drag_start(self, event: DragStart) -> Optional[Union[Column, Task]]:
        """
        Resolve the dragged entity and remember it as the active ghost.

        Returns:
            The dragged Column or Task, or None if it isn't on the board
        """
        ref = event.dragged
        if ref.kind == KIND_COLUMN:
            entity = self.board.find_column(ref.id)
        else:
            entity = self.board.find_task(ref.id)

        if entity is None:
            logger.debug("drag_start: %s not found", ref)
        self.active = entity
        return entity

    def drag_end(self, event: DragEnd) -> MoveResult:
        """
        Finish a gesture: clear the ghost, then apply the drop.

        Returns:
            MoveResult describing what happened

        Raises:
            PartialWriteError: If the store fails while writing the new order
        """
        self.active = None
        dragged = event.dragged

        if event.over is None:
            logger.debug("drag_end: %s dropped on nothing", dragged)
            return MoveResult(dragged.kind, ABANDONED)

        if dragged.kind == KIND_COLUMN:
            return self._move_column(dragged, event.over)
        return self._move_task(dragged, event.over)

    def move(
        self,
        dragged: Union[DragRef, str],
        over: Optional[Union[DragRef, str]] = None,
    ) -> MoveResult:
        """Run a whole gesture (start + end) in one call."""
        if not isinstance(dragged, DragRef):
            dragged = DragRef.parse(dragged)
        if over is not None and not isinstance(over, DragRef):
            over = DragRef.parse(over)

        self.drag_start(DragStart(dragged))
        return self.drag_end(DragEnd(dragged, over))

    # --- Column moves ---

    def _move_column(self, dragged: DragRef, over: DragRef) -> MoveResult:
        if over.kind != KIND_COLUMN:
            logger.debug("Column %s dropped on %s, ignoring", dragged.id, over)
            return MoveResult(KIND_COLUMN, ABANDONED)

        if dragged.id == over.id:
            return MoveResult(KIND_COLUMN, NOOP)

        columns = self.board.columns
        old_index = _index_of(columns, dragged.id)
        new_index = _index_of(columns, over.id)
        if old_index == -1 or new_index == -1:
            logger.debug("Column move %s -> %s: column not found", dragged, over)
            return MoveResult(KIND_COLUMN, ABANDONED)

        reordered = [
            replace(column, order=index)
            for index, column in enumerate(list_move(columns, old_index, new_index))
        ]
        result = self.board.commit_columns(reordered)

        logger.info("Moved column %s from %d to %d", dragged.id, old_index, new_index)
        return MoveResult(KIND_COLUMN, MOVED, writes=result.writes)

    # --- Task moves ---

    def _resolve_drop(self, over: DragRef) -> Optional[Tuple[Column, int]]:
        """Column and index a task dropped on `over` should land at."""
        if over.kind == KIND_TASK:
            return self.board.locate_task(over.id)

        column = self.board.find_column(over.id)
        if column is None:
            return None
        return column, len(column.tasks)

    def _move_task(self, dragged: DragRef, over: DragRef) -> MoveResult:
        located = self.board.locate_task(dragged.id)
        target = self._resolve_drop(over)
        if located is None or target is None:
            logger.debug("Task move %s -> %s: not found", dragged, over)
            return MoveResult(KIND_TASK, ABANDONED)

        source, source_index = located
        target_column, target_index = target

        if source.id == target_column.id:
            return self._reorder_within(source, source_index, target_index)
        return self._move_across(source, source_index, target_column, target_index)

    def _reorder_within(self, column: Column, from_index: int, to_index: int) -> MoveResult:
        # Dropping on the column itself means "to the end"
        to_index = min(to_index, len(column.tasks) - 1)
        if from_index == to_index:
            return MoveResult(KIND_TASK, NOOP, source_column_id=column.id,
                              target_column_id=column.id)

        tasks = [
            replace(task, order=index)
            for index, task in enumerate(list_move(column.tasks, from_index, to_index))
        ]
        result = self.board.commit_task_slices(
            [TaskSlice(column.id, tasks, ("order",))],
            operation=f"reorder column {column.id}",
        )

        logger.info("Moved task in column %s from %d to %d", column.id, from_index, to_index)
        return MoveResult(KIND_TASK, MOVED, writes=result.writes,
                          source_column_id=column.id, target_column_id=column.id)

    def _move_across(
        self,
        source: Column,
        source_index: int,
        target: Column,
        target_index: int,
    ) -> MoveResult:
        task = source.tasks[source_index]

        remaining = source.tasks[:source_index] + source.tasks[source_index + 1:]
        landed = list(target.tasks)
        landed.insert(target_index, task)

        new_source = [replace(t, order=i) for i, t in enumerate(remaining)]
        new_target = [
            replace(t, column_id=target.id, order=i) for i, t in enumerate(landed)
        ]

        result = self.board.commit_task_slices(
            [
                TaskSlice(source.id, new_source, ("order",)),
                TaskSlice(target.id, new_target, ("column_id", "order")),
            ],
            operation=f"move task {task.id}",
        )

        logger.info(
            "Moved task %s from column %s to column %s at %d",
            task.id, source.id, target.id, target_index,
        )
        return MoveResult(KIND_TASK, MOVED, writes=result.writes,
                          source_column_id=source.id, target_column_id=target.id)
