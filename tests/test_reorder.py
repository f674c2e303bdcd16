"""
Tests for the drag-and-drop reorder engine.

Covers:
- Drag id decoding and gesture events
- list_move semantics
- Column reorders, in-column task reorders, cross-column task moves
- Dense ordering after every move, zero writes for self-drops
- Abandoned gestures and partial write failures
"""

import pytest

from cardboard.core import repository
from cardboard.core.constants import TASKS, COLUMNS
from cardboard.core.exceptions import InvalidInputError, PartialWriteError, PersistenceError
from cardboard.core.reorder import (
    DragRef,
    DragStart,
    DragEnd,
    ReorderEngine,
    list_move,
    MOVED,
    NOOP,
    ABANDONED,
)

from helpers import assert_dense, layout_of


def task_ref(board, title):
    task = next(t for t in board.all_tasks() if t.title == title)
    return DragRef.task(task.id)


def column_ref(board, title):
    column = next(c for c in board.columns if c.title == title)
    return DragRef.column(column.id)


# --- Drag ids ---


def test_drag_ref_parse():
    assert DragRef.parse("column-3") == DragRef("column", 3)
    assert DragRef.parse("task-10") == DragRef("task", 10)
    assert DragRef.parse(" Task-7 ") == DragRef("task", 7)


@pytest.mark.parametrize("raw", ["card-1", "task", "task-", "task-abc", "10", ""])
def test_drag_ref_parse_rejects(raw):
    with pytest.raises(InvalidInputError):
        DragRef.parse(raw)


def test_drag_ref_str_round_trips():
    assert str(DragRef.column(3)) == "column-3"
    assert DragRef.parse(str(DragRef.task(12))) == DragRef.task(12)


def test_events_from_ids():
    end = DragEnd.from_ids("task-4", "column-2")
    assert end.dragged == DragRef.task(4)
    assert end.over == DragRef.column(2)

    assert DragEnd.from_ids("column-1").over is None
    assert DragStart.from_ids("column-1", kind="column").dragged == DragRef.column(1)


def test_events_reject_wrong_kind():
    with pytest.raises(InvalidInputError):
        DragStart.from_ids("task-1", kind="column")
    with pytest.raises(InvalidInputError):
        DragEnd.from_ids("column-1", "task-2", kind="task")


# --- list_move ---


def test_list_move_shifts_rather_than_swaps():
    assert list_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]
    assert list_move(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]


def test_list_move_returns_copy():
    items = ["a", "b"]
    moved = list_move(items, 0, 1)

    assert moved == ["b", "a"]
    assert items == ["a", "b"]


# --- Column moves ---


def test_column_dropped_on_first_position(build_board):
    board = build_board([("X", []), ("Y", []), ("Z", [])])
    engine = ReorderEngine(board)

    result = engine.move(column_ref(board, "Z"), column_ref(board, "X"))

    assert result.outcome == MOVED
    assert result.writes == 3
    assert [(c.title, c.order) for c in board.columns] == [("Z", 0), ("X", 1), ("Y", 2)]
    assert_dense(board)


def test_column_move_keeps_its_tasks(build_board):
    board = build_board([("X", ["x1"]), ("Y", ["y1", "y2"])])
    engine = ReorderEngine(board)

    engine.move(column_ref(board, "X"), column_ref(board, "Y"))

    assert layout_of(board) == [("Y", ["y1", "y2"]), ("X", ["x1"])]
    assert_dense(board)


def test_column_dropped_on_itself_writes_nothing(build_board, write_log):
    board = build_board([("X", []), ("Y", [])])
    before = list(board.columns)

    result = ReorderEngine(board).move(column_ref(board, "Y"), column_ref(board, "Y"))

    assert result.outcome == NOOP
    assert result.writes == 0
    assert write_log == []
    assert board.columns == before


def test_column_dropped_on_task_is_abandoned(build_board, write_log):
    board = build_board([("X", ["x1"]), ("Y", [])])

    result = ReorderEngine(board).move(column_ref(board, "Y"), task_ref(board, "x1"))

    assert result.outcome == ABANDONED
    assert write_log == []
    assert layout_of(board) == [("X", ["x1"]), ("Y", [])]


def test_column_dropped_on_unknown_column_is_abandoned(build_board, write_log):
    board = build_board([("X", []), ("Y", [])])

    result = ReorderEngine(board).move(column_ref(board, "X"), DragRef.column(999))

    assert result.outcome == ABANDONED
    assert write_log == []


# --- Task moves within a column ---


def test_task_moved_after_its_neighbour(build_board):
    board = build_board([("To Do", ["first", "second"])])
    first, second = board.columns[0].tasks

    result = ReorderEngine(board).move(DragRef.task(first.id), DragRef.task(second.id))

    assert result.outcome == MOVED
    assert [(t.id, t.order) for t in board.columns[0].tasks] == [(second.id, 0), (first.id, 1)]
    assert_dense(board)


def test_task_moved_up_within_column(build_board):
    board = build_board([("To Do", ["a", "b", "c", "d"])])

    ReorderEngine(board).move(task_ref(board, "d"), task_ref(board, "b"))

    assert layout_of(board) == [("To Do", ["a", "d", "b", "c"])]
    assert_dense(board)


def test_task_dropped_on_itself_writes_nothing(build_board, write_log):
    board = build_board([("To Do", ["a", "b"])])
    before = list(board.columns)

    result = ReorderEngine(board).move(task_ref(board, "a"), task_ref(board, "a"))

    assert result.outcome == NOOP
    assert result.writes == 0
    assert write_log == []
    assert board.columns == before


def test_last_task_dropped_on_own_column_is_noop(build_board, write_log):
    board = build_board([("To Do", ["a", "b"])])

    result = ReorderEngine(board).move(task_ref(board, "b"), column_ref(board, "To Do"))

    assert result.outcome == NOOP
    assert write_log == []


def test_task_dropped_on_own_column_goes_to_end(build_board):
    board = build_board([("To Do", ["a", "b", "c"])])

    result = ReorderEngine(board).move(task_ref(board, "a"), column_ref(board, "To Do"))

    assert result.outcome == MOVED
    assert layout_of(board) == [("To Do", ["b", "c", "a"])]
    assert_dense(board)


# --- Task moves across columns ---


def test_task_dropped_on_empty_column(build_board):
    board = build_board([("A", ["t1"]), ("B", [])])
    a, b = board.columns

    result = ReorderEngine(board).move(task_ref(board, "t1"), DragRef.column(b.id))

    assert result.outcome == MOVED
    assert (result.source_column_id, result.target_column_id) == (a.id, b.id)
    assert layout_of(board) == [("A", []), ("B", ["t1"])]
    moved = board.columns[1].tasks[0]
    assert (moved.column_id, moved.order) == (b.id, 0)
    assert repository.get(TASKS, moved.id)["column_id"] == b.id
    assert_dense(board)


def test_task_dropped_on_task_in_other_column(build_board, write_log):
    board = build_board([("A", ["a1", "a2", "a3"]), ("B", ["b1", "b2"])])
    total_before = len(board.all_tasks())

    result = ReorderEngine(board).move(task_ref(board, "a2"), task_ref(board, "b1"))

    assert layout_of(board) == [("A", ["a1", "a3"]), ("B", ["a2", "b1", "b2"])]
    assert len(board.all_tasks()) == total_before
    # every remaining source task plus every target task is rewritten
    assert result.writes == 2 + 3
    assert len(write_log) == 5
    target_writes = [partial for _, _, partial in write_log[2:]]
    assert all(set(p) == {"column_id", "order"} for p in target_writes)
    assert_dense(board)


def test_cross_column_move_keeps_comment_counts(build_board):
    board = build_board([("A", ["a1"]), ("B", ["b1"])])
    a1 = board.columns[0].tasks[0]
    board.add_comment(a1.id, "note")

    ReorderEngine(board).move(DragRef.task(a1.id), column_ref(board, "B"))

    assert board.comment_counts[a1.id] == 1
    assert board.find_task(a1.id).column_id == board.columns[1].id


def test_run_of_moves_stays_dense(build_board):
    board = build_board([("A", ["a1", "a2"]), ("B", ["b1"]), ("C", [])])
    engine = ReorderEngine(board)

    engine.move(task_ref(board, "a1"), column_ref(board, "C"))
    engine.move(task_ref(board, "b1"), task_ref(board, "a2"))
    engine.move(column_ref(board, "C"), column_ref(board, "A"))
    engine.move(task_ref(board, "a2"), task_ref(board, "a1"))

    assert layout_of(board) == [("C", ["a2", "a1"]), ("A", ["b1"]), ("B", [])]
    assert_dense(board)


# --- Gesture lifecycle ---


def test_drag_start_sets_and_drag_end_clears_ghost(build_board):
    board = build_board([("A", ["a1"]), ("B", [])])
    engine = ReorderEngine(board)
    ref = task_ref(board, "a1")

    entity = engine.drag_start(DragStart(ref))

    assert engine.dragging
    assert entity.title == "a1"

    engine.drag_end(DragEnd(ref, column_ref(board, "B")))

    assert not engine.dragging
    assert engine.active is None


def test_drag_start_unknown_entity(board):
    engine = ReorderEngine(board)

    assert engine.drag_start(DragStart(DragRef.task(404))) is None
    assert not engine.dragging


def test_drop_on_nothing_is_abandoned(build_board, write_log):
    board = build_board([("A", ["a1"])])
    engine = ReorderEngine(board)
    ref = task_ref(board, "a1")
    engine.drag_start(DragStart(ref))

    result = engine.drag_end(DragEnd(ref))

    assert result.outcome == ABANDONED
    assert not engine.dragging
    assert write_log == []


def test_drop_on_unknown_task_is_abandoned(build_board, write_log):
    board = build_board([("A", ["a1"])])

    result = ReorderEngine(board).move(task_ref(board, "a1"), DragRef.task(999))

    assert result.outcome == ABANDONED
    assert write_log == []
    assert layout_of(board) == [("A", ["a1"])]


def test_move_accepts_string_ids(build_board):
    board = build_board([("X", []), ("Y", [])])
    x, y = board.columns

    result = ReorderEngine(board).move(f"column-{y.id}", f"column-{x.id}")

    assert result.moved
    assert layout_of(board) == [("Y", []), ("X", [])]


# --- Failures ---


def test_failed_reorder_keeps_memory_and_clears_ghost(build_board, monkeypatch):
    board = build_board([("A", ["a1", "a2", "a3"])])
    before = list(board.columns)
    real_update = repository.update_fields
    calls = []

    def flaky_update(collection, record_id, partial):
        calls.append(record_id)
        if len(calls) == 2:
            raise PersistenceError("database is locked")
        return real_update(collection, record_id, partial)

    monkeypatch.setattr(repository, "update_fields", flaky_update)
    engine = ReorderEngine(board)
    ref = task_ref(board, "a3")
    engine.drag_start(DragStart(ref))

    with pytest.raises(PartialWriteError) as excinfo:
        engine.drag_end(DragEnd(ref, task_ref(board, "a1")))

    assert (excinfo.value.completed, excinfo.value.total) == (1, 3)
    assert board.columns == before
    assert not engine.dragging


def test_failed_column_reorder_reports_progress(build_board, monkeypatch):
    board = build_board([("X", []), ("Y", []), ("Z", [])])

    def broken_update(collection, record_id, partial):
        raise PersistenceError("disk I/O error")

    monkeypatch.setattr(repository, "update_fields", broken_update)

    with pytest.raises(PartialWriteError) as excinfo:
        ReorderEngine(board).move(column_ref(board, "Z"), column_ref(board, "X"))

    assert excinfo.value.completed == 0
    assert [c.title for c in board.columns] == ["X", "Y", "Z"]
    assert [r["title"] for r in repository.query_by_equality(COLUMNS, "board_id", 1, sort_by="order")] == ["X", "Y", "Z"]
