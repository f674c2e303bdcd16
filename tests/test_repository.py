"""
Tests for the ordered collection store (SQLite repository).

Covers:
- Schema initialisation and the seeded default board
- insert / get / update_fields / delete
- Equality queries with sorting, counting and bulk delete
- Field-name validation and error wrapping
"""

import pytest

from cardboard.core import repository
from cardboard.core.constants import BOARDS, COLUMNS, TASKS, COMMENTS, DB_ENV_VAR
from cardboard.core.exceptions import InvalidInputError, PersistenceError


def test_default_board_is_seeded():
    row = repository.get(BOARDS, 1)

    assert row is not None
    assert row["title"] == "My Board"
    assert row["created_at"]


def test_insert_returns_increasing_ids():
    first = repository.insert(COLUMNS, {"board_id": 1, "title": "To Do", "order": 0})
    second = repository.insert(COLUMNS, {"board_id": 1, "title": "Done", "order": 1})

    assert second > first
    assert repository.get(COLUMNS, first)["title"] == "To Do"


def test_get_missing_returns_none():
    assert repository.get(TASKS, 99999) is None


def test_update_fields_only_touches_named_fields():
    task_id = repository.insert(
        TASKS, {"column_id": 1, "title": "Write docs", "order": 0, "created_at": "2025-01-01T00:00:00"}
    )

    repository.update_fields(TASKS, task_id, {"order": 4})

    row = repository.get(TASKS, task_id)
    assert row["order"] == 4
    assert row["title"] == "Write docs"
    assert row["column_id"] == 1


def test_update_missing_record_raises():
    with pytest.raises(PersistenceError):
        repository.update_fields(TASKS, 99999, {"order": 1})


def test_delete_removes_record():
    column_id = repository.insert(COLUMNS, {"board_id": 1, "title": "Gone", "order": 0})

    repository.delete(COLUMNS, column_id)

    assert repository.get(COLUMNS, column_id) is None


def test_query_by_equality_sorts_by_field():
    for title, order in [("c", 2), ("a", 0), ("b", 1)]:
        repository.insert(TASKS, {"column_id": 7, "title": title, "order": order})
    repository.insert(TASKS, {"column_id": 8, "title": "other", "order": 0})

    rows = repository.query_by_equality(TASKS, "column_id", 7, sort_by="order")

    assert [r["title"] for r in rows] == ["a", "b", "c"]


def test_count_and_delete_by_equality():
    for n in range(3):
        repository.insert(COMMENTS, {"task_id": 5, "content": f"note {n}"})
    repository.insert(COMMENTS, {"task_id": 6, "content": "keep"})

    assert repository.count_by_equality(COMMENTS, "task_id", 5) == 3

    deleted = repository.delete_by_equality(COMMENTS, "task_id", 5)

    assert deleted == 3
    assert repository.count_by_equality(COMMENTS, "task_id", 5) == 0
    assert repository.count_by_equality(COMMENTS, "task_id", 6) == 1


def test_unknown_field_rejected_before_touching_store():
    with pytest.raises(InvalidInputError):
        repository.insert(TASKS, {"column_id": 1, "title": "x", "priority": "high"})

    with pytest.raises(InvalidInputError):
        repository.query_by_equality(TASKS, "column_id; DROP TABLE tasks", 1)


def test_unknown_collection_rejected():
    with pytest.raises(InvalidInputError):
        repository.count_by_equality("projects", "id", 1)


def test_sqlite_errors_are_wrapped():
    # title is NOT NULL
    with pytest.raises(PersistenceError):
        repository.insert(COLUMNS, {"board_id": 1, "title": None, "order": 0})


def test_env_var_overrides_db_path(monkeypatch, tmp_path):
    other = tmp_path / "elsewhere" / "board.db"
    monkeypatch.setenv(DB_ENV_VAR, str(other))

    repository.insert(COLUMNS, {"board_id": 1, "title": "Elsewhere", "order": 0})

    assert other.exists()


def test_unreachable_database_raises_persistence_error(monkeypatch, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("plain file")
    monkeypatch.setenv(DB_ENV_VAR, str(blocker / "board.db"))

    with pytest.raises(PersistenceError, match="Could not open database"):
        repository.get(BOARDS, 1)
