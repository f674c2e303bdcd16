"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cardboard.core import repository
from cardboard.core.constants import DB_ENV_VAR
from cardboard.core.service import BoardService


@pytest.fixture(autouse=True)
def temp_db(monkeypatch, tmp_path):
    """Use temporary database for all tests."""
    db_path = tmp_path / "test_cardboard.db"
    monkeypatch.delenv(DB_ENV_VAR, raising=False)
    monkeypatch.setattr(repository, "DB_PATH", db_path)
    monkeypatch.setattr(repository, "DB_DIR", tmp_path)
    yield db_path


@pytest.fixture
def board():
    """An empty, loaded board."""
    service = BoardService()
    service.load()
    return service


@pytest.fixture
def build_board(board):
    """
    Build columns and cards from a layout.

    Usage:
        build_board([("To Do", ["a", "b"]), ("Done", [])])
    """
    def build(layout):
        for title, cards in layout:
            column = board.add_column(title)
            for card in cards:
                board.add_task(column.id, card)
        return board
    return build


@pytest.fixture
def write_log(monkeypatch):
    """Record every update_fields call made through the repository."""
    calls = []
    real_update = repository.update_fields

    def spy(collection, record_id, partial):
        calls.append((collection, record_id, dict(partial)))
        return real_update(collection, record_id, partial)

    monkeypatch.setattr(repository, "update_fields", spy)
    return calls
