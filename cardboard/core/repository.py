"""
FILE: cardboard/core/repository.py
PURPOSE: Ordered collection store over SQLite (connection management + CRUD)
EXPORTS:
  - get_connection() -> Connection
  - init_database(conn) -> None
  - insert(collection, record) -> int
  - get(collection, record_id) -> Row | None
  - update_fields(collection, record_id, partial) -> None
  - delete(collection, record_id) -> None
  - delete_by_equality(collection, field, value) -> int
  - query_by_equality(collection, field, value, sort_by) -> List[Row]
  - count_by_equality(collection, field, value) -> int
DEPENDENCIES:
  - sqlite3 (stdlib)
  - pathlib (stdlib)
  - contextlib (stdlib)
  - cardboard.core.constants (collections, board defaults)
  - cardboard.core.exceptions (InvalidInputError, PersistenceError)
NOTES:
  - Database stored at ~/.cardboard/cardboard.db (override with $CARDBOARD_DB)
  - Auto-creates directory and initializes schema on first run
  - Returns sqlite3.Row objects; the service layer turns them into models
  - Every call commits on its own: there is no multi-call transaction
  - No foreign keys: cascading deletes are done by the service layer
  - Collection and field names are checked against the schema before being
    interpolated into SQL
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .constants import (
    COLLECTIONS,
    DEFAULT_BOARD_ID,
    DEFAULT_BOARD_TITLE,
    DB_ENV_VAR,
)
from .exceptions import InvalidInputError, PersistenceError

logger = logging.getLogger(__name__)


# Database file location (cross-platform)
DB_DIR = Path.home() / ".cardboard"
DB_PATH = DB_DIR / "cardboard.db"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS boards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS columns (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    board_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    "order" INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    column_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    "order" INTEGER NOT NULL DEFAULT 0,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS comments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id INTEGER NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_columns_board ON columns(board_id);
CREATE INDEX IF NOT EXISTS idx_tasks_column ON tasks(column_id);
CREATE INDEX IF NOT EXISTS idx_comments_task ON comments(task_id);
"""


def _db_path() -> Path:
    """Resolve the database path, honouring the environment override."""
    override = os.environ.get(DB_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DB_PATH


def get_connection() -> sqlite3.Connection:
    """
    Get SQLite connection to the Cardboard database.

    Creates the database directory if it doesn't exist.
    Enables row_factory for dict-like row access.
    Initializes database schema on first connection.
    """
    path = _db_path()

    # Ensure directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row

    init_database(conn)

    return conn


def init_database(conn: sqlite3.Connection) -> None:
    """
    Initialize database schema if tables don't exist.

    Creates the four collections and seeds the default board.
    Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
    """
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='tasks'"
    )
    if cursor.fetchone() is not None:
        return

    conn.executescript(SCHEMA_SQL)
    conn.execute(
        "INSERT OR IGNORE INTO boards (id, title, created_at) VALUES (?, ?, ?)",
        (DEFAULT_BOARD_ID, DEFAULT_BOARD_TITLE, datetime.now().isoformat()),
    )
    conn.commit()
    logger.debug("Initialized database schema")


@contextmanager
def _session(action: str) -> Iterator[sqlite3.Connection]:
    """
    Open a connection for one store call.

    Commits on success, always closes, and reports any sqlite3 failure as
    PersistenceError so callers only ever see Cardboard exceptions.
    """
    try:
        conn = get_connection()
    except (sqlite3.Error, OSError) as e:
        raise PersistenceError(f"Could not open database: {e}") from e

    try:
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise PersistenceError(f"{action} failed: {e}") from e
    finally:
        conn.close()


def _check(collection: str, fields: Iterable[str] = ()) -> None:
    """Reject collection or field names that aren't part of the schema."""
    if collection not in COLLECTIONS:
        raise InvalidInputError(f"Unknown collection '{collection}'")

    known = COLLECTIONS[collection]
    for name in fields:
        if name != "id" and name not in known:
            raise InvalidInputError(f"Unknown field '{name}' in {collection}")


def _quote(name: str) -> str:
    # "order" is an SQL keyword
    return f'"{name}"'


# --- Writes ---


def insert(collection: str, record: Dict[str, Any]) -> int:
    """
    Insert a record into a collection.

    Args:
        collection: Collection name (boards, columns, tasks, comments)
        record: Field values, without an id

    Returns:
        The generated id
    """
    _check(collection, record.keys())
    names = list(record.keys())
    placeholders = ", ".join("?" for _ in names)
    columns_sql = ", ".join(_quote(n) for n in names)

    with _session(f"insert into {collection}") as conn:
        cursor = conn.execute(
            f"INSERT INTO {collection} ({columns_sql}) VALUES ({placeholders})",
            [record[n] for n in names],
        )
        record_id = cursor.lastrowid

    logger.debug("Inserted %s #%s", collection, record_id)
    return record_id


def update_fields(collection: str, record_id: int, partial: Dict[str, Any]) -> None:
    """
    Update named fields of one record.

    Args:
        collection: Collection name
        record_id: Id of the record to update
        partial: Field values to write; other fields are left alone

    Raises:
        PersistenceError: If no record has that id
    """
    if not partial:
        return

    _check(collection, partial.keys())
    names = list(partial.keys())
    assignments = ", ".join(f"{_quote(n)} = ?" for n in names)

    with _session(f"update {collection} #{record_id}") as conn:
        cursor = conn.execute(
            f"UPDATE {collection} SET {assignments} WHERE id = ?",
            [partial[n] for n in names] + [record_id],
        )
        if cursor.rowcount == 0:
            raise PersistenceError(f"update {collection} #{record_id} failed: no such record")


def delete(collection: str, record_id: int) -> None:
    """Delete one record by id. Deleting a missing id is a no-op."""
    _check(collection)

    with _session(f"delete {collection} #{record_id}") as conn:
        conn.execute(f"DELETE FROM {collection} WHERE id = ?", (record_id,))


def delete_by_equality(collection: str, field: str, value: Any) -> int:
    """
    Delete every record whose field equals value.

    Returns:
        Number of records deleted
    """
    _check(collection, [field])

    with _session(f"delete {collection} where {field}") as conn:
        cursor = conn.execute(
            f"DELETE FROM {collection} WHERE {_quote(field)} = ?", (value,)
        )
        return cursor.rowcount


# --- Reads ---


def get(collection: str, record_id: int) -> Optional[sqlite3.Row]:
    """
    Fetch a single record by id.

    Returns:
        Row if found, None otherwise
    """
    _check(collection)

    with _session(f"read {collection} #{record_id}") as conn:
        return conn.execute(
            f"SELECT * FROM {collection} WHERE id = ?", (record_id,)
        ).fetchone()


def query_by_equality(
    collection: str,
    field: str,
    value: Any,
    sort_by: Optional[str] = None,
) -> List[sqlite3.Row]:
    """
    List records whose field equals value.

    Args:
        collection: Collection name
        field: Field to filter on
        value: Value to match
        sort_by: Optional field to sort ascending by (ties broken by id)

    Returns:
        Matching rows
    """
    fields = [field] + ([sort_by] if sort_by else [])
    _check(collection, fields)

    sql = f"SELECT * FROM {collection} WHERE {_quote(field)} = ?"
    if sort_by:
        sql += f" ORDER BY {_quote(sort_by)}, id"

    with _session(f"query {collection}") as conn:
        return conn.execute(sql, (value,)).fetchall()


def count_by_equality(collection: str, field: str, value: Any) -> int:
    """Count records whose field equals value."""
    _check(collection, [field])

    with _session(f"count {collection}") as conn:
        row = conn.execute(
            f"SELECT COUNT(*) FROM {collection} WHERE {_quote(field)} = ?", (value,)
        ).fetchone()
        return row[0]
