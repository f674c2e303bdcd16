"""
FILE: cardboard/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - DEFAULT_BOARD_ID / DEFAULT_BOARD_TITLE: The single implicit board
  - KIND_COLUMN / KIND_TASK / DRAG_KINDS: Drag identifier kinds
  - COLLECTIONS: Store collections and their writable fields
  - DB_ENV_VAR: Environment variable overriding the database path
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Drag identifiers are "<kind>-<id>", e.g. "column-3" or "task-10"
"""

# Board constants
DEFAULT_BOARD_ID = 1
DEFAULT_BOARD_TITLE = "My Board"

# Drag identifier kinds
KIND_COLUMN = "column"
KIND_TASK = "task"
DRAG_KINDS = (KIND_COLUMN, KIND_TASK)
DRAG_ID_SEPARATOR = "-"

# Store collections (table name -> fields other than id)
BOARDS = "boards"
COLUMNS = "columns"
TASKS = "tasks"
COMMENTS = "comments"

COLLECTIONS = {
    BOARDS: ("title", "created_at"),
    COLUMNS: ("board_id", "title", "order"),
    TASKS: ("column_id", "title", "order", "created_at"),
    COMMENTS: ("task_id", "content", "created_at"),
}

# Configuration
DB_ENV_VAR = "CARDBOARD_DB"
