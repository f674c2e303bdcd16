"""
FILE: cardboard/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - CardboardError (base exception)
  - ColumnNotFoundError
  - TaskNotFoundError
  - InvalidInputError
  - PersistenceError
  - PartialWriteError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from CardboardError for easy catching
  - Exceptions include context (IDs, progress) for helpful error messages
  - Service layer raises these, UI layers catch and display
"""


class CardboardError(Exception):
    """Base exception for all Cardboard errors."""
    pass


class ColumnNotFoundError(CardboardError):
    """Column with given ID doesn't exist."""

    def __init__(self, column_id: int):
        self.column_id = column_id
        super().__init__(f"Column {column_id} not found")


class TaskNotFoundError(CardboardError):
    """Task with given ID doesn't exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidInputError(CardboardError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class PersistenceError(CardboardError):
    """The store rejected a read or write."""

    def __init__(self, message: str):
        super().__init__(message)


class PartialWriteError(PersistenceError):
    """
    A multi-record write stopped partway.

    Writes are not transactional, so the store keeps the first `completed`
    of `total` writes while in-memory state is left as it was.
    """

    def __init__(self, operation: str, completed: int, total: int, cause: Exception):
        self.operation = operation
        self.completed = completed
        self.total = total
        self.cause = cause
        super().__init__(
            f"{operation} failed after {completed}/{total} writes: {cause}"
        )
