"""
FILE: cardboard/core/batch.py
PURPOSE: Sequential multi-record writes that report how far they got
EXPORTS:
  - WriteResult (dataclass returned by a finished batch)
  - WriteBatch (collects store calls, runs them in order)
DEPENDENCIES:
  - dataclasses (stdlib)
  - logging (stdlib)
  - cardboard.core.exceptions (PersistenceError, PartialWriteError)
NOTES:
  - Not a transaction: each store call commits on its own
  - Steps run in the order they were added
  - The first failing step stops the batch and raises PartialWriteError
    carrying the number of steps that did complete
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from .exceptions import PersistenceError, PartialWriteError

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """
    Outcome of a completed batch.

    Attributes:
        operation: Name of the operation (e.g., "reorder columns")
        writes: Number of store calls issued
    """
    operation: str
    writes: int = 0


class WriteBatch:
    """
    An ordered list of store calls for one operation.

    Usage:
        batch = WriteBatch("reorder columns")
        for column in columns:
            batch.add(repository.update_fields, COLUMNS, column.id, {"order": column.order})
        result = batch.run()
    """

    def __init__(self, operation: str):
        self.operation = operation
        self._steps: List[Tuple[Callable[..., Any], tuple]] = []

    def add(self, call: Callable[..., Any], *args: Any) -> None:
        self._steps.append((call, args))

    def __len__(self) -> int:
        return len(self._steps)

    def run(self) -> WriteResult:
        """
        Issue every step in order.

        Returns:
            WriteResult with the number of writes issued

        Raises:
            PartialWriteError: If a step fails; earlier steps stay written
        """
        total = len(self._steps)
        for completed, (call, args) in enumerate(self._steps):
            try:
                call(*args)
            except PersistenceError as e:
                logger.warning(
                    "%s stopped after %d/%d writes: %s",
                    self.operation, completed, total, e,
                )
                raise PartialWriteError(self.operation, completed, total, e) from e

        logger.debug("%s: %d writes", self.operation, total)
        return WriteResult(operation=self.operation, writes=total)
