"""
FILE: cardboard/core/__init__.py
PURPOSE: Store, board state, and reorder engine
EXPORTS:
  - BoardService (from core.service)
  - ReorderEngine, DragRef, DragStart, DragEnd, MoveResult (from core.reorder)
"""

from .service import BoardService, TaskSlice
from .reorder import ReorderEngine, DragRef, DragStart, DragEnd, MoveResult

__all__ = [
    "BoardService",
    "TaskSlice",
    "ReorderEngine",
    "DragRef",
    "DragStart",
    "DragEnd",
    "MoveResult",
]
