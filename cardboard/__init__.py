"""
FILE: cardboard/__init__.py
PURPOSE: Terminal kanban board with drag-style reordering
"""

__version__ = "0.1.0"
