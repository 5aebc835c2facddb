"""Exceptions raised by the grid buffer model."""

from __future__ import annotations

from typing import Optional

from .models import Cursor, Token


class GridError(RuntimeError):
    """Base class for grid integrity failures."""


class GridIndexError(GridError, IndexError):
    """Raised when a row or column falls outside the grid."""

    def __init__(self, message: str, *, row: int, col: Optional[int] = None) -> None:
        super().__init__(message)
        self.row = row
        self.col = col


class GridDesyncError(GridError):
    """Raised when a write would push a line past the declared width.

    This means the backend and the local model disagree about the grid; the
    write has already been rolled back when the error is raised.
    """

    def __init__(
        self, message: str, *, cursor: Cursor, token: Token, width: int
    ) -> None:
        super().__init__(message)
        self.cursor = cursor
        self.token = token
        self.width = width


__all__ = ["GridError", "GridIndexError", "GridDesyncError"]
