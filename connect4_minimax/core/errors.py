"""Exceptions raised by the board, the search and the engine.

All of them are recoverable; the presentation layer decides how to react.
"""


class Connect4Error(Exception):
    """Base class for engine errors."""


class ColumnFullError(Connect4Error, ValueError):
    """A piece was dropped into a column with no free row."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class InvalidCoordinateError(Connect4Error, IndexError):
    """A row or column lies outside the board."""

    def __init__(self, row: int | None, col: int | None, rows: int, cols: int):
        if row is None:
            message = f"Column {col} out of range (0-{cols - 1})"
        else:
            message = f"Cell ({row}, {col}) out of range ({rows}x{cols} board)"
        super().__init__(message)
        self.row = row
        self.col = col


class NoLegalMoveError(Connect4Error, ValueError):
    """A move was requested on a board with no playable column."""

    def __init__(self, message: str = "No legal moves available"):
        super().__init__(message)


class TurnOrderError(Connect4Error, ValueError):
    """A move was applied out of turn or outside a running game."""


class BoardBusyError(Connect4Error, RuntimeError):
    """The board was touched while a search was simulating moves on it."""
