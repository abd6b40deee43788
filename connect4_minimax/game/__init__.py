"""Game logic module for Connect4.

`GameEngine` lives in `game.engine`; it depends on the AI package, which in
turn depends on `Board`.
"""

from .board import Board
from .rules import COLS, ROWS, WIN_LENGTH, line_windows
from .session import Session


__all__ = [
    "Board",
    "Session",
    "line_windows",
    "ROWS",
    "COLS",
    "WIN_LENGTH",
]
