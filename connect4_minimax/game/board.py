"""Mutable Connect4 board: grid, column heights and turn counter."""

from collections.abc import Sequence

import numpy as np

from ..core.errors import ColumnFullError, InvalidCoordinateError
from ..core.types import Player, Position
from .rules import COLS, ROWS, WIN_LENGTH, line_windows, validate_geometry


class Board:
    """Board state mutated in place by both play and search.

    Row 0 is the top; pieces fall towards row ``rows - 1``. For every column
    the board caches the next free row (``-1`` when the column is full), and
    the turn counter always equals the number of pieces on the board.

    `play`/`undo` and `increment_turn`/`decrement_turn` are O(1) and exactly
    reversible so the search can simulate moves on the shared instance.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, win_length: int = WIN_LENGTH):
        validate_geometry(rows, cols, win_length)
        self.rows = rows
        self.cols = cols
        self.win_length = win_length
        self._grid: list[list[Player]] = []
        self._heights: list[int] = []
        self._turn = 0
        self.initialize()

    def initialize(self) -> None:
        """Empty the grid and reset column heights and the turn counter."""
        self._grid = [[Player.EMPTY] * self.cols for _ in range(self.rows)]
        self._heights = [self.rows - 1] * self.cols
        self._turn = 0

    # ─────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────

    @property
    def turn_count(self) -> int:
        return self._turn

    @property
    def column_heights(self) -> tuple[int, ...]:
        """Next free row per column, -1 for a full column."""
        return tuple(self._heights)

    @property
    def grid(self) -> list[list[Player]]:
        """Copy of the grid, top row first."""
        return [row[:] for row in self._grid]

    def _check_column(self, column: int) -> None:
        if not 0 <= column < self.cols:
            raise InvalidCoordinateError(None, column, self.rows, self.cols)

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise InvalidCoordinateError(row, col, self.rows, self.cols)

    def cell(self, row: int, col: int) -> Player:
        """Contents of a cell.

        Raises:
            InvalidCoordinateError: If (row, col) is off the board
        """
        self._check_cell(row, col)
        return self._grid[row][col]

    def can_play(self, column: int) -> bool:
        self._check_column(column)
        return self._heights[column] >= 0

    def landing_row(self, column: int) -> int:
        """Row a piece dropped in `column` would land on, -1 if full."""
        self._check_column(column)
        return self._heights[column]

    def is_landable(self, row: int, col: int) -> bool:
        """True if (row, col) is the empty cell a piece in `col` would land on.

        Raises:
            InvalidCoordinateError: If (row, col) is off the board
        """
        self._check_cell(row, col)
        return self._heights[col] == row

    def valid_columns(self) -> list[int]:
        """Playable columns, left to right."""
        return [c for c in range(self.cols) if self._heights[c] >= 0]

    def is_full(self) -> bool:
        return all(height < 0 for height in self._heights)

    def current_player(self) -> Player:
        return Player.ONE if self._turn % 2 == 0 else Player.TWO

    # ─────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────

    def play(self, column: int, player: Player) -> int:
        """Drop `player` into `column` and return the row it landed on.

        The turn counter is left alone; callers pair this with
        `increment_turn`.

        Raises:
            InvalidCoordinateError: If the column is off the board
            ColumnFullError: If the column has no free row (board unchanged)
        """
        self._check_column(column)
        if player is Player.EMPTY:
            raise ValueError("Cannot play an empty cell")
        row = self._heights[column]
        if row < 0:
            raise ColumnFullError(column)
        self._grid[row][column] = player
        self._heights[column] = row - 1
        return row

    def undo(self, row: int, column: int) -> None:
        """Take back the piece just played at (row, column).

        Only valid for the most recent piece in that column.
        """
        self._grid[row][column] = Player.EMPTY
        self._heights[column] += 1

    def increment_turn(self) -> None:
        self._turn += 1

    def decrement_turn(self) -> None:
        self._turn -= 1

    # ─────────────────────────────────────────────────────────
    # Win detection
    # ─────────────────────────────────────────────────────────

    def winning_line(self) -> tuple[Player, list[Position]] | None:
        """First complete line on the board and its owner.

        Scans vertical, horizontal, diagonal down-right, then diagonal
        up-right windows, row-major within each.
        """
        g = self._grid
        for window in line_windows(self.rows, self.cols, self.win_length):
            r0, c0 = window[0]
            player = g[r0][c0]
            if player is Player.EMPTY:
                continue
            if all(g[r][c] is player for r, c in window[1:]):
                return player, [Position(row=r, col=c) for r, c in window]
        return None

    def check_winner(self) -> Player | None:
        line = self.winning_line()
        return line[0] if line else None

    def is_winning_move(self, column: int, player: Player | None = None) -> bool:
        """Would dropping `player` into `column` complete a line?

        Counts matching pieces outward from the landing cell instead of
        playing the move, so the board is never touched. Defaults to the
        side to move.
        """
        self._check_column(column)
        if player is None:
            player = self.current_player()
        row = self._heights[column]
        if row < 0:
            return False

        g = self._grid
        need = self.win_length - 1

        # Vertical: only pieces below can exist
        if row + need < self.rows and all(g[row + i][column] is player for i in range(1, need + 1)):
            return True

        # dy=-1: ↗ diagonal, dy=0: horizontal, dy=1: ↘ diagonal
        for dy in (-1, 0, 1):
            count = 0
            for dx in (-1, 1):
                x, y = column + dx, row + dx * dy
                while 0 <= x < self.cols and 0 <= y < self.rows and g[y][x] is player:
                    count += 1
                    x += dx
                    y += dx * dy
            if count >= need:
                return True

        return False

    def find_immediate_win(self, player: Player | None = None) -> int | None:
        """Leftmost column where `player` (default: side to move) wins at once."""
        if player is None:
            player = self.current_player()
        for column in range(self.cols):
            if self._heights[column] >= 0 and self.is_winning_move(column, player):
                return column
        return None

    def is_terminal(self) -> bool:
        """True if the side to move has a winning move or the board is full.

        A line already on the board does not count; the search stops one
        ply earlier, when the win becomes available.
        """
        return self.find_immediate_win() is not None or self.is_full()

    # ─────────────────────────────────────────────────────────
    # Copies & snapshots
    # ─────────────────────────────────────────────────────────

    def copy(self) -> "Board":
        """Independent copy, e.g. for a search running elsewhere."""
        board = Board.__new__(Board)
        board.rows = self.rows
        board.cols = self.cols
        board.win_length = self.win_length
        board._grid = [row[:] for row in self._grid]
        board._heights = self._heights[:]
        board._turn = self._turn
        return board

    def to_matrix(self) -> np.ndarray:
        """Convert to a numpy matrix.

        Returns:
            int8 array of shape (rows, cols) where EMPTY=0, ONE=1, TWO=2
        """
        return np.array([[cell.code for cell in row] for row in self._grid], dtype=np.int8)

    @classmethod
    def from_matrix(
        cls, matrix: np.ndarray | Sequence[Sequence[int]], win_length: int = WIN_LENGTH
    ) -> "Board":
        """Rebuild a board from `to_matrix` output.

        Column heights and the turn counter are derived from the pieces.

        Raises:
            ValueError: If the matrix is not 2-D, holds unknown codes, has
                a piece floating above an empty cell or piece counts no game
                can reach (ONE moves first, so ONE has as many pieces as TWO
                or one more)
        """
        array = np.asarray(matrix)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2-D matrix, got shape {array.shape}")
        rows, cols = array.shape
        board = cls(rows, cols, win_length)

        ones = int(np.count_nonzero(array == Player.ONE.code))
        twos = int(np.count_nonzero(array == Player.TWO.code))
        if ones - twos not in (0, 1):
            raise ValueError(f"Unreachable position: {ones} ONE and {twos} TWO pieces")

        pieces = 0
        for col in range(cols):
            height = rows - 1
            for row in range(rows - 1, -1, -1):
                player = Player.from_code(int(array[row, col]))
                if player is Player.EMPTY:
                    continue
                if row != height:
                    raise ValueError(f"Floating piece at ({row}, {col})")
                board._grid[row][col] = player
                height -= 1
                pieces += 1
            board._heights[col] = height
        board._turn = pieces
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self._heights == other._heights
            and self._turn == other._turn
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols}, turn={self._turn})"
