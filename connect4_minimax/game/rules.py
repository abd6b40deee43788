"""Line geometry shared by win detection and position scoring."""

from functools import lru_cache


ROWS = 6
COLS = 7
WIN_LENGTH = 4

Coord = tuple[int, int]  # (row, col)
Window = tuple[Coord, ...]

# Scan order matters for reproducible winner reporting.
DIRECTIONS: tuple[tuple[str, int, int], ...] = (
    ("vertical", 1, 0),
    ("horizontal", 0, 1),
    ("diagonal_down", 1, 1),   # ↘
    ("diagonal_up", -1, 1),    # ↗
)


def validate_geometry(rows: int, cols: int, win_length: int) -> None:
    """Reject boards on which no line of `win_length` fits.

    Raises:
        ValueError: If the geometry is unusable
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Board must have at least one row and column, got {rows}x{cols}")
    if win_length < 2:
        raise ValueError(f"win_length must be at least 2, got {win_length}")
    if win_length > max(rows, cols):
        raise ValueError(f"win_length {win_length} does not fit a {rows}x{cols} board")


def _direction_windows(
    rows: int, cols: int, length: int, dr: int, dc: int
) -> list[Window]:
    # Start cells in row-major order; a window is kept only if its far end is on the board.
    windows = []
    for row in range(rows):
        for col in range(cols):
            end_row = row + (length - 1) * dr
            end_col = col + (length - 1) * dc
            if not (0 <= end_row < rows and 0 <= end_col < cols):
                continue
            windows.append(tuple((row + i * dr, col + i * dc) for i in range(length)))
    return windows


@lru_cache(maxsize=None)
def line_windows(rows: int = ROWS, cols: int = COLS, length: int = WIN_LENGTH) -> tuple[Window, ...]:
    """Every contiguous run of `length` cells on a `rows` x `cols` board.

    Ordered vertical, horizontal, diagonal down-right, diagonal up-right,
    row-major by start cell within each orientation.
    """
    windows: list[Window] = []
    for _name, dr, dc in DIRECTIONS:
        windows.extend(_direction_windows(rows, cols, length, dr, dc))
    return tuple(windows)
