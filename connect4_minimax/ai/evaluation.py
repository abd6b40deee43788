"""Static positional evaluation used at the search horizon."""

from collections.abc import Sequence

from ..core.types import Player
from ..game.board import Board
from ..game.rules import line_windows


CENTER_WEIGHT = 3


def score_window(window: Sequence[Player], player: Player) -> int:
    """Score one window from `player`'s point of view.

    The penalty for an opponent three (-4) is not the negation of the
    bonus for an own three (+5).
    """
    opponent = player.opponent
    mine = window.count(player)
    theirs = window.count(opponent)
    empty = window.count(Player.EMPTY)
    size = len(window)

    score = 0
    if mine == size:
        score += 100
    elif mine == size - 1 and empty == 1:
        score += 5
    elif mine == size - 2 and empty == 2:
        score += 2

    if theirs == size - 1 and empty == 1:
        score -= 4

    return score


def score_position(board: Board, player: Player) -> int:
    """Heuristic value of the whole board for `player`.

    Sums every window in all four orientations, then adds a bonus for each
    of `player`'s pieces in the middle column. Centre pieces are counted in
    both.
    """
    grid = board.grid
    score = 0

    center = board.cols // 2
    score += CENTER_WEIGHT * sum(1 for row in grid if row[center] is player)

    for window in line_windows(board.rows, board.cols, board.win_length):
        score += score_window([grid[r][c] for r, c in window], player)

    return score
