"""Minimax AI with alpha-beta pruning."""

import logging
import math
import time
from dataclasses import dataclass

from ..core.types import Player
from ..game.board import Board
from .evaluation import score_position
from .interface import AIInterface


logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 4

# Not mirrored: LOSS_SCORE != -WIN_SCORE.
WIN_SCORE = 10**14
LOSS_SCORE = -(10**13)
DRAW_SCORE = 0


@dataclass(frozen=True)
class SearchResult:
    """Column chosen at a node and its minimax value."""

    column: int | None
    score: float


class MinimaxAI(AIInterface):
    """Minimax AI with alpha-beta pruning.

    Plays for whichever side is to move when `choose_move` is called and
    maximises that side's score. Moves are simulated on the board passed
    in and undone before returning, so the caller must not touch the board
    while a search is running.

    Features:
    - Fixed search depth
    - Alpha-beta pruning, columns tried left to right
    - Heuristic evaluation at the horizon
    - First column reaching the best score wins ties
    """

    def __init__(self, depth: int = DEFAULT_DEPTH):
        """Initialize Minimax AI.

        Args:
            depth: Search depth in plies (at least 1)
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.nodes_searched = 0
        self._last_result: SearchResult | None = None
        self._last_explanation = ""

    def choose_move(self, board: Board, depth: int | None = None) -> int | None:
        """Find best move using minimax with alpha-beta pruning."""
        return self.search(board, depth).column

    def search(self, board: Board, depth: int | None = None) -> SearchResult:
        """Run the search from the side to move.

        Returns:
            SearchResult with column None when the board has no legal move
        """
        depth = self.depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        if not board.valid_columns():
            logger.info("No legal move on a full board")
            self._last_result = SearchResult(None, DRAW_SCORE)
            return self._last_result

        player = board.current_player()
        self.nodes_searched = 0
        started = time.perf_counter()

        result = self._minimax(board, depth, -math.inf, math.inf, True, player)

        logger.debug(
            "Search for %s at depth %d: column=%s score=%s nodes=%d (%.3fs)",
            player, depth, result.column, result.score, self.nodes_searched,
            time.perf_counter() - started,
        )
        self._last_result = result
        return result

    def evaluate_moves(self, board: Board, depth: int | None = None) -> dict[int, float]:
        """Exact minimax value of every playable root column.

        Each column is searched with a full window, so the values are not
        cut short by pruning against its siblings. A column that wins on
        the spot scores `WIN_SCORE` without being searched, as it does at a
        terminal root in `search`.
        """
        depth = self.depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        player = board.current_player()
        scores: dict[int, float] = {}
        for col in board.valid_columns():
            if board.is_winning_move(col, player):
                scores[col] = WIN_SCORE
                continue
            row = board.play(col, player)
            board.increment_turn()
            try:
                scores[col] = self._minimax(
                    board, depth - 1, -math.inf, math.inf, False, player
                ).score
            finally:
                board.undo(row, col)
                board.decrement_turn()
        return scores

    def _minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        player: Player,
    ) -> SearchResult:
        """Minimax with alpha-beta pruning.

        Args:
            player: The side being maximised

        Returns:
            SearchResult of (best_column, score)
        """
        self.nodes_searched += 1
        terminal = board.is_terminal()

        if depth == 0 or terminal:
            if terminal:
                mover = board.current_player()
                winning_col = board.find_immediate_win(mover)
                if winning_col is not None:
                    score = WIN_SCORE if mover == player else LOSS_SCORE
                    return SearchResult(winning_col, score)
                return SearchResult(None, DRAW_SCORE)
            return SearchResult(None, score_position(board, player))

        valid = board.valid_columns()
        best_col = valid[0]

        if maximizing:
            max_eval = -math.inf
            for col in valid:
                eval_score = self._simulate(board, col, depth, alpha, beta, False, player)

                if eval_score > max_eval:
                    max_eval = eval_score
                    best_col = col

                alpha = max(alpha, max_eval)
                if alpha >= beta:
                    break  # Beta cutoff

            return SearchResult(best_col, max_eval)
        else:
            min_eval = math.inf
            for col in valid:
                eval_score = self._simulate(board, col, depth, alpha, beta, True, player)

                if eval_score < min_eval:
                    min_eval = eval_score
                    best_col = col

                beta = min(beta, min_eval)
                if alpha >= beta:
                    break  # Alpha cutoff

            return SearchResult(best_col, min_eval)

    def _simulate(
        self,
        board: Board,
        col: int,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        player: Player,
    ) -> float:
        """Play `col` for the side to move, search the child, then undo."""
        row = board.play(col, board.current_player())
        board.increment_turn()
        try:
            return self._minimax(board, depth - 1, alpha, beta, maximizing, player).score
        finally:
            board.undo(row, col)
            board.decrement_turn()

    def get_name(self) -> str:
        return f"Minimax (depth={self.depth})"

    def get_move_with_explanation(self, board: Board) -> tuple[int, str]:
        """Get move with explanation."""
        self._last_explanation = ""
        move = self.get_move(board)
        self._last_explanation = self._generate_explanation(board, move)
        return move, self._last_explanation

    def _generate_explanation(self, board: Board, move: int) -> str:
        """Generate explanation for a move."""
        me = board.current_player()
        if board.is_winning_move(move, me):
            return f"Winning move at column {move}!"
        if board.is_winning_move(move, me.opponent):
            return f"Blocking opponent win at column {move}"
        if move == board.cols // 2:
            return f"Column {move} (center control)"
        if self._last_result is not None and self._last_result.column == move:
            return f"Column {move} (best evaluated move, score {self._last_result.score:g})"
        return f"Column {move} (best evaluated move)"
