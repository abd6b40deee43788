"""Abstract interface for AI players."""

from abc import ABC, abstractmethod

from ..core.errors import NoLegalMoveError
from ..game.board import Board


class AIInterface(ABC):
    """Abstract interface for AI players.

    Implementations pick a column for the side to move on a board.
    """

    @abstractmethod
    def choose_move(self, board: Board) -> int | None:
        """Compute the best move.

        Args:
            board: Current board; the side to move is `board.current_player()`

        Returns:
            Column index, or None if no column is playable
        """

    @abstractmethod
    def get_name(self) -> str:
        """Get AI name for display."""

    def get_move(self, board: Board) -> int:
        """Like `choose_move` but a full board is an error.

        Raises:
            NoLegalMoveError: If no column is playable
        """
        move = self.choose_move(board)
        if move is None:
            raise NoLegalMoveError()
        return move

    def get_move_with_explanation(self, board: Board) -> tuple[int, str]:
        """Get move with explanation (optional override).

        Args:
            board: Current board

        Returns:
            Tuple of (column, explanation_string)
        """
        move = self.get_move(board)
        return move, f"Selected column {move}"
