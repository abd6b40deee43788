"""Game engine for Connect4 state management."""

import logging
from collections.abc import Sequence

import numpy as np

from ..ai.interface import AIInterface
from ..ai.minimax import MinimaxAI
from ..core.bus import EventBus, get_event_bus
from ..core.config import Settings, get_settings
from ..core.errors import BoardBusyError, ColumnFullError, TurnOrderError
from ..core.events import Event, EventType
from ..core.types import GamePhase, GameState, Move, MoveResult, Player, Position
from .board import Board
from .rules import COLS, ROWS, WIN_LENGTH
from .session import Session


logger = logging.getLogger(__name__)


class GameEngine:
    """Manages game state and enforces turn order.

    Stateful engine that:
    - Owns the board and the per-game phase
    - Applies human and computer moves
    - Detects wins/draws and updates the session scores
    - Emits events for state changes

    The computer search simulates moves on the engine's own board, so no
    move may be applied until it returns (`BoardBusyError`).
    """

    def __init__(
        self,
        ai: AIInterface | None = None,
        session: Session | None = None,
        bus: EventBus | None = None,
        *,
        rows: int = ROWS,
        cols: int = COLS,
        win_length: int = WIN_LENGTH,
        human_first: bool = True,
    ):
        """Initialize game engine.

        Args:
            ai: Computer player (minimax at default depth if None)
            session: Score keeper shared across games (fresh if None)
            bus: Event bus (uses global if None)
            human_first: Whether the human plays ONE in new games
        """
        self.ai = ai or MinimaxAI()
        self.session = session if session is not None else Session()
        self.bus = bus or get_event_bus()
        self.human_first = human_first
        self._board = Board(rows, cols, win_length)
        self._phase = GamePhase.NOT_STARTED
        self._human = Player.ONE
        self._winner: Player | None = None
        self._winning_positions: list[Position] = []
        self._history: list[Move] = []
        self._searching = False
        self.last_explanation = ""

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> "GameEngine":
        """Build an engine from application settings."""
        settings = settings or get_settings()
        kwargs.setdefault("ai", MinimaxAI(depth=settings.ai.depth))
        return cls(
            rows=settings.game.rows,
            cols=settings.game.cols,
            win_length=settings.game.win_length,
            human_first=settings.game.human_first,
            **kwargs,
        )

    # ─────────────────────────────────────────────────────────
    # Game lifecycle
    # ─────────────────────────────────────────────────────────

    def new_game(self, human_first: bool | None = None) -> GameState:
        """Start a new game on an empty board. Scores are kept.

        Args:
            human_first: Override the engine default for this and later games
        """
        self._require_idle()
        if human_first is not None:
            self.human_first = human_first

        self._board.initialize()
        self._human = Player.ONE if self.human_first else Player.TWO
        self._phase = GamePhase.IN_PROGRESS
        self._winner = None
        self._winning_positions = []
        self._history = []

        logger.info("New game, human plays %s", self._human)
        self.bus.publish(Event(
            type=EventType.GAME_STARTED,
            data={"human": self._human.value, "first_player": Player.ONE.value},
            source="game_engine",
        ))
        return self.state

    def reset(self) -> GameState:
        """Reset for a new game (scores persist)."""
        self.bus.publish(Event(type=EventType.GAME_RESET, source="game_engine"))
        return self.new_game()

    def restore(
        self,
        matrix: np.ndarray | Sequence[Sequence[int]],
        human_player: Player = Player.ONE,
    ) -> GameState:
        """Load a board snapshot produced by `Board.to_matrix`.

        The phase is recomputed from the position; a line already on the
        board is reported as a win but not added to the scores.
        """
        self._require_idle()
        if human_player is Player.EMPTY:
            raise ValueError("human_player must be ONE or TWO")

        board = Board.from_matrix(matrix, win_length=self._board.win_length)
        self._board = board
        self._human = human_player
        self._history = []

        line = board.winning_line()
        if line:
            self._phase = GamePhase.WON
            self._winner, self._winning_positions = line
        else:
            self._phase = GamePhase.DRAWN if board.is_full() else GamePhase.IN_PROGRESS
            self._winner = None
            self._winning_positions = []

        logger.info("Restored board at turn %d (%s)", board.turn_count, self._phase.name)
        self.bus.publish(Event(
            type=EventType.GAME_STARTED,
            data={"human": self._human.value, "restored": True, "turn": board.turn_count},
            source="game_engine",
        ))
        return self.state

    # ─────────────────────────────────────────────────────────
    # Moves
    # ─────────────────────────────────────────────────────────

    def play_human(self, column: int) -> MoveResult:
        """Apply the human's move.

        Raises:
            TurnOrderError: If no game is running or it is the computer's turn
            InvalidCoordinateError: If the column is off the board
            BoardBusyError: If called while the computer is searching
        """
        self._require_idle()
        self._require_turn(self._human)
        return self._apply_move(column, self._human)

    def choose_computer_move(self) -> int | None:
        """Ask the AI for the computer's column without applying it.

        Returns:
            Column index, or None if the board has no legal move
        """
        self._require_idle()
        if not self._board.valid_columns():
            return None
        self._require_turn(self.computer_player)

        self._searching = True
        try:
            column, explanation = self.ai.get_move_with_explanation(self._board)
        finally:
            self._searching = False
        self.last_explanation = explanation

        logger.info("%s chose column %s: %s", self.ai.get_name(), column, explanation)
        self.bus.publish(Event(
            type=EventType.AI_MOVE_CHOSEN,
            data={"column": column, "player": self.computer_player.value, "explanation": explanation},
            source="game_engine",
        ))
        return column

    def play_computer(self) -> MoveResult | None:
        """Let the computer choose and apply its move.

        Returns:
            The move result, or None if there was no legal move
        """
        column = self.choose_computer_move()
        if column is None:
            return None
        return self._apply_move(column, self.computer_player)

    def play_turn(self, column: int) -> tuple[MoveResult, MoveResult | None]:
        """Human move followed by the computer's reply if the game goes on."""
        human = self.play_human(column)
        if not human.success or self._phase != GamePhase.IN_PROGRESS:
            return human, None
        return human, self.play_computer()

    def _apply_move(self, column: int, player: Player) -> MoveResult:
        self._require_idle()
        try:
            row = self._board.play(column, player)
        except ColumnFullError as e:
            logger.info("Rejected move by %s: %s", player, e)
            self.bus.publish(Event(
                type=EventType.INVALID_MOVE,
                data={"column": column, "player": player.value, "reason": str(e)},
                source="game_engine",
            ))
            return MoveResult(
                success=False, column=column, player=player, phase=self._phase, error=str(e)
            )
        self._board.increment_turn()

        move = Move(column=column, player=player, row=row)
        self._history.append(move)
        logger.info("Move %d: %s", self._board.turn_count, move)
        self.bus.publish(Event(
            type=EventType.MOVE_MADE,
            data={"move": move, "column": column, "row": row, "player": player.value},
            source="game_engine",
        ))

        line = self._board.winning_line()
        if line:
            self._finish_won(*line)
        elif self._board.is_full():
            self._phase = GamePhase.DRAWN
            logger.info("Game drawn after %d moves", self._board.turn_count)
            self.bus.publish(Event(type=EventType.GAME_DRAW, source="game_engine"))
        else:
            next_player = self._board.current_player()
            self.bus.publish(Event(
                type=EventType.TURN_CHANGED,
                data={"player": next_player.value, "turn": self._board.turn_count},
                source="game_engine",
            ))

        return MoveResult(
            success=True,
            column=column,
            player=player,
            phase=self._phase,
            row=row,
            winner=self._winner,
        )

    def _finish_won(self, winner: Player, positions: list[Position]) -> None:
        self._phase = GamePhase.WON
        self._winner = winner
        self._winning_positions = positions
        total = self.session.record_win(winner)

        logger.info("%s wins (%d total)", winner, total)
        self.bus.publish(Event(
            type=EventType.GAME_WON,
            data={"winner": winner.value, "positions": positions},
            source="game_engine",
        ))
        self.bus.publish(Event(
            type=EventType.SCORE_UPDATED,
            data={p.value: s for p, s in self.scores.items()},
            source="game_engine",
        ))

    def _require_idle(self) -> None:
        if self._searching:
            raise BoardBusyError("Board is in use by the computer search")

    def _require_turn(self, player: Player) -> None:
        if self._phase != GamePhase.IN_PROGRESS:
            raise TurnOrderError(f"No game in progress (phase {self._phase.name})")
        if self._board.current_player() != player:
            raise TurnOrderError(f"Not {player}'s turn")

    # ─────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────

    def cell(self, row: int, col: int) -> Player:
        """Cell contents (raises InvalidCoordinateError off the board)."""
        return self._board.cell(row, col)

    def is_playable_cell(self, row: int, col: int) -> bool:
        """True if the human may drop a piece that lands on (row, col) now.

        Raises:
            InvalidCoordinateError: If (row, col) is off the board
        """
        landable = self._board.is_landable(row, col)
        return landable and self.is_human_turn

    def score(self, player: Player) -> int:
        return self.session.score(player)

    @property
    def scores(self) -> dict[Player, int]:
        return dict(self.session.wins)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def human_player(self) -> Player:
        return self._human

    @property
    def computer_player(self) -> Player:
        return self._human.opponent

    @property
    def is_game_over(self) -> bool:
        return self._phase.is_over

    @property
    def is_human_turn(self) -> bool:
        return (
            self._phase == GamePhase.IN_PROGRESS
            and self._board.current_player() == self._human
        )

    @property
    def is_computer_turn(self) -> bool:
        return (
            self._phase == GamePhase.IN_PROGRESS
            and self._board.current_player() == self.computer_player
        )

    @property
    def state(self) -> GameState:
        """Snapshot of the current game."""
        in_progress = self._phase == GamePhase.IN_PROGRESS
        return GameState(
            grid=self._board.grid,
            phase=self._phase,
            current_player=self._board.current_player(),
            human_player=self._human,
            winner=self._winner,
            winning_positions=list(self._winning_positions),
            legal_moves=self._board.valid_columns() if in_progress else [],
            turn_number=self._board.turn_count,
            scores=self.scores,
            move_history=list(self._history),
        )
