"""
Shared data types for the Connect4 engine.

These types are the contracts between the board, the search and the
presentation layer. Cells hold a `Player`; `Player.EMPTY` marks a free cell.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


# ─────────────────────────────────────────────────────────────
# PLAYER & GAME PHASE
# ─────────────────────────────────────────────────────────────


class Player(Enum):
    """Cell value / player identifier."""

    ONE = "one"  # Moves first
    TWO = "two"
    EMPTY = "empty"

    def __str__(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        """Get text symbol for display."""
        return {"one": "X", "two": "O", "empty": "."}[self.value]

    @property
    def code(self) -> int:
        """Integer code used in matrix snapshots."""
        return _CODES[self]

    @property
    def opponent(self) -> "Player":
        """The other player."""
        if self is Player.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Player.TWO if self is Player.ONE else Player.ONE

    @classmethod
    def from_code(cls, code: int) -> "Player":
        """Inverse of `code`."""
        for player, value in _CODES.items():
            if value == code:
                return player
        raise ValueError(f"Unknown cell code: {code!r}")


_CODES = {Player.EMPTY: 0, Player.ONE: 1, Player.TWO: 2}

PLAYERS = (Player.ONE, Player.TWO)


class GamePhase(Enum):
    """Per-game state machine."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    DRAWN = auto()

    @property
    def is_over(self) -> bool:
        return self in (GamePhase.WON, GamePhase.DRAWN)


# ─────────────────────────────────────────────────────────────
# BOARD COORDINATES & MOVES
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Position:
    """Grid position (0-indexed)."""

    row: int  # 0 = top
    col: int  # 0 = left


@dataclass
class Move:
    """A move that has been applied to the board."""

    column: int
    player: Player
    row: int

    def __str__(self) -> str:
        return f"{self.player.symbol} → Column {self.column}"


@dataclass
class MoveResult:
    """Outcome of applying a move through the engine.

    `row` is only set when `success` is True. `winner` and `phase` describe
    the game after the move.
    """

    success: bool
    column: int
    player: Player
    phase: GamePhase
    row: int | None = None
    winner: Player | None = None
    error: str | None = None

    @property
    def is_draw(self) -> bool:
        return self.phase == GamePhase.DRAWN


# ─────────────────────────────────────────────────────────────
# GAME STATE SNAPSHOT
# ─────────────────────────────────────────────────────────────


@dataclass
class GameState:
    """Complete game state snapshot for the presentation layer."""

    grid: list[list[Player]]
    phase: GamePhase
    current_player: Player
    human_player: Player
    winner: Player | None = None
    winning_positions: list[Position] = field(default_factory=list)
    legal_moves: list[int] = field(default_factory=list)
    turn_number: int = 0
    scores: dict[Player, int] = field(default_factory=dict)
    move_history: list[Move] = field(default_factory=list)

    @property
    def computer_player(self) -> Player:
        return self.human_player.opponent
