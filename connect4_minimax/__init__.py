"""Connect4 game-state engine and minimax opponent."""

from .ai import MinimaxAI
from .core import GamePhase, Player
from .game import Board, Session
from .game.engine import GameEngine


__version__ = "0.1.0"

__all__ = [
    "Board",
    "GameEngine",
    "GamePhase",
    "MinimaxAI",
    "Player",
    "Session",
]
