"""AI module for Connect4."""

from .evaluation import score_position, score_window
from .interface import AIInterface
from .minimax import MinimaxAI, SearchResult


__all__ = [
    "AIInterface",
    "MinimaxAI",
    "SearchResult",
    "score_position",
    "score_window",
]
