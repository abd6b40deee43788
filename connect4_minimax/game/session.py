"""Scores that outlive individual games."""

from dataclasses import dataclass, field

from ..core.types import PLAYERS, Player


@dataclass
class Session:
    """Per-player win counters for one application run.

    Owned by the presentation layer and handed to the engine by reference;
    starting a new game never resets it.
    """

    wins: dict[Player, int] = field(default_factory=lambda: {p: 0 for p in PLAYERS})

    def record_win(self, player: Player) -> int:
        """Add one win for `player` and return the new total."""
        if player not in PLAYERS:
            raise ValueError(f"Cannot score for {player}")
        self.wins[player] += 1
        return self.wins[player]

    def score(self, player: Player) -> int:
        return self.wins.get(player, 0)
