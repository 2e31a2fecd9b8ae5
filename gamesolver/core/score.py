"""Score bounds and conversion of scores to distance-to-outcome."""
from __future__ import annotations

import enum
import sys
from dataclasses import dataclass

from .game import Game

UNBOUNDED = sys.maxsize


def upper_bound(game: Game) -> int:
    """Largest magnitude a score can take in ``game``.

    A game decided at total move count ``E`` is worth ``upper_bound - E`` to
    the winner. The bound sits one past ``max_moves`` so that a win on the
    last possible move is still strictly positive.
    """
    max_moves = game.max_moves
    if max_moves is None:
        return UNBOUNDED
    return max_moves + 1


class OutcomeKind(enum.Enum):
    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    moves: int = 0

    def __repr__(self):
        if self.kind is OutcomeKind.TIE:
            return "Tie"
        return f"{self.kind.name.capitalize()}({self.moves})"

    @property
    def is_win(self) -> bool:
        return self.kind is OutcomeKind.WIN

    @property
    def is_loss(self) -> bool:
        return self.kind is OutcomeKind.LOSS

    @property
    def is_tie(self) -> bool:
        return self.kind is OutcomeKind.TIE

    def to_score(self, game: Game) -> int:
        """Inverse of :func:`score_to_outcome` for the same position."""
        if self.kind is OutcomeKind.TIE:
            return 0
        remaining = upper_bound(game) - game.move_count - self.moves
        return remaining if self.kind is OutcomeKind.WIN else -remaining


def score_to_outcome(game: Game, score: int) -> Outcome:
    """Convert a solved score of ``game`` into Win(n), Loss(n) or Tie.

    ``n`` is the number of moves left until the game is decided.
    """
    if score > 0:
        return Outcome(OutcomeKind.WIN, upper_bound(game) - score - game.move_count)
    if score < 0:
        return Outcome(OutcomeKind.LOSS, upper_bound(game) + score - game.move_count)
    return Outcome(OutcomeKind.TIE)
