# gamesolver/analyzer.py
from dataclasses import dataclass
from typing import Any, Dict, List

from gamesolver.core.game import MoveError
from gamesolver.core.score import Outcome, OutcomeKind, score_to_outcome

# result classes ordered from worst to best for the mover
_RANK = {OutcomeKind.LOSS: 0, OutcomeKind.TIE: 1, OutcomeKind.WIN: 2}
_LABELS = {OutcomeKind.WIN: "win", OutcomeKind.TIE: "tie", OutcomeKind.LOSS: "loss"}


@dataclass(frozen=True)
class MoveReport:
    move: Any
    score: int
    outcome: Outcome
    label: str


class Analyzer:
    def __init__(self, solver):
        self.solver = solver

    def label_moves(self, game) -> List[MoveReport]:
        """Solve every legal move of ``game`` and label it win / tie / loss for the mover."""
        reports = []
        for move, score in self.solver.move_scores(game):
            outcome = score_to_outcome(game, score)
            reports.append(MoveReport(move, score, outcome, _LABELS[outcome.kind]))
        return reports

    def classify_move(self, game, move) -> Dict[str, Any]:
        """
        Classify ``move`` against the best move available in ``game``.
        - game: position BEFORE the move (unchanged by this function).
        - move: the move actually played.
        Returns a dict with the label and both outcomes.

        Labels:
          - "Best move": same score as the best move
          - "Inaccuracy": same result, but slower to win or faster to lose/tie
          - "Mistake": throws a win into a tie, or a tie into a loss
          - "Blunder": throws a win into a loss
        """
        scores = self.solver.move_scores(game)
        played = [score for m, score in scores if m == move]
        if not played:
            raise MoveError(f"{move!r} is not a legal move")
        played_score = played[0]
        best_score = max(score for _m, score in scores)
        best_moves = [m for m, score in scores if score == best_score]

        played_outcome = score_to_outcome(game, played_score)
        best_outcome = score_to_outcome(game, best_score)
        drop = _RANK[best_outcome.kind] - _RANK[played_outcome.kind]

        if played_score == best_score:
            label = "Best move"
        elif drop == 0:
            label = "Inaccuracy"
        elif drop == 1:
            label = "Mistake"
        else:
            label = "Blunder"

        return {
            "move": move,
            "score": played_score,
            "outcome": played_outcome,
            "best_moves": best_moves,
            "best_score": best_score,
            "best_outcome": best_outcome,
            "label": label,
        }
