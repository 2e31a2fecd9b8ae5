import logging
import time
from typing import List, Optional, Tuple

from gamesolver.config import CONFIG, Config
from gamesolver.core.game import Game
from gamesolver.core.score import Outcome, score_to_outcome
from gamesolver.core.search import SearchStats, move_scores, par_move_scores_with_hasher, solve
from gamesolver.core.transposition import Hasher, TranspositionTable, make_table
from gamesolver.core.utils import format_info

logger = logging.getLogger(__name__)


class Solver:
    """Owns a transposition table and a config; the table survives between calls."""

    def __init__(self, config: Optional[Config] = None, table: Optional[TranspositionTable] = None,
                 hasher: Optional[Hasher] = None):
        self.config = config or CONFIG
        self.table = table if table is not None else make_table(self.config.table)
        self.hasher = hasher
        self.last_stats = SearchStats()

    def reset(self):
        self.table.clear()
        self.last_stats = SearchStats()

    def solve(self, game: Game) -> int:
        stats = SearchStats()
        start = time.time()
        score = solve(game, self.table, stats)
        self.last_stats = stats
        logger.info(format_info(score, score_to_outcome(game, score), stats.nodes,
                                time.time() - start, stats.iterations, len(self.table)))
        return score

    def outcome(self, game: Game) -> Outcome:
        return score_to_outcome(game, self.solve(game))

    def move_scores(self, game: Game) -> List[Tuple[object, int]]:
        stats = SearchStats()
        scores = list(move_scores(game, self.table, stats))
        self.last_stats = stats
        return scores

    def par_move_scores(self, game: Game) -> List[Tuple[object, int]]:
        stats = SearchStats()
        scores = par_move_scores_with_hasher(
            game,
            self.hasher,
            threads=self.config.search.threads or None,
            shards=self.config.table.shards,
            stats=stats,
        )
        self.last_stats = stats
        return scores

    def best_moves(self, game: Game) -> Tuple[List[object], Optional[int]]:
        """All moves sharing the best score, and that score (None if no moves)."""
        if self.config.search.parallel:
            scores = self.par_move_scores(game)
        else:
            scores = self.move_scores(game)
        if not scores:
            return [], None
        best = max(score for _move, score in scores)
        return [move for move, score in scores if score == best], best
