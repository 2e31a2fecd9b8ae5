import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from gamesolver.core.game import Game, Tie, Win
from gamesolver.core.score import upper_bound
from gamesolver.core.transposition import (
    ConcurrentTable,
    Hasher,
    LowerBound,
    TranspositionTable,
    UpperBound,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    nodes: int = 0
    table_hits: int = 0
    table_cutoffs: int = 0
    beta_cutoffs: int = 0
    immediate_wins: int = 0
    re_searches: int = 0
    iterations: int = 0

    def merge(self, other: "SearchStats") -> "SearchStats":
        self.nodes += other.nodes
        self.table_hits += other.table_hits
        self.table_cutoffs += other.table_cutoffs
        self.beta_cutoffs += other.beta_cutoffs
        self.immediate_wins += other.immediate_wins
        self.re_searches += other.re_searches
        self.iterations += other.iterations
        return self


def negamax(game: Game, table: TranspositionTable, alpha: int, beta: int,
            stats: Optional[SearchStats] = None) -> int:
    """Score of ``game`` for the player to move, searched in ``(alpha, beta)``.

    Results outside the window are only bounds: a return value ``<= alpha``
    means the true score is at most that, ``>= beta`` means at least that.
    MoveError raised by the game propagates unchanged.
    """
    if stats is not None:
        stats.nodes += 1

    state = game.state()
    if isinstance(state, Tie):
        return 0
    bound = upper_bound(game)
    if isinstance(state, Win):
        value = bound - game.move_count
        return value if state.player == game.player() else -value

    # a move that wins on the spot is the best this position can do
    resolved = game.find_immediately_resolvable_game()
    if resolved is not None:
        resolved_state = resolved.state()
        if isinstance(resolved_state, Win) and resolved_state.player == game.player():
            if stats is not None:
                stats.immediate_wins += 1
            return bound - resolved.move_count

    # TT Lookup
    entry = table.get(game)
    if entry is None:
        # nothing can beat winning with the very next move
        entry = UpperBound(bound - game.move_count - 1)
    elif stats is not None:
        stats.table_hits += 1

    if isinstance(entry, UpperBound):
        if beta > entry.value:
            beta = entry.value
            if alpha >= beta:
                if stats is not None:
                    stats.table_cutoffs += 1
                return beta
    else:
        if alpha < entry.value:
            alpha = entry.value
            if alpha >= beta:
                if stats is not None:
                    stats.table_cutoffs += 1
                return alpha

    first_child = True
    for move in game.possible_moves():
        child = game.play(move)

        if first_child:
            score = -negamax(child, table, -beta, -alpha, stats)
            first_child = False
        else:
            # null window: can this move beat the current best at all?
            score = -negamax(child, table, -alpha - 1, -alpha, stats)
            if score > alpha:
                if stats is not None:
                    stats.re_searches += 1
                score = -negamax(child, table, -beta, -alpha, stats)

        if score >= beta:
            if stats is not None:
                stats.beta_cutoffs += 1
            table.insert(game, LowerBound(beta))
            return beta

        if score > alpha:
            alpha = score

    table.insert(game, UpperBound(alpha))
    return alpha


def solve(game: Game, table: TranspositionTable, stats: Optional[SearchStats] = None) -> int:
    """Exact score of ``game`` for the player to move.

    Positive means the player to move wins, negative means they lose, zero is
    a tie; see ``score_to_outcome`` for the distance. The window is narrowed
    with null-window searches until it closes; ``table`` keeps the bounds
    proven along the way and is left populated for the caller.
    """
    bound = upper_bound(game)
    alpha = -bound
    beta = bound + 1

    while alpha < beta:
        med = alpha + (beta - alpha) // 2
        r = negamax(game, table, med, med + 1, stats)
        if stats is not None:
            stats.iterations += 1
        logger.debug("window [%d, %d) probe %d -> %d", alpha, beta, med, r)

        if r <= med:
            beta = r
        else:
            alpha = r

    return alpha


def move_scores(game: Game, table: TranspositionTable,
                stats: Optional[SearchStats] = None) -> Iterator[Tuple[object, int]]:
    """Lazily yield ``(move, score)`` for every legal move of ``game``.

    The score is from the point of view of the player making the move, so the
    child's solved score is negated.
    """
    for move in game.possible_moves():
        child = game.play(move)
        yield move, -solve(child, table, stats)


def par_move_scores_with_hasher(game: Game, hasher: Optional[Hasher] = None,
                                threads: Optional[int] = None, shards: int = 16,
                                stats: Optional[SearchStats] = None) -> List[Tuple[object, int]]:
    """Parallel ``move_scores``: every root move is solved on a worker thread.

    Workers share one ConcurrentTable built with ``hasher`` and never touch
    anything else in common. Results come back in move-generation order and
    match the sequential version exactly.
    """
    moves = list(game.possible_moves())
    if not moves:
        return []
    table = ConcurrentTable(shards=shards, hasher=hasher)
    workers = threads or min(32, (os.cpu_count() or 1) + 4)

    def worker(move):
        local = SearchStats()
        child = game.play(move)
        return move, -solve(child, table, local), local

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(worker, moves))

    if stats is not None:
        for _move, _score, local in results:
            stats.merge(local)
    logger.debug("solved %d root moves on %d threads, table size %d",
                 len(moves), workers, len(table))
    return [(move, score) for move, score, _local in results]


def par_move_scores(game: Game, threads: Optional[int] = None,
                    stats: Optional[SearchStats] = None) -> List[Tuple[object, int]]:
    """``par_move_scores_with_hasher`` with the built-in ``hash``."""
    return par_move_scores_with_hasher(game, None, threads=threads, stats=stats)
