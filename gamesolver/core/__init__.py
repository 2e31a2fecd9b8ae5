"""Core solver components: game contract, score conversion, transposition tables and search."""

from .game import PLAYABLE, TIE, Game, GameState, MoveError, Playable, StateType, Tie, Win, ZeroSumPlayer
from .score import Outcome, OutcomeKind, score_to_outcome, upper_bound
from .search import SearchStats, move_scores, negamax, par_move_scores, par_move_scores_with_hasher, solve
from .transposition import (
    ConcurrentTable,
    DictTable,
    LowerBound,
    LRUTable,
    TranspositionTable,
    UpperBound,
    make_concurrent_table,
    make_table,
)
