"""Exact solver for two-player, zero-sum, perfect-information games."""

from .analyzer import Analyzer, MoveReport
from .config import CONFIG, Config, SearchConfig, TableConfig
from .core.game import PLAYABLE, TIE, Game, GameState, MoveError, StateType, Tie, Win, ZeroSumPlayer
from .core.score import Outcome, OutcomeKind, score_to_outcome, upper_bound
from .core.search import SearchStats, move_scores, par_move_scores, par_move_scores_with_hasher, solve
from .core.transposition import ConcurrentTable, DictTable, LowerBound, LRUTable, TranspositionTable, UpperBound
from .main import Solver

__version__ = "0.1.0"
