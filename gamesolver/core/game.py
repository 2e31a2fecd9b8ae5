"""Game contract consumed by the solver.

A concrete game subclasses :class:`Game` and provides move generation, move
application and (unless ``STATE_TYPE`` is set) its own terminal classification.
Positions must be hashable and comparable so the transposition table can
recognise transpositions; two positions that compare equal must also agree on
``move_count``, since scores depend on it.
"""
from __future__ import annotations

import copy
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, Iterator, Optional, TypeVar, Union

MoveT = TypeVar("MoveT")


class MoveError(Exception):
    """Raised by ``Game.make_move`` for an illegal or malformed move."""


class ZeroSumPlayer(enum.Enum):
    ONE = 0
    TWO = 1

    def next(self) -> "ZeroSumPlayer":
        return ZeroSumPlayer.TWO if self is ZeroSumPlayer.ONE else ZeroSumPlayer.ONE

    def previous(self) -> "ZeroSumPlayer":
        # two players: the previous mover is also the next one
        return self.next()

    @staticmethod
    def from_move_count(move_count: int) -> "ZeroSumPlayer":
        return ZeroSumPlayer.ONE if move_count % 2 == 0 else ZeroSumPlayer.TWO


@dataclass(frozen=True)
class Playable:
    def __repr__(self):
        return "Playable"


@dataclass(frozen=True)
class Tie:
    def __repr__(self):
        return "Tie"


@dataclass(frozen=True)
class Win:
    player: ZeroSumPlayer

    def __repr__(self):
        return f"Win({self.player.name})"


GameState = Union[Playable, Tie, Win]

PLAYABLE = Playable()
TIE = Tie()


class StateType(enum.Enum):
    """Terminal rule for games that end when the mover has no legal move.

    NORMAL: the last player to move wins.
    MISERE: the last player to move loses.
    Neither convention produces ties.
    """

    NORMAL = "normal"
    MISERE = "misere"

    def state(self, game: "Game") -> GameState:
        if next(iter(game.possible_moves()), None) is not None:
            return PLAYABLE
        if self is StateType.MISERE:
            return Win(game.player())
        return Win(game.player().previous())


class Game(ABC, Generic[MoveT]):
    """A position in a two-player, zero-sum, perfect-information game."""

    STATE_TYPE: ClassVar[Optional[StateType]] = None

    @property
    @abstractmethod
    def move_count(self) -> int:
        """Number of moves played so far."""

    @property
    @abstractmethod
    def max_moves(self) -> Optional[int]:
        """Longest possible game, counted from the very first move, if known."""

    @abstractmethod
    def possible_moves(self) -> Iterator[MoveT]:
        """Yield the legal moves, best guesses first.

        Ordering does not change results, but good moves early mean more
        alpha/beta cutoffs.
        """

    @abstractmethod
    def make_move(self, move: MoveT) -> None:
        """Apply ``move`` in place. Raises MoveError if it is not legal."""

    @abstractmethod
    def __eq__(self, other) -> bool: ...

    @abstractmethod
    def __hash__(self) -> int: ...

    def clone(self) -> "Game[MoveT]":
        return copy.deepcopy(self)

    def player(self) -> ZeroSumPlayer:
        """Player whose turn it is."""
        return ZeroSumPlayer.from_move_count(self.move_count)

    def state(self) -> GameState:
        if self.STATE_TYPE is None:
            raise NotImplementedError(
                f"{type(self).__name__} has no STATE_TYPE and must implement state()"
            )
        return self.STATE_TYPE.state(self)

    def play(self, move: MoveT) -> "Game[MoveT]":
        """Return a copy of this position with ``move`` applied."""
        child = self.clone()
        child.make_move(move)
        return child

    def find_immediately_resolvable_game(self) -> Optional["Game[MoveT]"]:
        """Return a position one move away whose outcome is already decided.

        Priority: a position won by the player moving now, then a tied one,
        then a lost one. Returns None when every child is still playable (or
        there are no moves). Which position is returned within one class is
        unspecified.

        This generic version plays every move; games should override it with
        something cheaper when they can.
        """
        mover = self.player()
        fallback = None
        fallback_is_tie = False
        for move in self.possible_moves():
            child = self.play(move)
            state = child.state()
            if isinstance(state, Playable):
                continue
            if isinstance(state, Win) and state.player == mover:
                return child
            if isinstance(state, Tie):
                if not fallback_is_tie:
                    fallback, fallback_is_tie = child, True
            elif fallback is None:
                fallback = child
        return fallback
