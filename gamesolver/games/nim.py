"""Subtraction Nim: players alternately remove tokens from one pile.

``max_take`` limits how many tokens a single move may remove (None: any
number). The game ends when every pile is empty; under normal play the player
who took the last token wins, under misere play they lose.
"""
from typing import Iterator, Optional, Sequence, Tuple

from gamesolver.core.game import Game, MoveError, StateType

NimMove = Tuple[int, int]  # (pile index, tokens taken)


class Nim(Game[NimMove]):
    STATE_TYPE = StateType.NORMAL

    def __init__(self, piles: Sequence[int], max_take: Optional[int] = None,
                 max_moves: Optional[int] = None, move_count: int = 0):
        if any(p < 0 for p in piles):
            raise ValueError("piles cannot be negative")
        self.piles = tuple(piles)
        self.max_take = max_take
        self._move_count = move_count
        # one token per move at worst, so the starting total bounds the game
        self._max_moves = max_moves if max_moves is not None else move_count + sum(self.piles)

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def max_moves(self) -> Optional[int]:
        return self._max_moves

    def possible_moves(self) -> Iterator[NimMove]:
        # big takes first: they end the game sooner
        for i, pile in enumerate(self.piles):
            top = pile if self.max_take is None else min(pile, self.max_take)
            for take in range(top, 0, -1):
                yield i, take

    def make_move(self, move: NimMove) -> None:
        try:
            pile, take = move
        except (TypeError, ValueError):
            raise MoveError(f"malformed move {move!r}")
        if not 0 <= pile < len(self.piles):
            raise MoveError(f"no pile {pile}")
        if take < 1 or take > self.piles[pile] or (self.max_take is not None and take > self.max_take):
            raise MoveError(f"cannot take {take} from pile {pile} holding {self.piles[pile]}")
        piles = list(self.piles)
        piles[pile] -= take
        self.piles = tuple(piles)
        self._move_count += 1

    def clone(self) -> "Nim":
        other = self.__class__.__new__(self.__class__)
        other.piles = self.piles
        other.max_take = self.max_take
        other._move_count = self._move_count
        other._max_moves = self._max_moves
        return other

    def __eq__(self, other) -> bool:
        return (
            type(self) is type(other)
            and self.piles == other.piles
            and self._move_count == other._move_count
            and self.max_take == other.max_take
            and self._max_moves == other._max_moves
        )

    def __hash__(self) -> int:
        return hash((self.piles, self._move_count))

    def __repr__(self):
        return f"{type(self).__name__}(piles={self.piles}, move_count={self._move_count})"


class MisereNim(Nim):
    STATE_TYPE = StateType.MISERE
