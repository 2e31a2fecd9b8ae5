"""Tic-tac-toe on a 3x3 board, cells indexed 0..8 row by row.

Three in a row ends the game, so the "no moves left" rule does not apply and
the position classifies itself.
"""
from typing import Iterator, Optional, Sequence

from gamesolver.core.game import PLAYABLE, TIE, Game, GameState, MoveError, Win, ZeroSumPlayer

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)
# centre, corners, edges
MOVE_ORDER = (4, 0, 2, 6, 8, 1, 3, 5, 7)
EMPTY = None


class TicTacToe(Game[int]):
    def __init__(self, cells: Optional[Sequence[Optional[ZeroSumPlayer]]] = None):
        cells = tuple(cells) if cells is not None else (EMPTY,) * 9
        if len(cells) != 9:
            raise ValueError("a board has 9 cells")
        self.cells = cells

    @classmethod
    def from_string(cls, text: str) -> "TicTacToe":
        """Build from 9 characters of 'X', 'O' and '.' (X is player ONE)."""
        symbols = {"X": ZeroSumPlayer.ONE, "O": ZeroSumPlayer.TWO, ".": EMPTY}
        chars = [c for c in text if not c.isspace()]
        try:
            return cls([symbols[c.upper()] for c in chars])
        except KeyError as e:
            raise ValueError(f"bad cell {e.args[0]!r}")

    @property
    def move_count(self) -> int:
        return sum(1 for c in self.cells if c is not EMPTY)

    @property
    def max_moves(self) -> Optional[int]:
        return 9

    def _winner(self) -> Optional[ZeroSumPlayer]:
        c = self.cells
        for a, b, d in LINES:
            if c[a] is not EMPTY and c[a] == c[b] == c[d]:
                return c[a]
        return None

    def state(self) -> GameState:
        winner = self._winner()
        if winner is not None:
            return Win(winner)
        if self.move_count == 9:
            return TIE
        return PLAYABLE

    def possible_moves(self) -> Iterator[int]:
        if self._winner() is not None:
            return
        for i in MOVE_ORDER:
            if self.cells[i] is EMPTY:
                yield i

    def make_move(self, move: int) -> None:
        if not isinstance(move, int) or not 0 <= move < 9:
            raise MoveError(f"no cell {move!r}")
        if self.cells[move] is not EMPTY:
            raise MoveError(f"cell {move} is taken")
        if self._winner() is not None:
            raise MoveError("game is already over")
        cells = list(self.cells)
        cells[move] = self.player()
        self.cells = tuple(cells)

    def clone(self) -> "TicTacToe":
        return TicTacToe(self.cells)

    def __eq__(self, other) -> bool:
        return isinstance(other, TicTacToe) and self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.cells)

    def __str__(self):
        marks = {ZeroSumPlayer.ONE: "X", ZeroSumPlayer.TWO: "O", EMPTY: "."}
        rows = ["".join(marks[c] for c in self.cells[r:r + 3]) for r in (0, 3, 6)]
        return "\n".join(rows)

    def __repr__(self):
        return f"TicTacToe({''.join(str(self).split())!r})"
