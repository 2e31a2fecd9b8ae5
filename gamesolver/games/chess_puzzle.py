"""Chess position wrapper over python-chess, bounded by a ply limit.

Checkmate wins, stalemate, insufficient material and reaching the ply limit
are ties. Player ONE is the side to move in the starting position, so a
positive score means that side mates within the limit.
"""
from typing import Iterator, Optional

import chess
from chess import polyglot

from gamesolver.core.game import PLAYABLE, TIE, Game, GameState, MoveError, Win


class ChessPuzzle(Game[chess.Move]):
    def __init__(self, fen: str = chess.STARTING_FEN, ply_limit: int = 3):
        """Initialize from FEN; ``ply_limit`` is the number of plies searched."""
        if ply_limit < 0:
            raise ValueError("ply_limit cannot be negative")
        self.board = chess.Board(fen)
        self.ply_limit = ply_limit
        self._move_count = 0

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def max_moves(self) -> Optional[int]:
        return self.ply_limit

    def _exhausted(self) -> bool:
        return self._move_count >= self.ply_limit or self.board.is_insufficient_material()

    def state(self) -> GameState:
        if self.board.is_checkmate():
            return Win(self.player().previous())
        if self._exhausted() or self.board.is_stalemate():
            return TIE
        return PLAYABLE

    def possible_moves(self) -> Iterator[chess.Move]:
        if self._exhausted():
            return iter(())
        return iter(self._order_moves())

    def _order_moves(self):
        board = self.board
        moves = list(board.legal_moves)
        scores = []
        for move in moves:
            if board.gives_check(move):
                scores.append(200000)
            elif board.is_capture(move):
                scores.append(self._mvv_lva(move) + 100000)
            else:
                scores.append(0)
        return [m for _, m in sorted(zip(scores, moves), key=lambda x: x[0], reverse=True)]

    def _mvv_lva(self, move):
        board = self.board
        attacker = board.piece_at(move.from_square)
        if board.is_en_passant(move):
            victim_type = chess.PAWN
        else:
            victim = board.piece_at(move.to_square)
            victim_type = victim.piece_type if victim else 0
        return (victim_type * 10) - attacker.piece_type

    def make_move(self, move) -> None:
        if isinstance(move, str):
            try:
                move = chess.Move.from_uci(move)
            except ValueError:
                raise MoveError(f"malformed move {move!r}")
        if self._exhausted() or move not in self.board.legal_moves:
            raise MoveError(f"illegal move {move}")
        self.board.push(move)
        self._move_count += 1

    def find_immediately_resolvable_game(self) -> Optional["ChessPuzzle"]:
        # only a checking move can mate, so look at those before anything else
        if not self._exhausted():
            for move in self.board.legal_moves:
                if self.board.gives_check(move):
                    child = self.play(move)
                    if child.board.is_checkmate():
                        return child
        return super().find_immediately_resolvable_game()

    def clone(self) -> "ChessPuzzle":
        other = self.__class__.__new__(self.__class__)
        other.board = self.board.copy(stack=False)
        other.ply_limit = self.ply_limit
        other._move_count = self._move_count
        return other

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, ChessPuzzle)
            and self._move_count == other._move_count
            and self.ply_limit == other.ply_limit
            and self.board.epd() == other.board.epd()
        )

    def __hash__(self) -> int:
        return hash((polyglot.zobrist_hash(self.board), self._move_count))

    def get_fen(self) -> str:
        return self.board.fen()

    def __repr__(self):
        return f"ChessPuzzle({self.board.fen()!r}, ply {self._move_count}/{self.ply_limit})"
