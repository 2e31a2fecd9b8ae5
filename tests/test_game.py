"""
Tests for the game contract.

Covers:
- ZeroSumPlayer turn helpers
- Terminal rule (normal / misere)
- Default state() behaviour
- find_immediately_resolvable_game priority
- Reference games: Nim, tic-tac-toe, chess puzzle
"""

import chess
import pytest

from gamesolver.core.game import (
    PLAYABLE,
    TIE,
    Game,
    MoveError,
    StateType,
    Tie,
    Win,
    ZeroSumPlayer,
)
from gamesolver.games import ChessPuzzle, MisereNim, Nim, TicTacToe


class TreeGame(Game[str]):
    """Hand-written game tree: node name -> children, plus terminal labels.

    Terminal labels: "mover" means the player who just moved won, "next" means
    the player to move won, "tie" is a tie.
    """

    def __init__(self, tree, terminal, node="root", depth=0):
        self.tree = tree
        self.terminal = terminal
        self.node = node
        self.depth = depth

    @property
    def move_count(self):
        return self.depth

    @property
    def max_moves(self):
        return 4

    def possible_moves(self):
        return iter(self.tree.get(self.node, []))

    def make_move(self, move):
        if move not in self.tree.get(self.node, []):
            raise MoveError(move)
        self.node = move
        self.depth += 1

    def clone(self):
        return TreeGame(self.tree, self.terminal, self.node, self.depth)

    def state(self):
        label = self.terminal.get(self.node)
        if label == "mover":
            return Win(self.player().previous())
        if label == "next":
            return Win(self.player())
        if label == "tie":
            return TIE
        return PLAYABLE

    def __eq__(self, other):
        return isinstance(other, TreeGame) and (self.node, self.depth) == (other.node, other.depth)

    def __hash__(self):
        return hash((self.node, self.depth))


TERMINAL = {"win": "mover", "lose": "next", "tie": "tie"}


# ════════════════════════════════════════════════════════════════════════════
#  PLAYERS
# ════════════════════════════════════════════════════════════════════════════

class TestZeroSumPlayer:
    def test_next_and_previous(self):
        assert ZeroSumPlayer.ONE.next() is ZeroSumPlayer.TWO
        assert ZeroSumPlayer.TWO.next() is ZeroSumPlayer.ONE
        assert ZeroSumPlayer.ONE.previous() is ZeroSumPlayer.TWO

    def test_from_move_count(self):
        assert ZeroSumPlayer.from_move_count(0) is ZeroSumPlayer.ONE
        assert ZeroSumPlayer.from_move_count(1) is ZeroSumPlayer.TWO
        assert ZeroSumPlayer.from_move_count(6) is ZeroSumPlayer.ONE


# ════════════════════════════════════════════════════════════════════════════
#  TERMINAL RULE
# ════════════════════════════════════════════════════════════════════════════

class TestStateType:
    def test_playable_while_moves_remain(self):
        assert StateType.NORMAL.state(Nim([1])) == PLAYABLE
        assert StateType.MISERE.state(Nim([1])) == PLAYABLE

    def test_normal_previous_mover_wins(self):
        for k in range(1, 6):
            game = Nim([0, 0], move_count=k)
            assert game.state() == Win(game.player().previous())

    def test_misere_current_mover_wins(self):
        for k in range(1, 6):
            game = MisereNim([0], move_count=k)
            assert game.state() == Win(game.player())

    def test_no_ties_from_rule(self):
        assert not isinstance(Nim([0]).state(), Tie)
        assert not isinstance(MisereNim([0]).state(), Tie)

    def test_state_without_rule_must_be_overridden(self):
        class Bare(Game[int]):
            move_count = 0
            max_moves = 1

            def possible_moves(self):
                return iter(())

            def make_move(self, move):
                raise MoveError(move)

            def __eq__(self, other):
                return self is other

            def __hash__(self):
                return id(self)

        with pytest.raises(NotImplementedError):
            Bare().state()


# ════════════════════════════════════════════════════════════════════════════
#  IMMEDIATE RESOLUTION
# ════════════════════════════════════════════════════════════════════════════

class TestImmediatelyResolvable:
    def _game(self, children):
        tree = {"root": children}
        return TreeGame(tree, TERMINAL)

    def test_prefers_win(self):
        child = self._game(["lose", "tie", "win", "open"]).find_immediately_resolvable_game()
        assert child.node == "win"

    def test_tie_over_loss(self):
        child = self._game(["lose", "open", "tie"]).find_immediately_resolvable_game()
        assert child.node == "tie"

    def test_loss_when_nothing_else(self):
        child = self._game(["open", "lose"]).find_immediately_resolvable_game()
        assert child.node == "lose"

    def test_none_when_all_playable(self):
        assert self._game(["open", "open2"]).find_immediately_resolvable_game() is None

    def test_none_without_moves(self):
        assert self._game([]).find_immediately_resolvable_game() is None

    def test_nim_winning_take(self):
        child = Nim([0, 2]).find_immediately_resolvable_game()
        assert child.piles == (0, 0)
        assert child.state() == Win(ZeroSumPlayer.ONE)

    def test_misere_only_losing_take(self):
        child = MisereNim([2], max_take=2).find_immediately_resolvable_game()
        assert child.piles == (0,)
        assert child.state() == Win(ZeroSumPlayer.TWO)

    def test_tictactoe_tie(self):
        game = TicTacToe.from_string("XOX XOO OX.")
        child = game.find_immediately_resolvable_game()
        assert child.state() == TIE

    def test_does_not_mutate_parent(self):
        game = Nim([0, 2])
        game.find_immediately_resolvable_game()
        assert game.piles == (0, 2)
        assert game.move_count == 0

    def test_move_error_surfaces(self):
        class Broken(Nim):
            def possible_moves(self):
                yield 0, 99

        with pytest.raises(MoveError):
            Broken([1]).find_immediately_resolvable_game()


# ════════════════════════════════════════════════════════════════════════════
#  NIM
# ════════════════════════════════════════════════════════════════════════════

class TestNim:
    def test_max_moves_defaults_to_tokens(self):
        assert Nim([3, 4]).max_moves == 7
        assert Nim([2], move_count=3).max_moves == 5
        assert Nim([2], max_moves=9).max_moves == 9

    def test_moves_respect_max_take(self):
        assert list(Nim([3], max_take=2).possible_moves()) == [(0, 2), (0, 1)]
        assert list(Nim([2, 1]).possible_moves()) == [(0, 2), (0, 1), (1, 1)]

    def test_make_move(self):
        game = Nim([3, 1])
        game.make_move((0, 2))
        assert game.piles == (1, 1)
        assert game.move_count == 1
        assert game.player() is ZeroSumPlayer.TWO

    @pytest.mark.parametrize("move", [(0, 4), (2, 1), (0, 0), (0, -1), "bad", None])
    def test_illegal_moves(self, move):
        with pytest.raises(MoveError):
            Nim([3, 1]).make_move(move)

    def test_max_take_enforced(self):
        with pytest.raises(MoveError):
            Nim([3], max_take=1).make_move((0, 2))

    def test_clone_is_independent(self):
        game = Nim([3])
        other = game.clone()
        other.make_move((0, 1))
        assert game.piles == (3,)
        assert other != game

    def test_equality_includes_move_count(self):
        a = Nim([2, 2], max_moves=6).play((0, 1)).play((1, 1))
        b = Nim([2, 2], max_moves=6).play((1, 1)).play((0, 1))
        c = Nim([1, 1], max_moves=6)
        assert a == b and hash(a) == hash(b)
        assert a != c

    def test_negative_pile_rejected(self):
        with pytest.raises(ValueError):
            Nim([-1])


# ════════════════════════════════════════════════════════════════════════════
#  TIC-TAC-TOE
# ════════════════════════════════════════════════════════════════════════════

class TestTicTacToe:
    def test_empty_board(self):
        game = TicTacToe()
        assert game.move_count == 0
        assert game.state() == PLAYABLE
        assert list(game.possible_moves())[0] == 4

    def test_three_in_a_row(self):
        game = TicTacToe.from_string("XXX OO. ...")
        assert game.state() == Win(ZeroSumPlayer.ONE)
        assert list(game.possible_moves()) == []

    def test_full_board_tie(self):
        game = TicTacToe.from_string("XOX XOO OXX")
        assert game.state() == TIE

    def test_turns_alternate(self):
        game = TicTacToe()
        game.make_move(4)
        game.make_move(0)
        assert str(game) == "O..\n.X.\n..."
        assert game.player() is ZeroSumPlayer.ONE

    def test_occupied_cell(self):
        game = TicTacToe().play(4)
        with pytest.raises(MoveError):
            game.make_move(4)

    def test_out_of_range(self):
        with pytest.raises(MoveError):
            TicTacToe().make_move(9)

    def test_no_moves_after_win(self):
        game = TicTacToe.from_string("XXX OO. ...")
        with pytest.raises(MoveError):
            game.make_move(8)

    def test_bad_string(self):
        with pytest.raises(ValueError):
            TicTacToe.from_string("XXZ ... ...")


# ════════════════════════════════════════════════════════════════════════════
#  CHESS PUZZLE
# ════════════════════════════════════════════════════════════════════════════

BACK_RANK = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
BARE_KINGS = "8/8/8/4k3/8/8/8/4K3 w - - 0 1"


class TestChessPuzzle:
    def test_initial_position(self):
        game = ChessPuzzle(ply_limit=2)
        assert game.get_fen() == chess.STARTING_FEN
        assert game.max_moves == 2
        assert len(list(game.possible_moves())) == 20

    def test_checks_ordered_first(self):
        first = next(iter(ChessPuzzle(BACK_RANK, ply_limit=1).possible_moves()))
        assert first == chess.Move.from_uci("a1a8")

    def test_checkmate_is_win_for_mover(self):
        game = ChessPuzzle(BACK_RANK, ply_limit=1).play("a1a8")
        assert game.state() == Win(ZeroSumPlayer.ONE)

    def test_ply_limit_is_tie(self):
        game = ChessPuzzle(BACK_RANK, ply_limit=1).play("a1a2")
        assert game.state() == TIE
        assert list(game.possible_moves()) == []

    def test_insufficient_material_is_tie(self):
        game = ChessPuzzle(BARE_KINGS, ply_limit=4)
        assert game.state() == TIE

    def test_illegal_move(self):
        with pytest.raises(MoveError):
            ChessPuzzle(ply_limit=2).make_move("e2e5")

    def test_garbage_move(self):
        with pytest.raises(MoveError):
            ChessPuzzle(ply_limit=2).make_move("zzzz")

    def test_no_moves_past_limit(self):
        game = ChessPuzzle(ply_limit=1).play("e2e4")
        with pytest.raises(MoveError):
            game.make_move("e7e5")

    def test_resolvable_finds_mate(self):
        child = ChessPuzzle(BACK_RANK, ply_limit=1).find_immediately_resolvable_game()
        assert child.board.is_checkmate()

    def test_transposition_equality(self):
        a = ChessPuzzle(ply_limit=4).play("g1f3").play("g8f6").play("b1c3")
        b = ChessPuzzle(ply_limit=4).play("b1c3").play("g8f6").play("g1f3")
        assert a == b
        assert hash(a) == hash(b)
