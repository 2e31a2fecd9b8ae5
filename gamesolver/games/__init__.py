"""Reference games: subtraction Nim, tic-tac-toe and a bounded chess puzzle."""

from .chess_puzzle import ChessPuzzle
from .nim import MisereNim, Nim
from .tictactoe import TicTacToe
