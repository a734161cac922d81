"""
Tic-Tac-Toe engine: board state, terminal evaluation and machine opponents.

Three opponent strengths are provided: a random player, a rule-ordered
heuristic player and an exhaustive alpha-beta minimax player.
"""

__version__ = "0.1.0"

from tictactoe_engine.board import BoardState, Mark, is_legal_move, validate_move
from tictactoe_engine.evaluator import GameStatus, Outcome, evaluate
from tictactoe_engine.exceptions import (
    ConfigurationError,
    IllegalMoveError,
    InvariantViolationError,
    TicTacToeError,
)
from tictactoe_engine.factory import Difficulty, GameMode, create_agent, new_game

__all__ = [
    "BoardState",
    "ConfigurationError",
    "Difficulty",
    "GameMode",
    "GameStatus",
    "IllegalMoveError",
    "InvariantViolationError",
    "Mark",
    "Outcome",
    "TicTacToeError",
    "__version__",
    "create_agent",
    "evaluate",
    "is_legal_move",
    "new_game",
    "validate_move",
]
