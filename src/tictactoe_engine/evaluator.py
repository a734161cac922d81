"""Terminal-state detection for a board position."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tictactoe_engine.board import BoardState, Mark
from tictactoe_engine.exceptions import InvariantViolationError


class GameStatus(str, Enum):
    """Classification of a board position."""

    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a board: a status plus the winner for WIN."""

    status: GameStatus
    winner: Optional[Mark] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not GameStatus.ONGOING

    def __str__(self) -> str:
        if self.status is GameStatus.WIN:
            return f"win({self.winner.symbol})"  # type: ignore[union-attr]
        return self.status.value


ONGOING = Outcome(GameStatus.ONGOING)
DRAW = Outcome(GameStatus.DRAW)


def evaluate(board: BoardState) -> Outcome:
    """
    Classify a board as ongoing, won by one mark, or drawn.

    Args:
        board: Board to classify

    Returns:
        Outcome with status WIN and the winning mark, DRAW when the board is
        full without a line, otherwise ONGOING

    Raises:
        InvariantViolationError: If both marks own a line
    """
    x_won = board.has_line(Mark.X)
    o_won = board.has_line(Mark.O)

    if x_won and o_won:
        raise InvariantViolationError(f"Both X and O have a line on board {board}")
    if x_won:
        return Outcome(GameStatus.WIN, Mark.X)
    if o_won:
        return Outcome(GameStatus.WIN, Mark.O)
    if board.is_full():
        return DRAW
    return ONGOING


def ensure_in_play(board: BoardState) -> None:
    """Raise InvariantViolationError if no move can be chosen on ``board``."""
    outcome = evaluate(board)
    if outcome.is_terminal:
        raise InvariantViolationError(
            f"Cannot choose a move on a finished board ({outcome}): {board}"
        )
