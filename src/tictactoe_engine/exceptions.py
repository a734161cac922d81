"""Tic-Tac-Toe engine exception classes."""

from typing import Optional


class TicTacToeError(Exception):
    """Base exception for all engine errors."""

    pass


class IllegalMoveError(TicTacToeError):
    """Raised when a move index is out of range or targets an occupied cell."""

    def __init__(self, index: object, reason: str, message: Optional[str] = None) -> None:
        self.index = index
        self.reason = reason
        super().__init__(message or f"Illegal move {index!r}: {reason}")


class InvariantViolationError(TicTacToeError):
    """Raised when a board reaches a state legal play can never produce."""

    pass


class ConfigurationError(TicTacToeError):
    """Raised when configuration is invalid."""

    pass
