"""Protocol shared by every Tic-Tac-Toe agent."""

from typing import Protocol

from tictactoe_engine.board import BoardState, Mark


class Agent(Protocol):
    """Protocol for Tic-Tac-Toe agents."""

    mark: Mark

    def decide(self, board: BoardState) -> int:
        """
        Choose a move for this agent's mark.

        Args:
            board: Current board (never mutated)

        Returns:
            Index (0-8) of an empty cell
        """
        ...

    def reset(self) -> None:
        """
        Reset agent state (if any) at the start of a new game.

        Optional for stateless agents.
        """
        ...
