"""Random agent that plays uniformly at random among empty cells."""

import numpy as np

from tictactoe_engine.board import BoardState, Mark
from tictactoe_engine.evaluator import ensure_in_play


class RandomAgent:
    """Agent that selects moves uniformly at random (Easy difficulty)."""

    def __init__(
        self,
        mark: Mark = Mark.O,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            mark: Mark this agent plays
            rng: Random generator to draw from (takes precedence over seed)
            seed: Random seed for reproducibility (optional)
        """
        self.mark = mark
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def decide(self, board: BoardState) -> int:
        """
        Select a random empty cell.

        Args:
            board: Current board

        Returns:
            Randomly selected empty cell index
        """
        ensure_in_play(board)
        return int(self.rng.choice(board.empty_cells()))

    def reset(self) -> None:
        """Reset agent state (no-op for stateless agent)."""
        pass
