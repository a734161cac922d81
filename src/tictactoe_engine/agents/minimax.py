"""Minimax agent with alpha-beta pruning for perfect play."""

import logging
import math

from tictactoe_engine.board import BoardState, Mark
from tictactoe_engine.evaluator import ensure_in_play

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class MinimaxAgent:
    """
    Agent that searches the full game tree (Hard difficulty).

    This agent will never lose and will win whenever possible.

    Scores are depth-sensitive: a win found at depth d is worth 10 - d and a
    loss d - 10, so faster wins and slower losses are preferred. Among cells
    with equal scores the lowest index is chosen.

    No transposition table is kept: alpha-beta alone keeps the 9-cell tree
    small enough to search from scratch on every move.
    """

    def __init__(self, mark: Mark = Mark.O) -> None:
        """
        Initialize the minimax agent.

        Args:
            mark: Mark this agent plays
        """
        self.mark = mark
        self.opponent = mark.opponent
        self.nodes_searched = 0

    def decide(self, board: BoardState) -> int:
        """
        Select the optimal move.

        Each empty cell is scored with its own full alpha-beta window; the
        first cell with the strictly greatest score wins.

        Args:
            board: Current board

        Returns:
            Optimal cell index
        """
        ensure_in_play(board)
        self.nodes_searched = 0

        best_move = -1
        best_score = -math.inf
        for index in board.empty_cells():
            value = self.score(
                board.place(index, self.mark), 1, False, -math.inf, math.inf
            )
            if value > best_score:
                best_score = value
                best_move = index

        logger.debug(
            "%s minimax: move=%d score=%d nodes=%d",
            self.mark.symbol, best_move, best_score, self.nodes_searched,
        )
        return best_move

    def root_score(self, board: BoardState) -> int:
        """Minimax value of ``board`` with this agent to move."""
        self.nodes_searched = 0
        return self.score(board, 0, True, -math.inf, math.inf)

    def score(
        self,
        board: BoardState,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float,
    ) -> int:
        """
        Alpha-beta minimax value of a position.

        Args:
            board: Position to score
            depth: Plies played since the search root
            maximizing: True if it is this agent's turn at ``board``
            alpha: Best score the maximizer is already assured of
            beta: Best score the minimizer is already assured of

        Returns:
            Value of the position from this agent's perspective
        """
        self.nodes_searched += 1

        if board.has_line(self.mark):
            return WIN_SCORE - depth
        if board.has_line(self.opponent):
            return depth - WIN_SCORE
        if board.is_full():
            return 0

        if maximizing:
            max_eval = -WIN_SCORE - 1
            for index in board.empty_cells():
                value = self.score(
                    board.place(index, self.mark), depth + 1, False, alpha, beta
                )
                max_eval = max(max_eval, value)
                alpha = max(alpha, max_eval)
                if beta <= alpha:
                    break  # Beta cut-off
            return max_eval

        min_eval = WIN_SCORE + 1
        for index in board.empty_cells():
            value = self.score(
                board.place(index, self.opponent), depth + 1, True, alpha, beta
            )
            min_eval = min(min_eval, value)
            beta = min(beta, min_eval)
            if beta <= alpha:
                break  # Alpha cut-off
        return min_eval

    def reset(self) -> None:
        """Clear search statistics."""
        self.nodes_searched = 0
