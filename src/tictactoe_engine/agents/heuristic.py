"""Heuristic agent using a rule-ordered move cascade."""

import logging
from typing import Callable, List, Optional

import numpy as np

from tictactoe_engine.board import BoardState, Mark, iter_lines
from tictactoe_engine.evaluator import ensure_in_play

logger = logging.getLogger(__name__)


def has_open_two(board: BoardState, mark: Mark) -> bool:
    """True iff some line holds exactly two of ``mark`` and none of its opponent."""
    opponent = mark.opponent
    for line in iter_lines(board):
        if line.count(mark) == 2 and line.count(opponent) == 0:
            return True
    return False


class HeuristicAgent:
    """
    Agent that uses simple heuristics for move selection (Medium difficulty).

    Priority order, each rule scanning empty cells in increasing index order:
    1. Win if possible (complete three in a row)
    2. Block opponent from winning
    3. Build an open two-in-a-row for ourselves
    4. Take the cell that would give the opponent an open two-in-a-row
    5. Random empty cell

    Rules 1-4 only look at scratch copies of the board.
    """

    def __init__(
        self,
        mark: Mark = Mark.O,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the heuristic agent.

        Args:
            mark: Mark this agent plays
            rng: Random generator for the fallback rule
            seed: Random seed used when no generator is given
        """
        self.mark = mark
        self.opponent = mark.opponent
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.last_rule: Optional[str] = None

    def decide(self, board: BoardState) -> int:
        """
        Select a move using the heuristic rules.

        Args:
            board: Current board

        Returns:
            Selected cell index
        """
        ensure_in_play(board)
        empty = board.empty_cells()

        cascade = (
            ("win", self.mark, lambda b: b.has_line(self.mark)),
            ("block", self.opponent, lambda b: b.has_line(self.opponent)),
            ("build_two", self.mark, lambda b: has_open_two(b, self.mark)),
            ("block_two", self.opponent, lambda b: has_open_two(b, self.opponent)),
        )
        for rule, mark, predicate in cascade:
            move = self._first_match(board, empty, mark, predicate)
            if move is not None:
                return self._chose(rule, move)

        return self._chose("random", int(self.rng.choice(empty)))

    @staticmethod
    def _first_match(
        board: BoardState,
        empty: List[int],
        mark: Mark,
        predicate: Callable[[BoardState], bool],
    ) -> int | None:
        """First empty cell where placing ``mark`` satisfies ``predicate``."""
        for index in empty:
            if predicate(board.place(index, mark)):
                return index
        return None

    def _chose(self, rule: str, move: int) -> int:
        self.last_rule = rule
        logger.debug("%s heuristic: rule=%s move=%d", self.mark.symbol, rule, move)
        return move

    def reset(self) -> None:
        """Forget the last rule that fired."""
        self.last_rule = None
