"""Human agent that defers move choice to an external input source."""

import logging
from typing import Callable, Optional

from tictactoe_engine.board import BoardState, Mark, validate_move
from tictactoe_engine.exceptions import IllegalMoveError

logger = logging.getLogger(__name__)

MoveReader = Callable[[BoardState], object]
IllegalMoveHandler = Callable[[IllegalMoveError], None]


class HumanAgent:
    """
    Agent whose moves come from a blocking input callback.

    The callback is asked again until it supplies a legal index. Malformed
    input should be reported by the callback raising IllegalMoveError, which
    is handled like any other illegal move.
    """

    def __init__(
        self,
        mark: Mark,
        read_move: MoveReader,
        on_illegal: Optional[IllegalMoveHandler] = None,
    ) -> None:
        """
        Initialize the human agent.

        Args:
            mark: Mark this agent plays
            read_move: Called with the current board; returns a cell index
            on_illegal: Called with the error whenever a move is rejected
        """
        self.mark = mark
        self.read_move = read_move
        self.on_illegal = on_illegal

    def decide(self, board: BoardState) -> int:
        """
        Wait for a legal move from the input source.

        Args:
            board: Current board

        Returns:
            Validated empty cell index
        """
        while True:
            try:
                return validate_move(board, self.read_move(board))
            except IllegalMoveError as e:
                logger.debug("%s rejected move: %s", self.mark.symbol, e)
                if self.on_illegal is not None:
                    self.on_illegal(e)

    def reset(self) -> None:
        """Reset agent state (no-op for stateless agent)."""
        pass
