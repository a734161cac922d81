"""Shared pytest fixtures for engine tests."""

from typing import Callable, List, Sequence, Set

import pytest

from tictactoe_engine.board import BoardState, Mark
from tictactoe_engine.evaluator import evaluate


class ScriptedAgent:
    """Agent that replays a fixed list of moves."""

    def __init__(self, mark: Mark, moves: Sequence[int]) -> None:
        self.mark = mark
        self.moves = list(moves)
        self.seen: List[BoardState] = []

    def decide(self, board: BoardState) -> int:
        self.seen.append(board)
        return self.moves.pop(0)

    def reset(self) -> None:
        pass


@pytest.fixture
def scripted_agent() -> Callable[[Mark, Sequence[int]], ScriptedAgent]:
    """Factory for agents that play a predetermined move list."""
    return ScriptedAgent


@pytest.fixture(scope="session")
def reachable_boards() -> Set[BoardState]:
    """Every board reachable from the empty board by legal alternating play."""
    seen: Set[BoardState] = set()
    stack = [BoardState.empty()]

    while stack:
        board = stack.pop()
        if board in seen:
            continue
        seen.add(board)
        if evaluate(board).is_terminal:
            continue
        mark = board.next_mark()
        for index in board.empty_cells():
            stack.append(board.place(index, mark))

    return seen
