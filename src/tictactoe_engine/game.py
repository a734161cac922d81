"""Turn-alternation game loop and agent-vs-agent evaluation."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from rich.table import Table

from tictactoe_engine.agents import Agent
from tictactoe_engine.board import BoardState, Mark, validate_move
from tictactoe_engine.evaluator import GameStatus, Outcome, evaluate

logger = logging.getLogger(__name__)

MoveObserver = Callable[[Mark, int, BoardState], None]


@dataclass
class GameResult:
    """Outcome of one game together with the moves that led to it."""

    outcome: Outcome
    moves: List[Tuple[Mark, int]] = field(default_factory=list)
    board: BoardState = field(default_factory=BoardState.empty)

    @property
    def winner(self) -> Optional[Mark]:
        return self.outcome.winner

    @property
    def num_moves(self) -> int:
        return len(self.moves)


def play_game(
    agent_x: Agent,
    agent_o: Agent,
    board: Optional[BoardState] = None,
    on_move: Optional[MoveObserver] = None,
) -> GameResult:
    """
    Play a single game between two agents.

    Args:
        agent_x: Agent playing X
        agent_o: Agent playing O
        board: Starting position (empty board if None)
        on_move: Called after each ply with (mark, index, new board)

    Returns:
        GameResult with the terminal outcome, move list and final board

    Raises:
        IllegalMoveError: If an agent returns an illegal move
    """
    board = board if board is not None else BoardState.empty()
    agents = {Mark.X: agent_x, Mark.O: agent_o}
    moves: List[Tuple[Mark, int]] = []

    outcome = evaluate(board)
    mark = board.next_mark()
    while not outcome.is_terminal:
        index = validate_move(board, agents[mark].decide(board))
        board = board.place(index, mark)
        moves.append((mark, index))
        logger.info("Move %d: %s plays %d", len(moves), mark.symbol, index)

        if on_move is not None:
            on_move(mark, index, board)

        outcome = evaluate(board)
        mark = mark.opponent

    logger.info("Game over after %d moves: %s", len(moves), outcome)
    return GameResult(outcome=outcome, moves=moves, board=board)


@dataclass
class MatchStats:
    """Aggregate results of repeated games between two agents."""

    x_name: str
    o_name: str
    num_games: int = 0
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    total_moves: int = 0

    def record(self, result: GameResult) -> None:
        self.num_games += 1
        self.total_moves += result.num_moves
        if result.outcome.status is GameStatus.DRAW:
            self.draws += 1
        elif result.winner is Mark.X:
            self.x_wins += 1
        else:
            self.o_wins += 1

    def _rate(self, count: int) -> float:
        return count / self.num_games if self.num_games else 0.0

    @property
    def x_win_rate(self) -> float:
        return self._rate(self.x_wins)

    @property
    def o_win_rate(self) -> float:
        return self._rate(self.o_wins)

    @property
    def draw_rate(self) -> float:
        return self._rate(self.draws)

    @property
    def avg_moves_per_game(self) -> float:
        return self._rate(self.total_moves)

    def to_dict(self) -> Dict[str, Any]:
        """Convert results to dictionary."""
        return {
            "x_name": self.x_name,
            "o_name": self.o_name,
            "num_games": self.num_games,
            "x_wins": self.x_wins,
            "o_wins": self.o_wins,
            "draws": self.draws,
            "x_win_rate": self.x_win_rate,
            "o_win_rate": self.o_win_rate,
            "draw_rate": self.draw_rate,
            "avg_moves_per_game": self.avg_moves_per_game,
        }


def evaluate_agents(
    agent_x: Agent,
    agent_o: Agent,
    x_name: str,
    o_name: str,
    num_games: int = 100,
) -> MatchStats:
    """
    Evaluate two agents against each other.

    Args:
        agent_x: Agent playing X (moves first)
        agent_o: Agent playing O
        x_name: Name of the X agent for display
        o_name: Name of the O agent for display
        num_games: Number of games to play

    Returns:
        MatchStats with win/draw counts and rates
    """
    stats = MatchStats(x_name=x_name, o_name=o_name)

    for _ in range(num_games):
        agent_x.reset()
        agent_o.reset()
        stats.record(play_game(agent_x, agent_o))

    return stats


def format_results_table(stats: MatchStats) -> Table:
    """Build a rich table summarizing a match."""
    table = Table(title=f"{stats.x_name} (X) vs {stats.o_name} (O)")
    table.add_column("Result", style="cyan")
    table.add_column("Games", justify="right")
    table.add_column("Rate", justify="right")

    table.add_row(f"{stats.x_name} wins", str(stats.x_wins), f"{stats.x_win_rate:.1%}")
    table.add_row(f"{stats.o_name} wins", str(stats.o_wins), f"{stats.o_win_rate:.1%}")
    table.add_row("Draws", str(stats.draws), f"{stats.draw_rate:.1%}")
    table.add_section()
    table.add_row("Games played", str(stats.num_games), "")
    table.add_row("Average moves", f"{stats.avg_moves_per_game:.1f}", "")
    return table
