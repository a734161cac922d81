"""Agent construction for each game mode and difficulty."""

from enum import Enum
from typing import Optional, Tuple

import numpy as np

from tictactoe_engine.agents import (
    Agent,
    HeuristicAgent,
    HumanAgent,
    MinimaxAgent,
    RandomAgent,
)
from tictactoe_engine.agents.human import IllegalMoveHandler, MoveReader
from tictactoe_engine.board import Mark
from tictactoe_engine.exceptions import ConfigurationError


class GameMode(str, Enum):
    """Who sits at the board."""

    HUMAN_VS_HUMAN = "hvh"
    HUMAN_VS_MACHINE = "hvm"


class Difficulty(str, Enum):
    """Strength of the artificial opponent."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def create_agent(
    difficulty: Difficulty,
    mark: Mark,
    rng: Optional[np.random.Generator] = None,
) -> Agent:
    """
    Build the artificial agent for a difficulty.

    Args:
        difficulty: EASY (random), MEDIUM (heuristic) or HARD (minimax)
        mark: Mark the agent plays
        rng: Random generator for agents with random choices

    Returns:
        Agent instance
    """
    difficulty = Difficulty(difficulty)
    if difficulty is Difficulty.EASY:
        return RandomAgent(mark, rng=rng)
    if difficulty is Difficulty.MEDIUM:
        return HeuristicAgent(mark, rng=rng)
    return MinimaxAgent(mark)


def new_game(
    mode: GameMode,
    difficulty: Optional[Difficulty] = None,
    *,
    read_move: Optional[MoveReader] = None,
    on_illegal: Optional[IllegalMoveHandler] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Agent, Agent]:
    """
    Create the two agents of a game.

    The first agent is always a human playing X. The second plays O and is a
    human or a machine depending on ``mode``.

    Args:
        mode: Human-vs-human or human-vs-machine
        difficulty: Machine difficulty (required for human-vs-machine)
        read_move: Input callback shared by the human agents
        on_illegal: Called when a human move is rejected
        rng: Random generator for the machine agent

    Returns:
        Tuple of (X agent, O agent)

    Raises:
        ConfigurationError: If a required argument is missing
    """
    try:
        mode = GameMode(mode)
    except ValueError as e:
        raise ConfigurationError(f"Unknown game mode: {mode!r}") from e

    if read_move is None:
        raise ConfigurationError("read_move is required for a human player")

    player_x = HumanAgent(Mark.X, read_move, on_illegal)
    if mode is GameMode.HUMAN_VS_HUMAN:
        return player_x, HumanAgent(Mark.O, read_move, on_illegal)

    if difficulty is None:
        raise ConfigurationError("difficulty is required for human-vs-machine games")
    try:
        difficulty = Difficulty(difficulty)
    except ValueError as e:
        raise ConfigurationError(f"Unknown difficulty: {difficulty!r}") from e

    return player_x, create_agent(difficulty, Mark.O, rng)
