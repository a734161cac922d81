"""Agent implementations for Tic-Tac-Toe."""

from tictactoe_engine.agents.base import Agent
from tictactoe_engine.agents.human import HumanAgent
from tictactoe_engine.agents.random import RandomAgent
from tictactoe_engine.agents.heuristic import HeuristicAgent
from tictactoe_engine.agents.minimax import MinimaxAgent

__all__ = ["Agent", "HumanAgent", "RandomAgent", "HeuristicAgent", "MinimaxAgent"]
