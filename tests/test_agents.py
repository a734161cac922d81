"""Tests for agent implementations."""

import numpy as np
import pytest

from tictactoe_engine.agents import HeuristicAgent, HumanAgent, MinimaxAgent, RandomAgent
from tictactoe_engine.agents.heuristic import has_open_two
from tictactoe_engine.board import BoardState, Mark, validate_move
from tictactoe_engine.evaluator import GameStatus, evaluate
from tictactoe_engine.exceptions import IllegalMoveError, InvariantViolationError
from tictactoe_engine.game import play_game

FINISHED_BOARDS = ["XXX/OO_/___", "XOX/XOO/OXX"]


class TestRandomAgent:
    """Test RandomAgent."""

    def test_seeded_reproducibility(self) -> None:
        """Test that seeded agents produce same moves."""
        board = BoardState.empty()

        agent1 = RandomAgent(Mark.X, seed=42)
        agent2 = RandomAgent(Mark.X, seed=42)

        moves1 = [agent1.decide(board) for _ in range(10)]
        moves2 = [agent2.decide(board) for _ in range(10)]

        assert moves1 == moves2

    def test_injected_generator(self) -> None:
        """Test that an injected generator drives the choice."""
        board = BoardState.empty()

        seeded = RandomAgent(Mark.X, seed=7)
        injected = RandomAgent(Mark.X, rng=np.random.default_rng(7))

        assert [injected.decide(board) for _ in range(5)] == [
            seeded.decide(board) for _ in range(5)
        ]

    def test_selects_empty_cells(self) -> None:
        """Test that RandomAgent only selects empty cells."""
        board = BoardState.from_string("X_O/_X_/__O")
        agent = RandomAgent(Mark.X, seed=42)

        for _ in range(50):
            assert agent.decide(board) in board.empty_cells()

    @pytest.mark.parametrize("text", FINISHED_BOARDS)
    def test_raises_on_finished_board(self, text: str) -> None:
        agent = RandomAgent(Mark.O)
        with pytest.raises(InvariantViolationError):
            agent.decide(BoardState.from_string(text))


class TestHeuristicAgent:
    """Test HeuristicAgent."""

    def test_initialization(self) -> None:
        agent = HeuristicAgent(Mark.X)
        assert agent.mark is Mark.X
        assert agent.opponent is Mark.O
        assert agent.last_rule is None

    def test_takes_winning_move(self) -> None:
        """Test that agent takes winning move when available."""
        # X X _
        # . O .
        # O . .
        board = BoardState.from_string("XX_/_O_/O__")
        agent = HeuristicAgent(Mark.X)
        assert agent.decide(board) == 2
        assert agent.last_rule == "win"

    def test_blocks_opponent_win(self) -> None:
        """Test that agent blocks opponent from winning."""
        # X . .
        # O O _ (O about to win, X must block at position 5)
        # . . X
        board = BoardState.from_string("X__/OO_/__X")
        agent = HeuristicAgent(Mark.X)
        assert agent.decide(board) == 5
        assert agent.last_rule == "block"

    def test_wins_over_blocks(self) -> None:
        """Test that winning takes priority over blocking."""
        # X X _ (can win at 2)
        # O O _ (O can win at 5)
        # . . .
        board = BoardState.from_string("XX_/OO_/___")
        agent = HeuristicAgent(Mark.X)
        assert agent.decide(board) == 2
        assert agent.last_rule == "win"

    def test_builds_two_in_a_row(self) -> None:
        """Test that the first cell forming an open pair is taken."""
        # X _ .
        # . O .
        # . . .
        board = BoardState.from_string("X__/_O_/___")
        agent = HeuristicAgent(Mark.X)
        assert agent.decide(board) == 1
        assert agent.last_rule == "build_two"

    def test_pair_with_opponent_mark_does_not_count(self) -> None:
        """Test that a line already holding an opponent mark is not a pair."""
        # X O _  (placing X at 2 gives two X in the row, but O blocks it)
        # _ . .
        # . . .
        board = BoardState.from_string("XO_/___/___")
        agent = HeuristicAgent(Mark.X)
        assert agent.decide(board) == 3
        assert agent.last_rule == "build_two"

    def test_blocks_opponent_two_in_a_row(self) -> None:
        """Test the center-O opening: rule 4 picks the first corner."""
        board = BoardState.from_string("___/_O_/___")
        agent = HeuristicAgent(Mark.X, seed=0)

        move = agent.decide(board)

        assert move in board.empty_cells()
        assert move == 0
        assert agent.last_rule == "block_two"

    def test_random_fallback_on_empty_board(self) -> None:
        """Test that no rule fires on an empty board."""
        board = BoardState.empty()
        agent1 = HeuristicAgent(Mark.X, seed=3)
        agent2 = HeuristicAgent(Mark.X, rng=np.random.default_rng(3))

        move = agent1.decide(board)

        assert move in board.empty_cells()
        assert agent1.last_rule == "random"
        assert agent2.decide(board) == move

    def test_opponent_perspective(self) -> None:
        """Test that agent works correctly as O."""
        # O O _ (O can win at position 2)
        # X X .
        # X . .
        board = BoardState.from_string("OO_/XX_/X__")
        agent = HeuristicAgent(Mark.O)
        assert agent.decide(board) == 2

    def test_never_mutates_board(self) -> None:
        board = BoardState.from_string("X__/_O_/___")
        before = board.cells
        HeuristicAgent(Mark.X).decide(board)
        assert board.cells == before

    def test_always_takes_available_win(self, reachable_boards) -> None:
        """Test rule 1 on every reachable position with a winning cell."""
        for board in reachable_boards:
            if evaluate(board).is_terminal:
                continue
            mark = board.next_mark()
            winning = [
                i for i in board.empty_cells() if board.place(i, mark).has_line(mark)
            ]
            if not winning:
                continue
            agent = HeuristicAgent(mark, seed=0)
            assert agent.decide(board) == winning[0]

    def test_reset_clears_last_rule(self) -> None:
        agent = HeuristicAgent(Mark.X, seed=0)
        agent.decide(BoardState.empty())
        agent.reset()
        assert agent.last_rule is None

    @pytest.mark.parametrize("text", FINISHED_BOARDS)
    def test_raises_on_finished_board(self, text: str) -> None:
        with pytest.raises(InvariantViolationError):
            HeuristicAgent(Mark.O).decide(BoardState.from_string(text))


class TestOpenTwo:
    """Test the open-pair predicate used by rules 3 and 4."""

    def test_open_pair(self) -> None:
        assert has_open_two(BoardState.from_string("XX_/___/___"), Mark.X)

    def test_blocked_pair(self) -> None:
        assert not has_open_two(BoardState.from_string("XXO/___/___"), Mark.X)

    def test_single_mark(self) -> None:
        assert not has_open_two(BoardState.from_string("X__/___/___"), Mark.X)

    def test_diagonal_pair_for_o(self) -> None:
        assert has_open_two(BoardState.from_string("__O/_O_/___"), Mark.O)


class TestMinimaxAgent:
    """Test MinimaxAgent."""

    def test_initialization(self) -> None:
        agent = MinimaxAgent(Mark.X)
        assert agent.mark is Mark.X
        assert agent.opponent is Mark.O

    def test_completes_top_row(self) -> None:
        """Test that minimax takes the winning move."""
        # X X _
        # O O _
        # _ _ _
        board = BoardState.from_string("XX_/OO_/___")
        agent = MinimaxAgent(Mark.X)
        assert agent.decide(board) == 2

    def test_blocks_opponent_win(self) -> None:
        """Test that minimax blocks opponent from winning."""
        # X . .
        # O O _ (must block at 5)
        # . . X
        board = BoardState.from_string("X__/OO_/__X")
        agent = MinimaxAgent(Mark.X)
        assert agent.decide(board) == 5

    def test_prefers_win_over_lower_index_block(self) -> None:
        """Test that O wins at 5 instead of blocking X at 2."""
        # X X _
        # O O _
        # X . .
        board = BoardState.from_string("XX_/OO_/X__")
        agent = MinimaxAgent(Mark.O)
        assert agent.decide(board) == 5

    def test_empty_board_root_score_is_draw(self) -> None:
        """Test that optimal play from the empty board is a draw."""
        agent = MinimaxAgent(Mark.X)
        assert agent.root_score(BoardState.empty()) == 0

    def test_pruning_visits_fewer_nodes_than_full_tree(self) -> None:
        """Test that alpha-beta skips part of the 549,946-node game tree."""
        agent = MinimaxAgent(Mark.X)
        agent.root_score(BoardState.empty())
        assert 0 < agent.nodes_searched < 549946

    def test_ties_go_to_lowest_index(self) -> None:
        """Test that every opening draws, so the first cell is chosen."""
        agent = MinimaxAgent(Mark.X)
        assert agent.decide(BoardState.empty()) == 0

    def test_tie_break_against_center(self) -> None:
        """Test that the first drawing corner is chosen against a center O."""
        agent = MinimaxAgent(Mark.X)
        assert agent.decide(BoardState.from_string("___/_O_/___")) == 0

    def test_terminal_scores_are_depth_sensitive(self) -> None:
        """Test the 10 - depth / depth - 10 scoring."""
        agent = MinimaxAgent(Mark.X)
        x_won = BoardState.from_string("XXX/OO_/___")
        o_won = BoardState.from_string("XX_/OOO/X__")
        drawn = BoardState.from_string("XOX/XOO/OXX")

        assert agent.score(x_won, 0, True, -np.inf, np.inf) == 10
        assert agent.score(x_won, 3, False, -np.inf, np.inf) == 7
        assert agent.score(o_won, 0, True, -np.inf, np.inf) == -10
        assert agent.score(o_won, 4, True, -np.inf, np.inf) == -6
        assert agent.score(drawn, 5, True, -np.inf, np.inf) == 0

    def test_immediate_win_scores_nine(self) -> None:
        agent = MinimaxAgent(Mark.X)
        board = BoardState.from_string("XX_/OO_/___").place(2, Mark.X)
        assert agent.score(board, 1, False, -np.inf, np.inf) == 9

    def test_forced_loss_is_delayed(self) -> None:
        """Test that a lost position is scored by its longest resistance."""
        # X X _
        # X O _   O to move cannot stop both 2 and 6
        # _ _ O
        board = BoardState.from_string("XX_/XO_/__O")
        agent = MinimaxAgent(Mark.O)
        # O blocks one threat, X completes the other at depth 2
        assert agent.root_score(board) == -8

    def test_never_mutates_board(self) -> None:
        board = BoardState.from_string("X__/_O_/___")
        before = board.cells
        MinimaxAgent(Mark.X).decide(board)
        assert board.cells == before

    @pytest.mark.parametrize("text", FINISHED_BOARDS)
    def test_raises_on_finished_board(self, text: str) -> None:
        with pytest.raises(InvariantViolationError):
            MinimaxAgent(Mark.O).decide(BoardState.from_string(text))

    def test_minimax_vs_minimax_draws(self) -> None:
        """Test that two minimax agents draw from the empty board."""
        result = play_game(MinimaxAgent(Mark.X), MinimaxAgent(Mark.O))
        assert result.outcome.status is GameStatus.DRAW
        assert result.num_moves == 9

    def test_never_loses_vs_random(self) -> None:
        """Test that minimax never loses against random play."""
        minimax = MinimaxAgent(Mark.O)
        random = RandomAgent(Mark.X, seed=42)

        for _ in range(10):
            result = play_game(random, minimax)
            assert result.winner is not Mark.X


class TestHumanAgent:
    """Test HumanAgent input validation."""

    def test_returns_legal_input(self) -> None:
        agent = HumanAgent(Mark.X, lambda board: 4)
        assert agent.decide(BoardState.empty()) == 4

    def test_re_requests_until_legal(self) -> None:
        """Test that out-of-range and occupied moves are re-requested."""
        inputs = iter([9, 0, -3, 4])
        rejected = []
        agent = HumanAgent(
            Mark.O, lambda board: next(inputs), on_illegal=rejected.append
        )

        move = agent.decide(BoardState.from_string("X________"))

        assert move == 4
        assert [e.reason for e in rejected] == ["out_of_bounds", "occupied", "out_of_bounds"]

    def test_reader_errors_are_re_requested(self) -> None:
        """Test that a reader raising IllegalMoveError is asked again."""
        calls = []

        def read_move(board: BoardState) -> int:
            calls.append(board)
            if len(calls) == 1:
                raise IllegalMoveError("abc", "malformed")
            return 8

        agent = HumanAgent(Mark.X, read_move)
        assert agent.decide(BoardState.empty()) == 8
        assert len(calls) == 2

    def test_result_satisfies_shared_predicate(self) -> None:
        board = BoardState.from_string("XO_/___/___")
        agent = HumanAgent(Mark.X, lambda b: 2)
        assert validate_move(board, agent.decide(board)) == 2


class TestAgentComparison:
    """Test agents against each other."""

    def test_heuristic_beats_random_often(self) -> None:
        """Test that heuristic agent beats random agent most of the time."""
        heuristic = HeuristicAgent(Mark.X, seed=1)
        random = RandomAgent(Mark.O, seed=42)

        heuristic_wins = 0
        random_wins = 0

        for _ in range(50):
            result = play_game(heuristic, random)
            if result.winner is Mark.X:
                heuristic_wins += 1
            elif result.winner is Mark.O:
                random_wins += 1

        assert heuristic_wins > random_wins
