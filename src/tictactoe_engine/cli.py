"""Console entry point for playing Tic-Tac-Toe."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import numpy as np
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from tictactoe_engine.board import BOARD_SIZE, BoardState, Mark
from tictactoe_engine.config import GameConfig, load_config
from tictactoe_engine.evaluator import GameStatus, Outcome
from tictactoe_engine.exceptions import IllegalMoveError, TicTacToeError
from tictactoe_engine.factory import Difficulty, GameMode, create_agent, new_game
from tictactoe_engine.game import evaluate_agents, format_results_table, play_game

console = Console()

MODE_MENU = {"1": GameMode.HUMAN_VS_HUMAN, "2": GameMode.HUMAN_VS_MACHINE}
DIFFICULTY_MENU = {"1": Difficulty.EASY, "2": Difficulty.MEDIUM, "3": Difficulty.HARD}
DIFFICULTY_CHOICE = click.Choice([d.value for d in Difficulty])


def configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def parse_move_text(text: str) -> int:
    """
    Parse console move input.

    Accepts "row col" (each 0-2) or a single cell index.

    Raises:
        IllegalMoveError: If the text is not a move
    """
    tokens = text.replace(",", " ").split()
    try:
        numbers = [int(t) for t in tokens]
    except ValueError:
        raise IllegalMoveError(text, "malformed") from None

    if len(numbers) == 1:
        return numbers[0]
    if len(numbers) == 2:
        row, col = numbers
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IllegalMoveError(text, "out_of_bounds")
        return row * BOARD_SIZE + col
    raise IllegalMoveError(text, "malformed")


def _read_console_move(board: BoardState) -> int:
    mark = board.next_mark()
    text = click.prompt(f"Player {mark.symbol}, enter your move (row col)", type=str)
    return parse_move_text(text)


def _report_illegal(error: IllegalMoveError) -> None:
    console.print(
        f"[red]Illegal move:[/red] {escape(repr(error.index))} ({error.reason}). Try again."
    )


def _show_move(mark: Mark, index: int, board: BoardState) -> None:
    row, col = divmod(index, BOARD_SIZE)
    console.print(f"[dim]{mark.symbol} plays row {row}, col {col}[/dim]")
    console.print(board.render(), markup=False)


def _result_banner(outcome: Outcome) -> str:
    if outcome.status is GameStatus.WIN:
        return f"[bold green]Player {outcome.winner.symbol} wins![/bold green]"  # type: ignore[union-attr]
    return "[bold yellow]Draw![/bold yellow]"


def _prompt_mode() -> GameMode:
    console.print("Choose a game mode:")
    console.print("  [cyan]1[/cyan] - Human vs Human")
    console.print("  [cyan]2[/cyan] - Human vs Machine")
    choice = click.prompt("Your choice", type=click.Choice(list(MODE_MENU)), default="2")
    return MODE_MENU[choice]


def _prompt_difficulty() -> Difficulty:
    console.print("Choose the machine's difficulty:")
    console.print("  [cyan]1[/cyan] - Easy")
    console.print("  [cyan]2[/cyan] - Medium")
    console.print("  [cyan]3[/cyan] - Hard")
    choice = click.prompt(
        "Your choice", type=click.Choice(list(DIFFICULTY_MENU)), default="1"
    )
    return DIFFICULTY_MENU[choice]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """Tic-Tac-Toe against a human or a machine opponent.

    \b
    Examples:
        tictactoe play                         # Menu-driven game
        tictactoe play --mode hvm -d hard      # Play the perfect opponent
        tictactoe suggest "XX_/OO_/___"        # Ask the engine for a move
        tictactoe match --x-difficulty hard    # Pit two machines against each other
    """
    ctx.ensure_object(dict)

    try:
        config = load_config(project_config_path=config_path)
    except TicTacToeError as e:
        raise click.ClickException(str(e)) from e

    configure_logging("DEBUG" if verbose else config.logging.level)
    ctx.obj["config"] = config


@cli.command()
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in GameMode]),
    help="hvh = human vs human, hvm = human vs machine",
)
@click.option("--difficulty", "-d", type=DIFFICULTY_CHOICE, help="Machine difficulty")
@click.option("--seed", type=int, help="Seed for the machine's random choices")
@click.pass_context
def play(
    ctx: click.Context,
    mode: Optional[str],
    difficulty: Optional[str],
    seed: Optional[int],
) -> None:
    """Play an interactive game. X always moves first."""
    config: GameConfig = ctx.obj["config"]

    console.print(Panel.fit("[bold cyan]Tic-Tac-Toe[/bold cyan]", border_style="cyan"))

    game_mode = GameMode(mode) if mode else config.mode or _prompt_mode()
    level: Optional[Difficulty] = None
    if game_mode is GameMode.HUMAN_VS_MACHINE:
        if difficulty:
            level = Difficulty(difficulty)
        else:
            level = config.difficulty or _prompt_difficulty()

    rng = np.random.default_rng(seed if seed is not None else config.seed)
    player_x, player_o = new_game(
        game_mode,
        level,
        read_move=_read_console_move,
        on_illegal=_report_illegal,
        rng=rng,
    )

    board = BoardState.empty()
    console.print(board.render(), markup=False)
    result = play_game(player_x, player_o, board, on_move=_show_move)
    console.print(_result_banner(result.outcome))


@cli.command()
@click.argument("board_text", metavar="BOARD")
@click.option(
    "--mark",
    type=click.Choice(["X", "O"], case_sensitive=False),
    help="Mark to move (default: side to move)",
)
@click.option(
    "--difficulty", "-d", type=DIFFICULTY_CHOICE, default="hard", show_default=True
)
@click.option("--seed", type=int, help="Seed for random choices")
def suggest(
    board_text: str, mark: Optional[str], difficulty: str, seed: Optional[int]
) -> None:
    """Print the move an engine of DIFFICULTY picks on BOARD.

    BOARD lists the nine cells row by row using X, O and _ for empty;
    separators such as '/' and '|' are ignored.
    """
    try:
        board = BoardState.from_string(board_text)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="BOARD") from e

    if not board.is_consistent():
        console.print("[yellow]Warning:[/yellow] board cannot arise from legal play")

    to_move = Mark.from_symbol(mark) if mark else board.next_mark()
    agent = create_agent(Difficulty(difficulty), to_move, np.random.default_rng(seed))

    try:
        move = agent.decide(board)
    except TicTacToeError as e:
        raise click.ClickException(str(e)) from e

    row, col = divmod(move, BOARD_SIZE)
    console.print(f"Suggested move for {to_move.symbol}: {move} (row {row}, col {col})")


@cli.command()
@click.option("--x-difficulty", type=DIFFICULTY_CHOICE, default="medium", show_default=True)
@click.option("--o-difficulty", type=DIFFICULTY_CHOICE, default="easy", show_default=True)
@click.option("--games", "-n", type=click.IntRange(min=1), default=100, show_default=True)
@click.option("--seed", type=int, help="Seed for random choices")
@click.pass_context
def match(
    ctx: click.Context,
    x_difficulty: str,
    o_difficulty: str,
    games: int,
    seed: Optional[int],
) -> None:
    """Play repeated machine-vs-machine games and report the results."""
    config: GameConfig = ctx.obj["config"]
    rng = np.random.default_rng(seed if seed is not None else config.seed)

    agent_x = create_agent(Difficulty(x_difficulty), Mark.X, rng)
    agent_o = create_agent(Difficulty(o_difficulty), Mark.O, rng)

    stats = evaluate_agents(
        agent_x, agent_o, x_difficulty.capitalize(), o_difficulty.capitalize(), games
    )
    console.print(format_results_table(stats))


def main() -> None:
    """Main entry point for the CLI."""
    try:
        # click reports Ctrl-C as Abort; standalone mode would exit 1 first
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        console.print("\n[yellow]Game cancelled by user[/yellow]")
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except TicTacToeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
