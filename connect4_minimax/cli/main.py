"""
CLI for the Connect4 engine.

Usage:
    python -m connect4_minimax.cli.main --help
    python -m connect4_minimax.cli.main play
    python -m connect4_minimax.cli.main play --computer-first --depth 5
    python -m connect4_minimax.cli.main analyze 3,3,4,2
    python -m connect4_minimax.cli.main --log-level DEBUG analyze 0,6,1,6,2
"""

import logging
from enum import Enum
from typing import Annotated

import typer

from ..ai.evaluation import score_position
from ..ai.minimax import MinimaxAI
from ..core.config import get_settings
from ..core.errors import Connect4Error
from ..core.types import GamePhase, Player
from ..game.board import Board
from ..game.engine import GameEngine
from ..game.session import Session


app = typer.Typer(
    name="connect4",
    help="Play Connect4 against a minimax opponent, or analyze positions.",
    add_completion=False,
)


class LogLevel(str, Enum):
    """Log verbosity."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@app.callback()
def configure(
    log_level: Annotated[
        LogLevel | None, typer.Option("--log-level", help="Override LOG_LEVEL")
    ] = None,
):
    """Connect4 engine CLI."""
    settings = get_settings()
    level = log_level.value if log_level else settings.log.level
    logging.basicConfig(level=getattr(logging, level), format=settings.log.format)


def board_to_ascii(board: Board) -> str:
    """Convert board to ASCII display."""
    header = "".join(f"{c:^4}" for c in range(board.cols))
    separator = "+" + "---+" * board.cols
    lines = ["\n " + header.rstrip(), separator]

    for row in board.grid:
        lines.append("|" + "|".join(f" {cell.symbol} " for cell in row) + "|")
        lines.append(separator)

    return "\n".join(lines)


def _player_name(engine: GameEngine, player: Player) -> str:
    role = "You" if player == engine.human_player else "Computer"
    return f"{role} ({player.symbol})"


def print_status(engine: GameEngine, last_move: int | None = None):
    """Print game status."""
    typer.echo(board_to_ascii(engine.board))
    typer.echo(f"\nTurn: {engine.board.turn_count}")

    if last_move is not None:
        typer.echo(f"Last move: Column {last_move}")

    if engine.phase == GamePhase.WON:
        typer.echo(f"\n🎉 {_player_name(engine, engine.winner)} WINS! 🎉")
    elif engine.phase == GamePhase.DRAWN:
        typer.echo("\n🤝 It's a DRAW!")
    else:
        typer.echo(f"Current player: {_player_name(engine, engine.board.current_player())}")
        typer.echo(f"Legal moves: {engine.board.valid_columns()}")


def print_scores(engine: GameEngine):
    you = engine.score(engine.human_player)
    computer = engine.score(engine.computer_player)
    typer.echo(f"Score - You: {you}  Computer: {computer}")


@app.command()
def play(
    depth: Annotated[int | None, typer.Option("--depth", "-d", min=1, help="AI search depth")] = None,
    computer_first: Annotated[bool, typer.Option("--computer-first", help="Computer plays first")] = False,
):
    """
    Play Connect4 against the computer in the terminal.

    Examples:
        play                    # You move first
        play --computer-first   # Computer opens
        play -d 6               # Stronger (slower) computer
    """
    settings = get_settings()
    session = Session()
    engine = GameEngine.from_settings(
        settings,
        ai=MinimaxAI(depth=depth or settings.ai.depth),
        session=session,
    )
    human_first = settings.game.human_first and not computer_first

    typer.echo("\n" + "=" * 50)
    typer.echo("  CONNECT 4")
    typer.echo("=" * 50)
    typer.echo(f"\nAI: {engine.ai.get_name()}")

    while True:
        engine.new_game(human_first=human_first)
        if not _play_game(engine):
            break
        print_scores(engine)
        if not typer.confirm("\nPlay again?", default=False):
            break

    print_scores(engine)


def _play_game(engine: GameEngine) -> bool:
    """Human vs computer game loop. Returns False if the player quit."""
    typer.echo(f"First player: {'You' if engine.human_player == Player.ONE else 'Computer'}")
    typer.echo(f"\nEnter column number (0-{engine.board.cols - 1}) to play, 'q' to quit\n")

    last_move = None

    while not engine.is_game_over:
        print_status(engine, last_move)

        if engine.is_computer_turn:
            typer.echo("\n🤖 Computer is thinking...")
            result = engine.play_computer()
            typer.echo(f"AI chose: Column {result.column} - {engine.last_explanation}")
            last_move = result.column
            continue

        while True:
            try:
                user_input = typer.prompt(f"\n👤 Your move (0-{engine.board.cols - 1})")
            except (KeyboardInterrupt, typer.Abort):
                typer.echo("\nGame quit.")
                return False

            if user_input.strip().lower() == "q":
                typer.echo("Game quit.")
                return False

            try:
                col = int(user_input)
            except ValueError:
                typer.echo(f"Enter a number 0-{engine.board.cols - 1}")
                continue

            legal = engine.board.valid_columns()
            if col not in legal:
                typer.echo(f"Invalid! Legal moves: {legal}")
                continue

            engine.play_human(col)
            last_move = col
            break

    print_status(engine, last_move)
    return True


def _parse_moves(moves: str) -> list[int]:
    if not moves.strip():
        return []
    try:
        return [int(part) for part in moves.split(",")]
    except ValueError as e:
        raise typer.BadParameter(f"Moves must be comma-separated column numbers: {moves!r}") from e


@app.command()
def analyze(
    moves: Annotated[str, typer.Argument(help="Comma-separated columns played from an empty board, e.g. 3,3,4")] = "",
    depth: Annotated[int | None, typer.Option("--depth", "-d", min=1, help="AI search depth")] = None,
):
    """
    Replay a move sequence and show how the engine sees the position.

    Examples:
        analyze                # Opening move
        analyze 0,6,1,6,2      # Side to move must block column 3
    """
    settings = get_settings()
    board = Board(settings.game.rows, settings.game.cols, settings.game.win_length)
    for col in _parse_moves(moves):
        try:
            board.play(col, board.current_player())
        except Connect4Error as e:
            raise typer.BadParameter(str(e)) from e
        board.increment_turn()

    ai = MinimaxAI(depth=depth or settings.ai.depth)
    to_move = board.current_player()

    typer.echo(board_to_ascii(board))
    typer.echo(f"\nTurn: {board.turn_count}")
    typer.echo(f"To move: {to_move.symbol} ({to_move})")

    winner = board.check_winner()
    typer.echo(f"Winner on board: {winner.symbol if winner else 'none'}")
    typer.echo(f"Terminal: {'yes' if board.is_terminal() else 'no'}")
    immediate = board.find_immediate_win()
    typer.echo(f"Immediate win: {'none' if immediate is None else f'column {immediate}'}")
    typer.echo(f"Static score: {score_position(board, to_move)}")

    scores = ai.evaluate_moves(board)
    if scores:
        typer.echo(f"\nColumn scores ({ai.get_name()}):")
        for col, score in scores.items():
            typer.echo(f"  {col}: {score:g}")

    column = ai.choose_move(board)
    if column is None:
        typer.echo("\nNo legal move")
    else:
        typer.echo(f"\nRecommended column: {column}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
