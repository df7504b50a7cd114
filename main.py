import sys
import asyncio

from loguru import logger
from rich.console import Console
from rich.prompt import Prompt

from bracketboard.logging.setup import setup_logging
from bracketboard.config.settings import AppSettings, settings

from bracketboard.board.tournament import TournamentBoard
from bracketboard.calculation.predictions import BoardError
from bracketboard.display.renderer import BoardRenderer
from bracketboard.loaders.base_loader import LoadError
from bracketboard.loaders.factory import build_loader
from bracketboard.models.standing import BracketThresholds

QUIT_COMMANDS = {"q", "quit", "exit"}
CLEAR_COMMANDS = {"c", "clear"}


async def load_board(app_settings: AppSettings) -> TournamentBoard:
    """Loads both datasets and builds the board once both have arrived."""
    loader = build_loader(app_settings)
    try:
        teams, matches = await loader.load()
    finally:
        await loader.close()

    thresholds = BracketThresholds(
        winners_max_rank=app_settings.winners_max_rank,
        losers_max_rank=app_settings.losers_max_rank,
    )
    return TournamentBoard(teams, matches, thresholds)


def handle_command(board: TournamentBoard, command: str) -> bool:
    """Applies one user command to the board.

    Returns:
        False when the user asked to quit, True otherwise.

    Raises:
        ValueError: the command could not be parsed.
        BoardError: the prediction was rejected by the board.
    """
    command = command.strip().lower()
    if not command:
        return True
    if command in QUIT_COMMANDS:
        return False
    if command in CLEAR_COMMANDS:
        board.clear_predictions()
        return True

    parts = command.split()
    if len(parts) != 2:
        raise ValueError(f"Expected '<match> <team id>', got '{command}'")
    match_index, team_id = (int(p) for p in parts)
    board.toggle(match_index, team_id)
    return True


def prompt_loop(board: TournamentBoard, renderer: BoardRenderer) -> None:
    while True:
        command = Prompt.ask("[bold]Pick[/bold]", console=renderer.console, default="q")
        try:
            if not handle_command(board, command):
                break
        except (ValueError, BoardError) as e:
            logger.debug(f"Rejected command '{command}': {e}")
            renderer.console.print(f"[red]{e}[/red]")
            continue
        renderer.render()


def main() -> int:
    """Main entry point for the application."""
    logger.info("Starting bracketboard")
    try:
        board = asyncio.run(load_board(settings))
    except LoadError as e:
        logger.critical(f"Could not load tournament data: {e}")
        return 1

    renderer = BoardRenderer(board, Console())
    renderer.render()
    if settings.interactive:
        prompt_loop(board, renderer)
    return 0


def run() -> None:
    setup_logging()
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)


if __name__ == "__main__":
    run()
