"""
Sudoku Solver - Entry Point

Picks a solver, loads a board, solves it and prints the result.

Example:
    python main.py
    python main.py --solver backtracking
    python main.py --board "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"
    python main.py --file puzzle.txt --debug
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from sudoku_solver.solver import (
    BoardState,
    InvalidBoardError,
    SudokuError,
    create_solver,
    get_default_solver_name,
    get_solver_info,
)
from sudoku_solver.settings import load_settings, save_settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

logger = logging.getLogger(__name__)

# Board used when none is given on the command line
CLASSIC_BOARD = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

EXIT_SOLVED = 0
EXIT_UNSOLVABLE = 1
EXIT_INVALID = 2


def setup_logging(debug: bool, log_file: Optional[str] = None) -> None:
    """
    Configure logging - output to console and optionally a file.

    Args:
        debug: DEBUG level if True, otherwise INFO
        log_file: Optional path of a log file to write as well
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )


class Application:
    """
    Command-line application controller.

    Resolves the solver from CLI flags and saved settings, loads the
    board, and prints the outcome.
    """

    def __init__(self, solver_name: Optional[str] = None, debug_mode: bool = False,
                 settings_path: Optional[str] = None):
        """
        Initialize the application.

        Args:
            solver_name: Solver to use (overrides saved setting)
            debug_mode: Enable debug logging via CLI (overrides saved setting)
            settings_path: Settings file (default: config.json)
        """
        self.settings_path = settings_path
        self.settings = load_settings(settings_path)
        self.solver_name = (
            solver_name
            or self.settings.get("solver_name")
            or get_default_solver_name()
        )
        self.debug_mode = debug_mode or self.settings.get("debug_enabled", False)

    def load_board(self, board_text: Optional[str] = None,
                   board_file: Optional[str] = None) -> List[List[int]]:
        """
        Load the board to solve.

        Args:
            board_text: Board as 81 digits ('0' or '.' for empty)
            board_file: Path of a text file holding such a board

        Returns:
            Mutable 9x9 grid

        Raises:
            InvalidBoardError: If the text or file is not a valid board
            OSError: If the board file cannot be read
        """
        if board_file:
            try:
                board_text = Path(board_file).read_text(encoding='utf-8')
            except UnicodeDecodeError as e:
                raise InvalidBoardError(f"Board file {board_file} is not UTF-8 text: {e}") from e
        if board_text:
            return BoardState.from_string(board_text).to_list()
        return [row[:] for row in CLASSIC_BOARD]

    def run(self, board: List[List[int]]) -> int:
        """
        Solve the board and print the outcome.

        Returns:
            Exit code

        Raises:
            InvalidSolverType: If the solver name is not registered
            InvalidBoardError: If the board is not a valid 9x9 grid
        """
        solver = create_solver(self.solver_name)
        logger.debug(f"Using solver: {solver.name}")

        print("Start Board")
        print(BoardState.from_grid(board))

        solution = solver.run(board)

        # Remember the last solver that was actually used
        if self.settings.get("solver_name") != solver.name:
            self.settings["solver_name"] = solver.name
            save_settings(self.settings, self.settings_path)

        if not solution.solved:
            print("Sudoku has no solution.")
            return EXIT_UNSOLVABLE

        print("Sudoku solved successfully!")
        print(solution.board)
        print(f"Filled {solution.placement_count} cells in "
              f"{solution.metrics.computation_time_ms:.1f}ms")
        return EXIT_SOLVED


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sudoku Solver - Dancing Links and backtracking solvers"
    )
    parser.add_argument(
        "--solver", "-s",
        default=None,
        help="Solver to use (default: saved setting, initially dancing_links)"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--board", "-b",
        help="Board as 81 digits, '0' or '.' for empty cells"
    )
    source.add_argument(
        "--file", "-f",
        help="Text file containing the board"
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List available solvers and exit"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write the log to this file"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file (default: config.json)"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the Sudoku Solver command line."""
    args = parse_args(argv)

    application = Application(
        solver_name=args.solver,
        debug_mode=args.debug,
        settings_path=args.config,
    )
    setup_logging(application.debug_mode, args.log_file)

    if args.list:
        for info in get_solver_info():
            print(f"{info['name']:<16} {info['description']}")
        return EXIT_SOLVED

    try:
        board = application.load_board(args.board, args.file)
        return application.run(board)
    except SudokuError as e:
        logger.error(str(e))
        return EXIT_INVALID
    except OSError as e:
        logger.error(f"Cannot read board file: {e}")
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
