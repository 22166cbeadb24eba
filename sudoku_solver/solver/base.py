"""
Base Solver Module - Abstract base class for solving algorithms.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List, Sequence

from .board import BoardState
from .placement import Placement
from .solution import Solution, SolutionMetrics

logger = logging.getLogger(__name__)


class SudokuSolver(ABC):
    """
    Abstract base class for all solving algorithms.

    Subclasses must implement solve() and define name and
    description class attributes.

    Attributes:
        name: Short identifier used by the solver selector
        description: Human-readable description for CLI listings
        metrics: Statistics of the most recent solve() call
    """
    name: str = "base"
    description: str = "Base solver"

    def __init__(self):
        self.metrics = SolutionMetrics(solver_name=self.name)

    @abstractmethod
    def solve(self, board: List[List[int]]) -> bool:
        """
        Solve the board in place.

        On success every empty cell is filled. On failure the board is
        left with its clues intact and every other cell 0.

        Args:
            board: 9x9 grid, 0 for empty cells. Mutated on success.

        Returns:
            True if solved, False if no valid completion exists

        Raises:
            InvalidBoardError: If the board is not a valid 9x9 grid
        """
        pass

    def run(self, board: List[List[int]]) -> Solution:
        """
        Solve the board and collect a Solution with metrics.

        Args:
            board: 9x9 grid, mutated in place like solve()

        Returns:
            Solution describing the outcome
        """
        before = BoardState.from_grid(board)
        start_time = time.perf_counter()

        solved = self.solve(board)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.metrics.computation_time_ms = elapsed_ms

        after = BoardState.from_grid(board)
        placements = [
            Placement(r, c, after.get_cell(r, c)) for r, c in before.diff(after)
        ]

        logger.info(
            f"{self.name}: {'solved' if solved else 'no solution'} in {elapsed_ms:.1f}ms "
            f"({self.metrics.nodes_explored} nodes, {self.metrics.backtracks} backtracks)"
        )

        return Solution(
            solved=solved,
            board=after,
            placements=placements,
            metrics=self.metrics,
        )

    def _reset_metrics(self) -> None:
        """Start a fresh metrics record for a new solve() call."""
        self.metrics = SolutionMetrics(solver_name=self.name)

    @staticmethod
    def _clues(board: Sequence[Sequence[int]]) -> int:
        """Count non-empty cells (for debug logging)."""
        return sum(1 for row in board for cell in row if cell)
