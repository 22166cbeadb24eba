"""
Backtracking Solver - Cell-by-cell recursive search on the grid.
"""

import logging
from typing import List

from ..base import SudokuSolver
from ..board import BLOCK_SIZE, BOARD_SIZE, EMPTY, has_conflicting_clues, validate_grid
from ..factory import register_solver

logger = logging.getLogger(__name__)


@register_solver
class BacktrackingSolver(SudokuSolver):
    """
    Plain backtracking solver, kept as a reference for Dancing Links.

    Visits cells left to right, top to bottom. Each empty cell tries
    1-9 in order; a value is placed if it is not already in the cell's
    row, column or block, and reset to 0 when the rest of the board
    cannot be completed.
    """
    name = "backtracking"
    description = "Backtracking - cell-by-cell trial and error"

    def solve(self, board: List[List[int]]) -> bool:
        """
        Solve the board in place by backtracking.

        Args:
            board: 9x9 grid, 0 for empty cells

        Returns:
            True if solved, False if no valid completion exists

        Raises:
            InvalidBoardError: If the board is not a valid 9x9 grid
        """
        self._reset_metrics()
        validate_grid(board)

        # Search never revisits clues, so a contradiction among them
        # would otherwise only be found by exhausting every branch
        if has_conflicting_clues(board):
            logger.debug("Clues contradict each other, skipping search")
            return False

        logger.debug(f"Backtracking from {self._clues(board)} clues")
        return self._solve_cell(board, 0, 0)

    def _solve_cell(self, board: List[List[int]], row: int, col: int) -> bool:
        """Fill (row, col) and everything after it, or report failure."""
        if row == BOARD_SIZE:
            return True

        if col == BOARD_SIZE:
            return self._solve_cell(board, row + 1, 0)

        if board[row][col] != EMPTY:
            return self._solve_cell(board, row, col + 1)

        for num in range(1, BOARD_SIZE + 1):
            if self._is_safe(board, row, col, num):
                board[row][col] = num
                self.metrics.nodes_explored += 1

                if self._solve_cell(board, row, col + 1):
                    return True

                board[row][col] = EMPTY
                self.metrics.backtracks += 1

        return False

    def _is_safe(self, board: List[List[int]], row: int, col: int, num: int) -> bool:
        """Check num is absent from the row, column and block of (row, col)."""
        for i in range(BOARD_SIZE):
            if board[row][i] == num:
                return False

        for i in range(BOARD_SIZE):
            if board[i][col] == num:
                return False

        box_row = row - row % BLOCK_SIZE
        box_col = col - col % BLOCK_SIZE
        for i in range(box_row, box_row + BLOCK_SIZE):
            for j in range(box_col, box_col + BLOCK_SIZE):
                if board[i][j] == num:
                    return False

        return True
