"""
Dancing Links Solver - Knuth's Algorithm X over the exact-cover matrix.

Sudoku is an exact-cover problem: choose 81 placements so that each of the
324 constraints (cell filled, row/column/block contains each digit) is met
exactly once. The matrix does the bookkeeping with cover/uncover; this
module runs the recursive search and writes the result back to the board.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..base import SudokuSolver
from ..errors import SudokuError
from ..exact_cover import CELL_COUNT, ExactCoverMatrix
from ..factory import register_solver
from ..placement import Placement

logger = logging.getLogger(__name__)


@register_solver
class DancingLinksSolver(SudokuSolver):
    """
    Algorithm X solver with minimum-remaining-values column choice.

    Algorithm:
        1. Build the matrix; clues are committed up front
        2. If no column is live, every constraint is met: done
        3. Cover the column with the fewest candidate rows
        4. For each row in that column, top to bottom:
           - extend the partial solution with the row
           - cover the row's other columns, left to right
           - recurse; on success stop
           - otherwise uncover those columns right to left
        5. Uncover the column and report failure

    The partial solution is an immutable tuple of candidate row ids passed
    down and returned up the recursion.
    """
    name = "dancing_links"
    description = "Dancing Links - Algorithm X exact cover search"

    def solve(self, board: List[List[int]]) -> bool:
        """
        Solve the board in place with Algorithm X.

        The board is only written to once a complete exact cover is found,
        so an unsolvable board is left untouched.

        Args:
            board: 9x9 grid, 0 for empty cells

        Returns:
            True if solved, False if no valid completion exists

        Raises:
            InvalidBoardError: If the board is not a valid 9x9 grid
        """
        placements = self.find_cover(board)
        if placements is None:
            return False

        self._apply(placements, board)
        return True

    def find_cover(self, board: Sequence[Sequence[int]]) -> Optional[List[Placement]]:
        """
        Search for an exact cover without touching the board.

        Args:
            board: 9x9 grid, 0 for empty cells

        Returns:
            The committed placements (clues first, then search choices
            in the order they were made), or None if unsolvable

        Raises:
            InvalidBoardError: If the board is not a valid 9x9 grid
        """
        self._reset_metrics()
        matrix = ExactCoverMatrix.build(board)

        if not matrix.consistent:
            logger.debug("Clues contradict each other, skipping search")
            return None

        rows = self._search(matrix, matrix.committed_rows)
        if rows is None:
            logger.debug(f"Search exhausted after {self.metrics.nodes_explored} nodes")
            return None

        logger.debug(
            f"Exact cover found: {len(matrix.committed_rows)} clues + "
            f"{len(rows) - len(matrix.committed_rows)} choices"
        )
        return [matrix.placements[row_id] for row_id in rows]

    def _search(
        self,
        matrix: ExactCoverMatrix,
        partial: Tuple[int, ...]
    ) -> Optional[Tuple[int, ...]]:
        """
        Recursive Algorithm X step.

        Args:
            matrix: Matrix in the state reached by partial
            partial: Candidate row ids committed so far

        Returns:
            Complete tuple of committed row ids, or None if this branch fails
        """
        self.metrics.nodes_explored += 1

        if matrix.is_empty():
            return partial

        column = matrix.choose_column()
        matrix.cover(column)

        for node in matrix.column_rows(column):
            others = list(matrix.row_nodes(node))
            for other in others:
                matrix.cover(matrix.column_of(other))

            result = self._search(matrix, partial + (matrix.row_id(node),))
            if result is not None:
                return result

            for other in reversed(others):
                matrix.uncover(matrix.column_of(other))
            self.metrics.backtracks += 1

        matrix.uncover(column)
        return None

    def _apply(self, placements: List[Placement], board: List[List[int]]) -> None:
        """
        Write the committed placements into the board.

        Raises:
            SudokuError: If the placements are not one per cell
        """
        cells = {p.cell for p in placements}
        if len(placements) != CELL_COUNT or len(cells) != CELL_COUNT:
            raise SudokuError(
                f"Exact cover produced {len(placements)} placements over "
                f"{len(cells)} cells, expected {CELL_COUNT}"
            )

        for p in placements:
            board[p.row][p.col] = p.value
