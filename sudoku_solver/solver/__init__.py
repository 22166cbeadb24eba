"""
Solver Package - Interchangeable Sudoku solving algorithms.

Two solvers are registered: "dancing_links" (Algorithm X over an
exact-cover matrix) and "backtracking" (cell-by-cell search on the grid).
Both solve a caller-owned 9x9 grid in place and return True/False.

Public API:
    - BoardState: Immutable board snapshot, parsing and formatting
    - Placement: (row, col, value) triple
    - Solution: Result of SudokuSolver.run()
    - SolutionMetrics: Performance statistics
    - ExactCoverMatrix: Dancing Links matrix
    - SudokuSolver: Abstract base for solvers
    - create_solver(): Factory function
    - get_solver_names(): List available solvers
    - get_solver_info(): Get solver metadata

Usage:
    from sudoku_solver.solver import create_solver

    board = [[5, 3, 0, 0, 7, 0, 0, 0, 0], ...]
    solver = create_solver("dancing_links")
    if solver.solve(board):
        print(board[0])
"""

# Core data structures
from .board import (
    BoardState,
    BOARD_SIZE,
    BLOCK_SIZE,
    format_board,
    is_valid_solution,
    validate_grid,
)
from .placement import Placement
from .solution import Solution, SolutionMetrics
from .exact_cover import ExactCoverMatrix, NodeKind
from .errors import SudokuError, InvalidBoardError, InvalidSolverType

# Solver framework
from .base import SudokuSolver
from .factory import (
    create_solver,
    get_solver_names,
    get_solver_info,
    get_default_solver_name,
    register_solver,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "BoardState",
    "BOARD_SIZE",
    "BLOCK_SIZE",
    "format_board",
    "is_valid_solution",
    "validate_grid",
    "Placement",
    "Solution",
    "SolutionMetrics",
    "ExactCoverMatrix",
    "NodeKind",
    # Errors
    "SudokuError",
    "InvalidBoardError",
    "InvalidSolverType",
    # Solver framework
    "SudokuSolver",
    "create_solver",
    "get_solver_names",
    "get_solver_info",
    "get_default_solver_name",
    "register_solver",
]
