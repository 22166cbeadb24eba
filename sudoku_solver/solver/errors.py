"""
Errors Module - Exception hierarchy for the solver package.

Unsolvable puzzles are not errors: solvers report them by returning False.
"""


class SudokuError(Exception):
    """Base class for all solver package errors."""


class InvalidBoardError(SudokuError, ValueError):
    """Board is not 9x9 or contains values outside 0-9."""


class InvalidSolverType(SudokuError, ValueError):
    """Solver selector received an unrecognized solver name."""
