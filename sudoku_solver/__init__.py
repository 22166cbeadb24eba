"""
Sudoku Solver - Dancing Links and backtracking solvers for 9x9 Sudoku.
"""

__version__ = "1.0.0"
