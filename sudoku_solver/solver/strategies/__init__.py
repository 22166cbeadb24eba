"""
Strategies Package - Concrete solver implementations.

Import this module to register all built-in solvers.
"""

from .backtracking import BacktrackingSolver
from .dancing_links import DancingLinksSolver

__all__ = [
    "BacktrackingSolver",
    "DancingLinksSolver",
]
