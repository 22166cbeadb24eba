"""
Solution Module - Result of a solver run.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .board import BoardState
from .placement import Placement


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a solver run.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        nodes_explored: Search nodes visited (placements tried / search calls)
        backtracks: Placements retracted after a failed branch
        solver_name: Name of solver that produced the result
    """
    computation_time_ms: float = 0.0
    nodes_explored: int = 0
    backtracks: int = 0
    solver_name: str = ""


@dataclass
class Solution:
    """
    Result of a solver run.

    Attributes:
        solved: True if the board was completed, False if unsolvable
        board: Board after the run (unchanged when unsolvable)
        placements: Cells the solver filled in, row-major
        metrics: Performance statistics
    """
    solved: bool = False
    board: Optional[BoardState] = None
    placements: List[Placement] = field(default_factory=list)
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def placement_count(self) -> int:
        """Number of cells filled by the solver."""
        return len(self.placements)

    @property
    def has_placements(self) -> bool:
        """Check if the solver filled any cell."""
        return len(self.placements) > 0
