"""
Placement Module - A single digit placed in a single cell.
"""

from dataclasses import dataclass

from .board import block_index


@dataclass(frozen=True)
class Placement:
    """
    Represents "digit value goes in cell (row, col)".

    Used both as the payload of a candidate row in the exact-cover
    matrix and as the record of cells a solver filled in.

    Attributes:
        row: Row index (0-8)
        col: Column index (0-8)
        value: Digit (1-9)
    """
    row: int
    col: int
    value: int

    @property
    def block(self) -> int:
        """Index of the 3x3 block containing this cell (0-8, row-major)."""
        return block_index(self.row, self.col)

    @property
    def cell(self) -> tuple:
        """(row, col) position of this placement."""
        return (self.row, self.col)
