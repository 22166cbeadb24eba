"""
Board Module - Grid validation and immutable board snapshots.

Solvers work on a caller-owned mutable grid (list of lists or a 2D numpy
array). BoardState is an immutable copy of such a grid used for parsing,
comparison and reporting.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidBoardError

BOARD_SIZE = 9
BLOCK_SIZE = 3
EMPTY = 0
DIGITS = range(1, BOARD_SIZE + 1)

# Characters ignored when parsing a board from text
_SEPARATORS = set(" \t\r\n|-+,")

# ASCII only: str.isdigit() is also true for superscripts and other scripts
_DIGIT_CHARS = set("0123456789")


def block_index(row: int, col: int) -> int:
    """Index of the 3x3 block containing (row, col), numbered row-major."""
    return (row // BLOCK_SIZE) * BLOCK_SIZE + col // BLOCK_SIZE


def validate_grid(grid: Sequence[Sequence[int]]) -> np.ndarray:
    """
    Check that a grid is 9x9 with integer entries in 0-9.

    Args:
        grid: 2D list or numpy array

    Returns:
        The grid as an integer numpy array (a copy for list input)

    Raises:
        InvalidBoardError: If shape, element type or value range is wrong
    """
    try:
        arr = np.asarray(grid)
    except ValueError as e:
        # Ragged nested lists
        raise InvalidBoardError(f"Board is not a rectangular grid: {e}") from e

    if arr.shape != (BOARD_SIZE, BOARD_SIZE):
        raise InvalidBoardError(
            f"Board must be {BOARD_SIZE}x{BOARD_SIZE}, got shape {arr.shape}"
        )
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidBoardError(f"Board cells must be integers, got {arr.dtype}")

    out_of_range = (arr < EMPTY) | (arr > BOARD_SIZE)
    if out_of_range.any():
        r, c = (int(i) for i in np.argwhere(out_of_range)[0])
        raise InvalidBoardError(
            f"Cell ({r},{c}) has value {arr[r, c]}, expected 0-{BOARD_SIZE}"
        )
    return arr


def _units(arr: np.ndarray) -> np.ndarray:
    """Stack rows, columns and blocks of a 9x9 array into a 27x9 array."""
    blocks = (
        arr.reshape(BLOCK_SIZE, BLOCK_SIZE, BLOCK_SIZE, BLOCK_SIZE)
        .transpose(0, 2, 1, 3)
        .reshape(BOARD_SIZE, BOARD_SIZE)
    )
    return np.concatenate([arr, arr.T, blocks])


def is_valid_solution(grid: Sequence[Sequence[int]]) -> bool:
    """
    Check that every row, column and block is a permutation of 1-9.

    Args:
        grid: 2D list or numpy array

    Returns:
        True if the grid is a complete valid Sudoku solution
    """
    try:
        arr = validate_grid(grid)
    except InvalidBoardError:
        return False
    expected = np.arange(1, BOARD_SIZE + 1)
    return bool((np.sort(_units(arr), axis=1) == expected).all())


def has_conflicting_clues(grid: Sequence[Sequence[int]]) -> bool:
    """
    Check whether any digit appears twice in a row, column or block.

    Empty cells are ignored.

    Args:
        grid: Validated 9x9 grid

    Returns:
        True if the given clues contradict each other
    """
    units = _units(np.asarray(grid))
    for unit in units:
        filled = unit[unit != EMPTY]
        if len(filled) != len(np.unique(filled)):
            return True
    return False


def format_board(grid: Sequence[Sequence[int]], empty: str = ".") -> str:
    """
    Render a grid as text with block separators.

    Args:
        grid: 9x9 grid
        empty: Character used for empty cells

    Returns:
        Multi-line string
    """
    lines = []
    for r in range(BOARD_SIZE):
        if r and r % BLOCK_SIZE == 0:
            lines.append("------+-------+------")
        cells = []
        for c in range(BOARD_SIZE):
            if c and c % BLOCK_SIZE == 0:
                cells.append("|")
            value = int(grid[r][c])
            cells.append(str(value) if value != EMPTY else empty)
        lines.append(" ".join(cells))
    return "\n".join(lines)


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board snapshot.

    Uses tuple-of-tuples for hashability and immutability.
    Cells contain integers 0-9, 0 meaning empty.

    Attributes:
        grid: Tuple of tuples representing the board
    """
    grid: Tuple[Tuple[int, ...], ...]

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]]) -> 'BoardState':
        """
        Create a validated BoardState from a 2D list or numpy array.

        Raises:
            InvalidBoardError: If the grid is not a valid board
        """
        arr = validate_grid(grid)
        return cls(grid=tuple(tuple(int(v) for v in row) for row in arr))

    @classmethod
    def from_string(cls, text: str) -> 'BoardState':
        """
        Parse a board from 81 digit characters.

        '0' and '.' denote empty cells. Whitespace and the separator
        characters produced by format_board() are ignored.

        Args:
            text: Board text

        Returns:
            BoardState instance

        Raises:
            InvalidBoardError: On unexpected characters or wrong cell count
        """
        values: List[int] = []
        for ch in text:
            if ch in _SEPARATORS:
                continue
            if ch == ".":
                values.append(EMPTY)
            elif ch in _DIGIT_CHARS:
                values.append(int(ch))
            else:
                raise InvalidBoardError(f"Unexpected character in board: {ch!r}")

        expected = BOARD_SIZE * BOARD_SIZE
        if len(values) != expected:
            raise InvalidBoardError(f"Board needs {expected} cells, got {len(values)}")

        rows = [values[i:i + BOARD_SIZE] for i in range(0, expected, BOARD_SIZE)]
        return cls.from_grid(rows)

    def to_list(self) -> List[List[int]]:
        """Convert to a mutable 2D list the solvers can work on."""
        return [list(row) for row in self.grid]

    def get_cell(self, row: int, col: int) -> int:
        """Value at (row, col), 0 if empty."""
        return self.grid[row][col]

    def diff(self, other: 'BoardState') -> List[Tuple[int, int]]:
        """
        Find cells that differ between this board and another.

        Args:
            other: Another BoardState to compare against

        Returns:
            List of (row, col) tuples where cells differ, row-major
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")

        return [
            (r, c)
            for r in range(BOARD_SIZE)
            for c in range(BOARD_SIZE)
            if self.grid[r][c] != other.grid[r][c]
        ]

    def count_clues(self) -> int:
        """Number of non-empty cells."""
        return sum(1 for row in self.grid for cell in row if cell != EMPTY)

    def is_complete(self) -> bool:
        """True if no cell is empty."""
        return self.count_clues() == BOARD_SIZE * BOARD_SIZE

    def is_solved(self) -> bool:
        """True if the board is a complete valid solution."""
        return is_valid_solution(self.grid)

    def __str__(self) -> str:
        return format_board(self.grid)
