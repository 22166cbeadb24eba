"""
Exact Cover Module - Dancing Links matrix for the Sudoku exact-cover problem.

The matrix has 324 constraint columns:

    0..80     cell (r, c) is filled             r*9 + c
    81..161   row r contains value v            81 + r*9 + (v-1)
    162..242  column c contains value v         162 + c*9 + (v-1)
    243..323  block b contains value v          243 + b*9 + (v-1)

and one candidate row per (r, c, v) placement, made of four nodes, one in
each column the placement satisfies.

Nodes live in parallel integer arrays (an arena) and refer to their
neighbours by index. Node 0 is the root sentinel, nodes 1..324 are the
column headers and everything after that is a candidate node. Each column
is a circular doubly-linked list threaded through its header; the live
headers form a circular list threaded through the root.
"""

import logging
from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence, Tuple

from .board import BOARD_SIZE, DIGITS, EMPTY, block_index, validate_grid
from .placement import Placement

logger = logging.getLogger(__name__)

CELL_COUNT = BOARD_SIZE * BOARD_SIZE
COLUMN_COUNT = 4 * CELL_COUNT

_ROW_OFFSET = CELL_COUNT
_COL_OFFSET = 2 * CELL_COUNT
_BLOCK_OFFSET = 3 * CELL_COUNT

_CONSTRAINT_NAMES = ("cell", "row", "col", "block")


class NodeKind(Enum):
    """Tag distinguishing the three kinds of arena node."""
    ROOT = auto()
    HEADER = auto()
    CANDIDATE = auto()


def constraint_columns(row: int, col: int, value: int) -> Tuple[int, int, int, int]:
    """
    Constraint column numbers satisfied by placing value at (row, col).

    Returns:
        (cell, row-value, col-value, block-value) column numbers
    """
    v = value - 1
    return (
        row * BOARD_SIZE + col,
        _ROW_OFFSET + row * BOARD_SIZE + v,
        _COL_OFFSET + col * BOARD_SIZE + v,
        _BLOCK_OFFSET + block_index(row, col) * BOARD_SIZE + v,
    )


class ExactCoverMatrix:
    """
    Toroidal doubly-linked sparse matrix supporting cover/uncover.

    Build one per solve with ExactCoverMatrix.build(board). Clues are
    committed at build time, so the live matrix only holds the
    constraints the search still has to satisfy.

    Attributes:
        left, right, up, down: Neighbour indices for every node
        column: Header index of each candidate node (-1 for root/headers)
        size: Live candidate count per header (0 for other nodes)
        kind: NodeKind tag per node
        row_of: Candidate row id per candidate node (-1 for root/headers)
        placements: Placement for each candidate row id
        committed_rows: Candidate row ids of the clues committed at build time
        consistent: False if two clues contradict each other
    """

    ROOT = 0

    def __init__(self):
        self.left: List[int] = []
        self.right: List[int] = []
        self.up: List[int] = []
        self.down: List[int] = []
        self.column: List[int] = []
        self.size: List[int] = []
        self.kind: List[NodeKind] = []
        self.row_of: List[int] = []

        self.placements: List[Placement] = []
        self._row_heads: List[int] = []
        self.committed_rows: Tuple[int, ...] = ()
        self.consistent = True

        self._new_node(NodeKind.ROOT)

        # Each header starts as its own empty column
        headers = [self._new_node(NodeKind.HEADER) for _ in range(COLUMN_COUNT)]

        # Thread headers into one circular list through the root
        ring = [self.ROOT] + headers
        for i, node in enumerate(ring):
            self.left[node] = ring[i - 1]
            self.right[node] = ring[(i + 1) % len(ring)]

    @classmethod
    def build(cls, board: Sequence[Sequence[int]]) -> 'ExactCoverMatrix':
        """
        Build the exact-cover matrix for a board.

        Empty cells get nine candidate rows (values 1-9), clues get a single
        row for their value. After all rows exist the clue rows are committed
        by covering their columns, which removes every candidate that
        conflicts with a clue.

        Args:
            board: 9x9 grid, 0 for empty cells

        Returns:
            Matrix ready for search

        Raises:
            InvalidBoardError: If the board is not 9x9 or has values outside 0-9
        """
        arr = validate_grid(board)
        matrix = cls()

        clue_rows: List[int] = []
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                value = int(arr[r, c])
                if value == EMPTY:
                    for candidate in DIGITS:
                        matrix._add_row(Placement(r, c, candidate))
                else:
                    clue_rows.append(matrix._add_row(Placement(r, c, value)))

        committed: List[int] = []
        for row_id in clue_rows:
            if matrix.commit_row(row_id):
                committed.append(row_id)
            else:
                matrix.consistent = False
                logger.debug(f"Clue {matrix.placements[row_id]} conflicts with an earlier clue")
        matrix.committed_rows = tuple(committed)

        logger.debug(
            f"Matrix built: {matrix.row_count} rows, {matrix.node_count} nodes, "
            f"{len(committed)} clues committed, "
            f"{sum(1 for _ in matrix.headers())} columns live"
        )
        return matrix

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _new_node(self, kind: NodeKind, column: int = -1, row_id: int = -1) -> int:
        """Append a self-linked node to the arena and return its index."""
        index = len(self.left)
        self.left.append(index)
        self.right.append(index)
        self.up.append(index)
        self.down.append(index)
        self.column.append(column)
        self.size.append(0)
        self.kind.append(kind)
        self.row_of.append(row_id)
        return index

    def _add_row(self, placement: Placement) -> int:
        """
        Add a candidate row of four linked nodes for a placement.

        Each node is appended at the bottom of its column.

        Returns:
            Candidate row id
        """
        row_id = len(self.placements)
        first = -1

        for col_number in constraint_columns(placement.row, placement.col, placement.value):
            header = self.header(col_number)
            node = self._new_node(NodeKind.CANDIDATE, header, row_id)

            # Vertical: insert above the header, i.e. at the column tail
            self.up[node] = self.up[header]
            self.down[node] = header
            self.down[self.up[header]] = node
            self.up[header] = node
            self.size[header] += 1

            # Horizontal: insert left of the first node, i.e. at the row tail
            if first < 0:
                first = node
            else:
                self.left[node] = self.left[first]
                self.right[node] = first
                self.right[self.left[first]] = node
                self.left[first] = node

        self.placements.append(placement)
        self._row_heads.append(first)
        return row_id

    def commit_row(self, row_id: int) -> bool:
        """
        Commit a candidate row by covering all four of its columns.

        Args:
            row_id: Candidate row id

        Returns:
            False (and nothing is covered) if one of the columns is
            already covered
        """
        head = self._row_heads[row_id]
        nodes = [head] + list(self.row_nodes(head))
        headers = [self.column[node] for node in nodes]

        if not all(self.is_live(header) for header in headers):
            return False

        for header in headers:
            self.cover(header)
        return True

    # ------------------------------------------------------------------
    # Dancing links
    # ------------------------------------------------------------------

    def cover(self, header: int) -> None:
        """
        Remove a column and every row that intersects it.

        The header is unlinked from the header list; for each row under it
        (top to bottom) every other node of the row (left to right) is
        unlinked from its column and that column's size decremented.
        Removed nodes keep their own links so uncover() can splice them back.
        """
        left, right, up, down = self.left, self.right, self.up, self.down
        column, size = self.column, self.size

        right[left[header]] = right[header]
        left[right[header]] = left[header]

        i = down[header]
        while i != header:
            j = right[i]
            while j != i:
                down[up[j]] = down[j]
                up[down[j]] = up[j]
                size[column[j]] -= 1
                j = right[j]
            i = down[i]

    def uncover(self, header: int) -> None:
        """
        Exact inverse of cover().

        Rows are restored bottom to top and nodes right to left, then the
        header is relinked into the header list.
        """
        left, right, up, down = self.left, self.right, self.up, self.down
        column, size = self.column, self.size

        i = up[header]
        while i != header:
            j = left[i]
            while j != i:
                size[column[j]] += 1
                down[up[j]] = j
                up[down[j]] = j
                j = left[j]
            i = up[i]

        right[left[header]] = header
        left[right[header]] = header

    def choose_column(self) -> Optional[int]:
        """
        Pick the live column with the fewest candidate rows.

        Ties go to the first column found scanning right from the root.

        Returns:
            Header index, or None if no column is live
        """
        best = None
        best_size = 0
        header = self.right[self.ROOT]
        while header != self.ROOT:
            if best is None or self.size[header] < best_size:
                best = header
                best_size = self.size[header]
                if best_size == 0:
                    break
            header = self.right[header]
        return best

    def is_empty(self) -> bool:
        """True once every constraint column has been covered."""
        return self.right[self.ROOT] == self.ROOT

    def is_live(self, header: int) -> bool:
        """True if the header is currently linked into the header list."""
        return self.right[self.left[header]] == header

    # ------------------------------------------------------------------
    # Traversal and lookup
    # ------------------------------------------------------------------

    def headers(self) -> Iterator[int]:
        """Iterate live headers left to right from the root."""
        header = self.right[self.ROOT]
        while header != self.ROOT:
            yield header
            header = self.right[header]

    def column_rows(self, header: int) -> Iterator[int]:
        """Iterate the candidate nodes of a column top to bottom."""
        node = self.down[header]
        while node != header:
            yield node
            node = self.down[node]

    def row_nodes(self, node: int) -> Iterator[int]:
        """Iterate the other nodes of a candidate row left to right."""
        other = self.right[node]
        while other != node:
            yield other
            other = self.right[other]

    def header(self, col_number: int) -> int:
        """Header index of constraint column number 0-323."""
        if not 0 <= col_number < COLUMN_COUNT:
            raise IndexError(f"Constraint column {col_number} out of range")
        return col_number + 1

    def column_of(self, node: int) -> int:
        """
        Header index owning a candidate node.

        Raises:
            ValueError: If node is the root or a header
        """
        if self.kind[node] is not NodeKind.CANDIDATE:
            raise ValueError(f"Node {node} is a {self.kind[node].name.lower()}, not a candidate")
        return self.column[node]

    def row_id(self, node: int) -> int:
        """Candidate row id of a candidate node."""
        self.column_of(node)
        return self.row_of[node]

    def placement_of(self, node: int) -> Placement:
        """Placement represented by a candidate node's row."""
        return self.placements[self.row_id(node)]

    def constraint_name(self, header: int) -> str:
        """Readable name of a header's constraint, e.g. 'row(0)=5'."""
        if self.kind[header] is not NodeKind.HEADER:
            raise ValueError(f"Node {header} is not a column header")
        group, rest = divmod(header - 1, CELL_COUNT)
        major, minor = divmod(rest, BOARD_SIZE)
        if group == 0:
            return f"cell({major},{minor})"
        return f"{_CONSTRAINT_NAMES[group]}({major})={minor + 1}"

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Copy of every link and size counter, for structural comparison."""
        return (
            tuple(self.left),
            tuple(self.right),
            tuple(self.up),
            tuple(self.down),
            tuple(self.size),
        )

    @property
    def header_count(self) -> int:
        """Number of constraint columns (live or covered)."""
        return COLUMN_COUNT

    @property
    def node_count(self) -> int:
        """Total nodes in the arena, root and headers included."""
        return len(self.left)

    @property
    def row_count(self) -> int:
        """Number of candidate rows."""
        return len(self.placements)
