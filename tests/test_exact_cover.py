"""
Tests for the Dancing Links exact-cover matrix.

Covers:
1. Matrix construction (headers, candidate rows, clue commitment)
2. Column size bookkeeping
3. cover()/uncover() as exact inverses
4. Column choice and node lookups

Usage:
    pytest tests/test_exact_cover.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sudoku_solver.solver import ExactCoverMatrix, InvalidBoardError, NodeKind
from sudoku_solver.solver.exact_cover import COLUMN_COUNT, constraint_columns


PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

EMPTY_BOARD = [[0] * 9 for _ in range(9)]


def assert_sizes_match_links(matrix):
    """Every live column's size equals the nodes actually linked under it."""
    for header in matrix.headers():
        assert matrix.size[header] == len(list(matrix.column_rows(header))), \
            matrix.constraint_name(header)


def solution_row(matrix, column):
    """Node under column whose placement agrees with SOLUTION."""
    for node in matrix.column_rows(column):
        p = matrix.placement_of(node)
        if SOLUTION[p.row][p.col] == p.value:
            return node
    raise AssertionError(f"No solution row under {matrix.constraint_name(column)}")


def test_constraint_columns():
    assert constraint_columns(0, 0, 1) == (0, 81, 162, 243)
    assert constraint_columns(8, 8, 9) == (80, 161, 242, 323)
    # (4, 7) is in block 5
    assert constraint_columns(4, 7, 3) == (43, 81 + 38, 162 + 65, 243 + 47)


def test_empty_board_matrix_shape():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)

    assert matrix.header_count == COLUMN_COUNT
    assert matrix.row_count == 729
    assert matrix.node_count == 1 + 324 + 729 * 4
    assert matrix.committed_rows == ()
    assert matrix.consistent

    headers = list(matrix.headers())
    assert headers == list(range(1, 325))
    assert all(matrix.size[h] == 9 for h in headers)
    assert_sizes_match_links(matrix)


def test_header_ring_is_circular_both_ways():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)
    root = ExactCoverMatrix.ROOT

    assert matrix.right[root] == 1
    assert matrix.left[root] == 324
    for h in range(1, 325):
        assert matrix.left[matrix.right[h]] == h
        assert matrix.right[matrix.left[h]] == h


def test_candidate_rows_link_four_columns():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)

    header = matrix.header(0)  # cell(0,0)
    nodes = list(matrix.column_rows(header))
    assert [matrix.placement_of(n).value for n in nodes] == list(range(1, 10))

    for node in nodes:
        placement = matrix.placement_of(node)
        row = [node] + list(matrix.row_nodes(node))
        assert len(row) == 4
        assert [matrix.column_of(n) - 1 for n in row] == list(
            constraint_columns(placement.row, placement.col, placement.value)
        )
        assert {matrix.row_id(n) for n in row} == {matrix.row_id(node)}


def test_clues_are_committed_at_build():
    matrix = ExactCoverMatrix.build(PUZZLE)

    assert matrix.consistent
    assert len(matrix.committed_rows) == 30
    assert matrix.row_count == 30 + 51 * 9

    # 30 clues each remove four constraints
    live = list(matrix.headers())
    assert len(live) == 324 - 30 * 4
    assert not matrix.is_live(matrix.header(0))  # cell(0,0) holds a clue
    assert matrix.is_live(matrix.header(2))      # cell(0,2) is empty
    assert_sizes_match_links(matrix)


def test_clue_conflicts_remove_candidates():
    matrix = ExactCoverMatrix.build(PUZZLE)

    # Row 0 holds 5, 3, 7; column 2 holds 8; block 0 holds 6, 9
    cell_0_2 = matrix.header(2)
    values = sorted(matrix.placement_of(n).value for n in matrix.column_rows(cell_0_2))
    assert values == [1, 2, 4]
    assert matrix.size[cell_0_2] == 3


def test_conflicting_clues_mark_matrix_inconsistent():
    board = [row[:] for row in EMPTY_BOARD]
    board[0][0] = 5
    board[0][4] = 5

    matrix = ExactCoverMatrix.build(board)
    assert not matrix.consistent
    assert len(matrix.committed_rows) == 1
    assert_sizes_match_links(matrix)


def test_build_rejects_invalid_boards():
    with pytest.raises(InvalidBoardError):
        ExactCoverMatrix.build([[0] * 9] * 8)
    with pytest.raises(InvalidBoardError):
        ExactCoverMatrix.build([[0] * 8 + [12]] * 9)


@pytest.mark.parametrize("board", [EMPTY_BOARD, PUZZLE])
def test_cover_uncover_restores_every_column(board):
    matrix = ExactCoverMatrix.build(board)
    before = matrix.snapshot()

    for header in list(matrix.headers()):
        matrix.cover(header)
        assert not matrix.is_live(header)
        matrix.uncover(header)
        assert matrix.snapshot() == before, matrix.constraint_name(header)


def test_cover_uncover_restores_nested_state():
    matrix = ExactCoverMatrix.build(PUZZLE)
    original = matrix.snapshot()

    # Descend two levels the way the search does
    stack = []
    for _ in range(2):
        column = matrix.choose_column()
        matrix.cover(column)
        node = solution_row(matrix, column)
        others = list(matrix.row_nodes(node))
        for other in others:
            matrix.cover(matrix.column_of(other))
        stack.append((column, others))
        assert_sizes_match_links(matrix)

    deep = matrix.snapshot()
    for header in list(matrix.headers()):
        matrix.cover(header)
        matrix.uncover(header)
        assert matrix.snapshot() == deep

    for column, others in reversed(stack):
        for other in reversed(others):
            matrix.uncover(matrix.column_of(other))
        matrix.uncover(column)

    assert matrix.snapshot() == original


def test_cover_updates_sizes():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)
    cell_0_0 = matrix.header(0)
    row_0_1 = matrix.header(81)   # row 0 contains 1
    col_0_1 = matrix.header(162)  # column 0 contains 1

    matrix.cover(cell_0_0)

    # The nine candidates of (0,0) left their row/col/block columns
    assert matrix.size[row_0_1] == 8
    assert matrix.size[col_0_1] == 8
    assert matrix.size[cell_0_0] == 9
    assert cell_0_0 not in list(matrix.headers())
    assert_sizes_match_links(matrix)


def test_choose_column_prefers_smallest_then_leftmost():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)

    # All columns tie at 9: the first one wins
    assert matrix.choose_column() == matrix.header(0)

    # Covering cell(0,0) shrinks row/col/block "contains v" columns to 8
    matrix.cover(matrix.header(0))
    assert matrix.choose_column() == matrix.header(81)

    puzzle = ExactCoverMatrix.build(PUZZLE)
    chosen = puzzle.choose_column()
    assert puzzle.size[chosen] == min(puzzle.size[h] for h in puzzle.headers())


def test_choose_column_on_empty_header_list():
    matrix = ExactCoverMatrix.build(SOLUTION)
    assert matrix.is_empty()
    assert matrix.choose_column() is None
    assert len(matrix.committed_rows) == 81


def test_node_kinds_and_lookups():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)
    root = ExactCoverMatrix.ROOT

    assert matrix.kind[root] is NodeKind.ROOT
    assert matrix.kind[1] is NodeKind.HEADER
    assert matrix.kind[325] is NodeKind.CANDIDATE

    with pytest.raises(ValueError):
        matrix.column_of(root)
    with pytest.raises(ValueError):
        matrix.column_of(1)
    with pytest.raises(ValueError):
        matrix.row_id(10)
    with pytest.raises(IndexError):
        matrix.header(324)


def test_constraint_names():
    matrix = ExactCoverMatrix.build(EMPTY_BOARD)

    assert matrix.constraint_name(matrix.header(0)) == "cell(0,0)"
    assert matrix.constraint_name(matrix.header(80)) == "cell(8,8)"
    assert matrix.constraint_name(matrix.header(81)) == "row(0)=1"
    assert matrix.constraint_name(matrix.header(162 + 13)) == "col(1)=5"
    assert matrix.constraint_name(matrix.header(323)) == "block(8)=9"

    with pytest.raises(ValueError):
        matrix.constraint_name(ExactCoverMatrix.ROOT)
