"""
Tests for the board model: Grid, adjacency helpers and CellPath.

Usage:
    pytest tests/test_grid.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sumpath.solver import (
    BLANK,
    CellPath,
    Grid,
    bridge_candidates,
    center_hole,
    is_adjacent,
    is_diagonal,
    neighbor_table,
)


def test_grid_reads_rows_as_y_then_x():
    grid = Grid.from_rows([
        [1, 2, -1],
        [3, 4, 5],
        [6, None, 0],
    ])

    assert grid.size == 3
    assert grid.value(1, 0) == 2
    assert grid.value(0, 1) == 3
    assert grid.value(1, 2) == BLANK
    assert grid.value(2, 2) == BLANK
    assert grid.cell(0, 0).value == 1
    assert grid.cell(2, 0).is_blank
    assert grid.count_numbers() == 6
    assert grid.to_list()[1] == [3, 4, 5]


def test_out_of_range_is_blank_not_error():
    grid = Grid.from_rows([[1, 2], [3, 4]])

    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(-1, 1)
    assert grid.value(5, 5) == BLANK
    assert grid.cell(-1, 0).is_blank
    assert not grid.is_number(2, 2)


def test_non_square_grid_rejected():
    with pytest.raises(ValueError):
        Grid.from_rows([[1, 2, 3], [4, 5, 6]])


def test_center_hole_only_on_odd_sizes():
    assert center_hole(3) == (1, 1)
    assert center_hole(5) == (2, 2)
    assert center_hole(4) is None

    grid = Grid.blank(5)
    assert grid.hole == (2, 2)
    assert grid.is_empty
    assert Grid.blank(4).hole is None


def test_clear_cells_skips_blanks_and_bumps_revision():
    grid = Grid.from_rows([[3, -1], [7, 2]])
    revision = grid.revision

    cleared = grid.clear_cells([(0, 0), (1, 0), (0, 1)])

    assert cleared == [(0, 0), (0, 1)]
    assert grid.value(0, 0) == BLANK
    assert grid.value(0, 1) == BLANK
    assert grid.value(1, 1) == 2
    assert grid.revision == revision + 1

    assert grid.clear_cells([(1, 0)]) == []
    assert grid.revision == revision + 1


def test_copy_is_independent():
    grid = Grid.from_rows([[3, 7], [1, 2]])
    clone = grid.copy()
    clone.set_value(0, 0, 9)

    assert grid.value(0, 0) == 3
    assert clone != grid
    assert grid == Grid.from_rows([[3, 7], [1, 2]])


def test_number_cells_row_major():
    grid = Grid.from_rows([[-1, 5], [6, -1]])
    assert grid.number_cells() == [(1, 0), (0, 1)]
    assert grid.to_flat() == [-1, 5, 6, -1]


def test_adjacency():
    assert is_adjacent((0, 0), (1, 0))
    assert is_adjacent((2, 3), (2, 2))
    assert not is_adjacent((0, 0), (1, 1))
    assert not is_adjacent((0, 0), (0, 0))
    assert not is_adjacent((0, 0), (2, 0))

    assert is_diagonal((1, 1), (0, 0))
    assert is_diagonal((1, 1), (2, 0))
    assert not is_diagonal((0, 0), (0, 1))


def test_bridge_candidates():
    grid = Grid.from_rows([
        [4, -1],
        [-1, 6],
    ])

    assert bridge_candidates(grid, (0, 0), (1, 1)) == [(0, 1), (1, 0)]
    assert bridge_candidates(grid, (0, 0), (1, 1), exclude=[(0, 1)]) == [(1, 0)]
    # Not diagonal
    assert bridge_candidates(grid, (0, 0), (1, 0)) == []

    numbered = Grid.from_rows([
        [4, -1],
        [2, 6],
    ])
    assert bridge_candidates(numbered, (0, 0), (1, 1)) == [(1, 0)]


def test_neighbor_table_direction_order():
    table = neighbor_table(2)
    # (0,0): +x -> (1,0)=1, +y -> (0,1)=2
    assert table[0] == (1, 2)
    # (1,1): -x -> (0,1)=2, -y -> (1,0)=1
    assert table[3] == (2, 1)


def test_cell_path_totals():
    grid = Grid.from_rows([
        [4, -1],
        [-1, 6],
    ])
    path = CellPath.create([(0, 0), (1, 0), (1, 1)], grid)

    assert path.length == 3
    assert path.numbers == ((0, 0), (1, 1))
    assert path.total == 10
    assert path.number_count == 2
    assert path.is_clearable()
    assert path.is_connected()

    broken = CellPath.create([(0, 0), (1, 1)], grid)
    assert not broken.is_connected()

    single = CellPath.create([(0, 0)], grid)
    assert not single.is_clearable(target=4)
