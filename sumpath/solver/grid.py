"""
Grid Module - Mutable n x n board for the Sum to 10 path puzzle.

Cells hold BLANK (-1) or a number in 1..K. Coordinates are (x, y) pairs;
the backing array is indexed [y, x] so that ``to_list()`` reads row by row.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np


BLANK = -1
TARGET_SUM = 10
MAX_VALUE = 9
MIN_SIZE = 2
MAX_SIZE = 10

# Fixed expansion order: +x, -x, +y, -y
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class CellState:
    """
    Read-only view of a single cell.

    Attributes:
        value: Cell number (1..K) or None for a blank cell
    """
    value: Optional[int] = None

    @property
    def is_blank(self) -> bool:
        return self.value is None

    @property
    def is_number(self) -> bool:
        return self.value is not None


class Grid:
    """
    Square board of blank and numbered cells.

    The grid is mutated only by generation (full rewrite) and by clearing
    cells after a successful path. Every mutation bumps ``revision`` so that
    cached search results can be checked against the content they were
    computed from.

    Attributes:
        size: Board side n
        hole: Permanent blank center cell for odd n, or None
        revision: Mutation counter
    """

    def __init__(self, values: np.ndarray, hole: Optional[Coordinate] = None):
        values = np.asarray(values, dtype=np.int8)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"Grid must be square, got shape {values.shape}")
        if not 1 <= values.shape[0] <= MAX_SIZE:
            raise ValueError(f"Grid size must be 1..{MAX_SIZE}, got {values.shape[0]}")

        self._values = values.copy()
        self._values[self._values <= 0] = BLANK
        self.hole = hole
        self.revision = 0

    @classmethod
    def blank(cls, size: int, with_hole: bool = True) -> 'Grid':
        """Create an all-blank grid, reserving the center hole for odd sizes."""
        hole = center_hole(size) if with_hole else None
        return cls(np.full((size, size), BLANK, dtype=np.int8), hole=hole)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[int]]],
                  hole: Optional[Coordinate] = None) -> 'Grid':
        """
        Create a grid from a list of rows.

        Args:
            rows: rows[y][x] values; None, 0 and negatives are blank
            hole: Optional permanent hole coordinate

        Returns:
            Grid instance
        """
        data = [[BLANK if v is None else int(v) for v in row] for row in rows]
        return cls(np.array(data, dtype=np.int8), hole=hole)

    @property
    def size(self) -> int:
        return int(self._values.shape[0])

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the backing array, indexed [y, x]."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def value(self, x: int, y: int) -> int:
        """Cell value, or BLANK for blank and out-of-range cells."""
        if not self.in_bounds(x, y):
            return BLANK
        return int(self._values[y, x])

    def cell(self, x: int, y: int) -> CellState:
        v = self.value(x, y)
        return CellState(v if v > 0 else None)

    def is_number(self, x: int, y: int) -> bool:
        return self.value(x, y) > 0

    def is_blank(self, x: int, y: int) -> bool:
        return self.value(x, y) <= 0

    def set_value(self, x: int, y: int, value: int) -> None:
        self._values[y, x] = value if value > 0 else BLANK
        self.revision += 1

    def fill(self, values: np.ndarray) -> None:
        """Rewrite every cell at once (generation only)."""
        values = np.asarray(values, dtype=np.int8)
        if values.shape != self._values.shape:
            raise ValueError(f"Expected shape {self._values.shape}, got {values.shape}")
        self._values[...] = values
        self._values[self._values <= 0] = BLANK
        self.revision += 1

    def clear_cells(self, cells: Iterable[Coordinate]) -> List[Coordinate]:
        """
        Set numbered cells to blank.

        Args:
            cells: Coordinates to clear; blanks are skipped

        Returns:
            Coordinates that actually held a number, in input order
        """
        cleared = []
        for x, y in cells:
            if self.is_number(x, y):
                self._values[y, x] = BLANK
                cleared.append((x, y))
        if cleared:
            self.revision += 1
        return cleared

    def count_numbers(self) -> int:
        return int(np.count_nonzero(self._values > 0))

    @property
    def is_empty(self) -> bool:
        """True when no numbered cell remains."""
        return self.count_numbers() == 0

    def number_cells(self) -> List[Coordinate]:
        """Numbered coordinates in row-major (y, then x) order."""
        ys, xs = np.nonzero(self._values > 0)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def to_flat(self) -> List[int]:
        """Row-major snapshot (index = y * n + x) used by the search routines."""
        return [int(v) for v in self._values.ravel()]

    def to_list(self) -> List[List[int]]:
        return self._values.tolist()

    def copy(self) -> 'Grid':
        clone = Grid(self._values, hole=self.hole)
        clone.revision = self.revision
        return clone

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return False
        return np.array_equal(self._values, other._values)

    def __hash__(self):
        return hash(self._values.tobytes())

    def __repr__(self):
        return f"Grid(size={self.size}, numbers={self.count_numbers()}, revision={self.revision})"

    def __str__(self):
        lines = []
        for row in self._values:
            lines.append(" ".join("." if v <= 0 else str(int(v)) for v in row))
        return "\n".join(lines)


def center_hole(size: int) -> Optional[Coordinate]:
    """Permanent blank center cell for odd board sizes."""
    if size % 2 == 1:
        c = size // 2
        return (c, c)
    return None


def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """4-neighbour test (Manhattan distance 1)."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def is_diagonal(a: Coordinate, b: Coordinate) -> bool:
    return abs(a[0] - b[0]) == 1 and abs(a[1] - b[1]) == 1


def bridge_candidates(grid: Grid, tail: Coordinate, target: Coordinate,
                      exclude: Iterable[Coordinate] = ()) -> List[Coordinate]:
    """
    Blank cells that can join two diagonally adjacent cells.

    The two orthogonal corners between ``tail`` and ``target`` are checked;
    a corner qualifies when it is in bounds, blank, and not in ``exclude``.

    Args:
        grid: Board to inspect
        tail: Current path tail
        target: Diagonal neighbour of the tail
        exclude: Cells already used by the path

    Returns:
        Zero, one or two bridge coordinates
    """
    if not is_diagonal(tail, target):
        return []

    excluded = set(exclude)
    candidates = []
    for bx, by in ((tail[0], target[1]), (target[0], tail[1])):
        if not grid.in_bounds(bx, by):
            continue
        if grid.is_blank(bx, by) and (bx, by) not in excluded:
            candidates.append((bx, by))
    return candidates


@lru_cache(maxsize=None)
def neighbor_table(size: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Flat-index neighbour lists for an n x n board, in DIRECTIONS order.

    Args:
        size: Board side

    Returns:
        table[i] holds the flat indices of the in-bounds neighbours of i
    """
    table = []
    for y in range(size):
        for x in range(size):
            neighbours = []
            for dx, dy in DIRECTIONS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < size and 0 <= ny < size:
                    neighbours.append(ny * size + nx)
            table.append(tuple(neighbours))
    return tuple(table)
