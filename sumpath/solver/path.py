"""
Path Module - An ordered chain of cells drawn across the board.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .grid import Coordinate, Grid, TARGET_SUM, is_adjacent


@dataclass(frozen=True)
class CellPath:
    """
    Ordered sequence of distinct, 4-adjacent cells.

    Blank cells may appear in the chain; only numbered cells contribute
    to ``total`` and ``number_count``.

    Attributes:
        cells: Coordinates in drawing order (blanks included)
        numbers: Coordinates of the numbered cells, in drawing order
        total: Sum of the numbered cells
    """
    cells: Tuple[Coordinate, ...]
    numbers: Tuple[Coordinate, ...]
    total: int

    @classmethod
    def create(cls, cells: Iterable[Coordinate], grid: Grid) -> 'CellPath':
        """
        Build a path, reading cell values from ``grid``.

        Args:
            cells: Coordinates in drawing order
            grid: Board the path was drawn on

        Returns:
            CellPath instance
        """
        cells = tuple(cells)
        numbers = tuple(c for c in cells if grid.is_number(*c))
        total = sum(grid.value(*c) for c in numbers)
        return cls(cells=cells, numbers=numbers, total=total)

    @property
    def length(self) -> int:
        """Number of cells in the chain, blanks included."""
        return len(self.cells)

    @property
    def number_count(self) -> int:
        return len(self.numbers)

    def is_clearable(self, target: int = TARGET_SUM) -> bool:
        """True when at least two numbers sum exactly to ``target``."""
        return is_clearable(self.total, self.number_count, target)

    def is_connected(self) -> bool:
        """True when consecutive cells are 4-adjacent and no cell repeats."""
        if len(set(self.cells)) != len(self.cells):
            return False
        return all(is_adjacent(a, b) for a, b in zip(self.cells, self.cells[1:]))

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)


def is_clearable(total: int, number_count: int, target: int = TARGET_SUM) -> bool:
    """Shared clear rule for drawn paths and searched paths."""
    return number_count >= 2 and total == target
