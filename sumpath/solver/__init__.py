"""
Solver Package - Board model and path searches for the Sum to 10 puzzle.

Public API:
    - Grid: Mutable n x n board (BLANK or 1..K per cell)
    - CellState: Read-only view of one cell
    - CellPath: Ordered chain of 4-adjacent cells
    - SearchBudget: Step/time bound shared by every search
    - MoveOracle: Abstract base for move-existence strategies
    - create_oracle() / create_oracle_for_size(): Factory functions
    - HintEngine: Shortest clearable path
    - find_clearing_paths() / max_disjoint_paths(): Move counting

Usage:
    from sumpath.solver import Grid, HintEngine, create_oracle_for_size

    grid = Grid.from_rows([[4, -1], [-1, 6]])
    oracle = create_oracle_for_size(grid.size, threshold=6)
    if oracle.has_any_move(grid):
        hint = HintEngine().shortest_move(grid)
        print(hint.cells)
"""

# Core data structures
from .grid import (
    BLANK,
    DIRECTIONS,
    MAX_SIZE,
    MAX_VALUE,
    MIN_SIZE,
    TARGET_SUM,
    CellState,
    Coordinate,
    Grid,
    bridge_candidates,
    center_hole,
    is_adjacent,
    is_diagonal,
    neighbor_table,
)
from .path import CellPath, is_clearable
from .context import SearchBudget

# Oracle framework
from .base import MoveOracle
from .factory import (
    AUTO,
    create_oracle,
    create_oracle_for_size,
    get_oracle_info,
    get_oracle_names,
    register_oracle,
)

# Import strategies to register them
from . import strategies
from .strategies import DirectSearchOracle, NumberGraph, NumberGraphOracle, NumberNode

from .hint import HintEngine
from .enumeration import find_clearing_paths, greedy_disjoint_paths, max_disjoint_paths

__all__ = [
    # Data structures
    "BLANK",
    "DIRECTIONS",
    "MAX_SIZE",
    "MAX_VALUE",
    "MIN_SIZE",
    "TARGET_SUM",
    "CellState",
    "Coordinate",
    "Grid",
    "CellPath",
    "SearchBudget",
    "bridge_candidates",
    "center_hole",
    "is_adjacent",
    "is_clearable",
    "is_diagonal",
    "neighbor_table",
    # Oracle framework
    "AUTO",
    "MoveOracle",
    "DirectSearchOracle",
    "NumberGraph",
    "NumberGraphOracle",
    "NumberNode",
    "create_oracle",
    "create_oracle_for_size",
    "get_oracle_info",
    "get_oracle_names",
    "register_oracle",
    # Hints and counting
    "HintEngine",
    "find_clearing_paths",
    "greedy_disjoint_paths",
    "max_disjoint_paths",
]
