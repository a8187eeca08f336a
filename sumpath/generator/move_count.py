"""
Move Count Module - Size-dependent gates on independent clearing paths.

Small boards are measured exactly: every clearing path is listed and the
largest set of mutually disjoint ones is counted. On large boards exact
counting is too costly, so paths are planted directly instead.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Set

import numpy as np

from ..solver import (
    DIRECTIONS,
    CellPath,
    Coordinate,
    Grid,
    SearchBudget,
    find_clearing_paths,
    greedy_disjoint_paths,
    max_disjoint_paths,
)
from .easy_pairs import collect_easy_pairs
from .params import GenerationParams, required_path_count

logger = logging.getLogger(__name__)


@dataclass
class GateResult:
    """
    Outcome of a move-count gate.

    Attributes:
        move_count: Independent clearing paths on the board
        required: Count needed for this board size
        planted: Paths written by the planting gate
    """
    move_count: int
    required: int
    planted: int = 0

    @property
    def satisfied(self) -> bool:
        return self.move_count >= self.required


class MoveCountGate(ABC):
    """
    Abstract base for the two move-count strategies.

    Attributes:
        name: Short identifier for the gate
    """
    name: str = "base"

    def __init__(self, params: GenerationParams):
        self.params = params

    def _clearing_paths(self, grid: Grid) -> List[CellPath]:
        budget = SearchBudget(
            max_steps=self.params.enumeration_max_steps,
            timeout_sec=self.params.enumeration_timeout_sec,
        )
        return find_clearing_paths(grid, budget, self.params.target_sum)

    @abstractmethod
    def apply(self, grid: Grid, rng: np.random.Generator) -> GateResult:
        """
        Measure (and possibly modify) the board.

        Args:
            grid: Board to evaluate; the planting gate writes to it
            rng: Random source

        Returns:
            GateResult for this board
        """
        pass


class ExactCountGate(MoveCountGate):
    """Count the maximum set of disjoint clearing paths (small boards)."""
    name = "exact"

    def apply(self, grid: Grid, rng: np.random.Generator) -> GateResult:
        required = required_path_count(grid.size, self.params.min_path_tiers)
        paths = self._clearing_paths(grid)
        budget = SearchBudget(max_steps=self.params.disjoint_max_steps, timeout_sec=None)
        chosen = max_disjoint_paths(paths, budget)
        logger.debug(
            f"Exact count: {len(paths)} paths, {len(chosen)} disjoint (need {required})"
        )
        return GateResult(move_count=len(chosen), required=required)


class PlantingGate(MoveCountGate):
    """Top up independent paths by writing new ones (large boards)."""
    name = "planting"

    def apply(self, grid: Grid, rng: np.random.Generator) -> GateResult:
        required = required_path_count(grid.size, self.params.min_path_tiers)
        independent = greedy_disjoint_paths(self._clearing_paths(grid))

        planted = 0
        if len(independent) < required:
            used: Set[Coordinate] = set()
            for path in independent:
                used.update(path.cells)
            planted = plant_paths(grid, required - len(independent), used, rng, self.params)

        logger.debug(
            f"Planting: {len(independent)} found, {planted} planted (need {required})"
        )
        return GateResult(move_count=len(independent) + planted,
                          required=required, planted=planted)


def select_gate(size: int, params: GenerationParams) -> MoveCountGate:
    """
    Pick the gate for a board size.

    Args:
        size: Board side n
        params: Generation parameters (``planting_threshold`` decides)

    Returns:
        PlantingGate at or above the threshold, ExactCountGate below it
    """
    if size >= params.planting_threshold:
        return PlantingGate(params)
    return ExactCountGate(params)


def decompose_sum(target: int, count: int, max_value: int,
                  rng: np.random.Generator) -> Optional[List[int]]:
    """
    Split ``target`` into ``count`` positive parts, each at most ``max_value``.

    Starts from all ones and hands out the remainder one unit at a time to
    random parts (spilling to the first part with room when a pick is full),
    then shuffles.

    Args:
        target: Sum to split
        count: Number of parts
        max_value: Per-part ceiling
        rng: Random source

    Returns:
        List of parts, or None when no split exists
    """
    if count < 2 or count > target or target > count * max_value:
        return None

    parts = [1] * count
    for _ in range(target - count):
        idx = int(rng.integers(count))
        if parts[idx] < max_value:
            parts[idx] += 1
            continue
        for j in range(count):
            if parts[j] < max_value:
                parts[j] += 1
                break

    rng.shuffle(parts)
    return parts


def plant_path(grid: Grid, used: Set[Coordinate], rng: np.random.Generator,
               params: GenerationParams,
               allow_easy_pair: bool = True) -> Optional[List[Coordinate]]:
    """
    Write one clearing path on cells outside ``used``.

    Picks a random free start, a length from ``plant_length_range``, splits
    the target into that many values and lays them along a self-avoiding
    random walk. A value split that would form an easy pair with a
    numbered cell next to the walk is redrawn. Nothing is written when the
    walk gets stuck or no split fits.

    Args:
        grid: Board to modify
        used: Cells reserved by other paths; extended on success
        rng: Random source
        params: Generation parameters
        allow_easy_pair: Permit a two-cell path (always an easy pair)

    Returns:
        Planted coordinates in walk order, or None
    """
    size = grid.size
    target = params.target_sum

    def free(cell: Coordinate) -> bool:
        return grid.in_bounds(*cell) and cell != grid.hole and cell not in used

    available = [(x, y) for y in range(size) for x in range(size) if free((x, y))]
    if len(available) < 2:
        return None

    start = available[int(rng.integers(len(available)))]
    low, high = params.plant_length_range
    length = int(rng.integers(low, high + 1))
    if length == 2 and not allow_easy_pair:
        if high < 3:
            return None
        length = 3

    path = [start]
    while len(path) < length:
        x, y = path[-1]
        candidates = [
            (x + dx, y + dy) for dx, dy in DIRECTIONS
            if free((x + dx, y + dy)) and (x + dx, y + dy) not in path
        ]
        if not candidates:
            return None
        path.append(candidates[int(rng.integers(len(candidates)))])

    # Numbered cells bordering the walk, per walk position
    outside = []
    for x, y in path:
        neighbours = []
        for dx, dy in DIRECTIONS:
            cell = (x + dx, y + dy)
            if cell not in path and grid.is_number(*cell):
                neighbours.append(grid.value(*cell))
        outside.append(neighbours)

    for _ in range(params.plant_value_retries):
        values = decompose_sum(target, length, params.max_value, rng)
        if values is None:
            return None
        if all(value + n != target
               for value, neighbours in zip(values, outside) for n in neighbours):
            break
    else:
        return None

    for (x, y), value in zip(path, values):
        grid.set_value(x, y, value)
    used.update(path)
    return path


def plant_paths(grid: Grid, count: int, used: Set[Coordinate],
                rng: np.random.Generator, params: GenerationParams) -> int:
    """
    Plant up to ``count`` disjoint paths.

    Two-cell paths are only planted while the board stays within
    ``max_easy_pairs``.

    Args:
        grid: Board to modify
        count: Paths wanted
        used: Reserved cells; extended with every planted path
        rng: Random source
        params: Generation parameters

    Returns:
        Number of paths actually planted
    """
    planted = 0
    max_attempts = count * params.plant_attempts_per_path

    allowance = None
    if params.max_easy_pairs >= 0:
        allowance = params.max_easy_pairs - len(collect_easy_pairs(grid, params.target_sum))

    for _ in range(max_attempts):
        if planted >= count:
            break
        allow = allowance is None or allowance > 0
        path = plant_path(grid, used, rng, params, allow_easy_pair=allow)
        if path is None:
            continue
        planted += 1
        if allowance is not None and len(path) == 2:
            allowance -= 1

    if planted < count:
        logger.debug(f"Planted {planted}/{count} paths in {max_attempts} attempts")
    return planted
