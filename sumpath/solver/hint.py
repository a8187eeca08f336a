"""
Hint Engine Module - Shortest clearing path for idle-time hints.
"""

import logging
from collections import deque
from typing import Optional

from .context import SearchBudget
from .grid import Grid, TARGET_SUM, neighbor_table
from .path import CellPath

logger = logging.getLogger(__name__)


class HintEngine:
    """
    Breadth-first search for the shortest clearable path (by cell count).

    States are (cell, sum, count, visited mask, path), seeded with one state
    per numbered cell in row-major order and expanded in the fixed direction
    order +x, -x, +y, -y. Blanks pass through with sum and count unchanged.
    The queue is ordered by path length, so the first path reaching the
    target at a given length wins and nothing longer is expanded.

    On budget exhaustion the best path found so far (possibly None) is
    returned.

    Attributes:
        target_sum: Sum a path must reach
        max_steps: Default step bound per query
        timeout_sec: Default time bound per query
    """
    max_steps: int = 10_000
    timeout_sec: float = 1.0

    def __init__(self, target_sum: int = TARGET_SUM,
                 max_steps: Optional[int] = None,
                 timeout_sec: Optional[float] = None):
        self.target_sum = target_sum
        if max_steps is not None:
            self.max_steps = max_steps
        if timeout_sec is not None:
            self.timeout_sec = timeout_sec

    def new_budget(self) -> SearchBudget:
        return SearchBudget(max_steps=self.max_steps, timeout_sec=self.timeout_sec)

    def shortest_move(self, grid: Grid,
                      budget: Optional[SearchBudget] = None) -> Optional[CellPath]:
        """
        Find the shortest clearable path.

        Args:
            grid: Board to search (not modified)
            budget: Optional budget; a fresh one is used otherwise

        Returns:
            Shortest path found, or None if there is none (or none was
            found before the budget ran out)
        """
        if grid.is_empty:
            return None

        if budget is None:
            budget = self.new_budget()

        size = grid.size
        values = grid.to_flat()
        neighbors = neighbor_table(size)
        target = self.target_sum

        queue = deque()
        for index, value in enumerate(values):
            if value <= 0 or value > target:
                continue
            queue.append((index, value, 1, 1 << index, (index,)))

        best = None
        best_len = len(values) + 1

        while queue:
            if not budget.tick():
                logger.debug(
                    f"Hint search budget exhausted after {budget.steps} steps, "
                    f"best length so far: {len(best) if best else None}"
                )
                break

            index, total, count, mask, path = queue.popleft()

            # Children would be at least best_len long
            if len(path) + 1 >= best_len:
                break

            for nxt in neighbors[index]:
                bit = 1 << nxt
                if mask & bit:
                    continue

                value = values[nxt]
                new_path = path + (nxt,)

                if value <= 0:
                    queue.append((nxt, total, count, mask | bit, new_path))
                    continue

                next_total = total + value
                if next_total == target and count + 1 >= 2:
                    if len(new_path) < best_len:
                        best_len = len(new_path)
                        best = new_path
                elif next_total < target:
                    queue.append((nxt, next_total, count + 1, mask | bit, new_path))

        if best is None:
            return None

        return CellPath.create(((i % size, i // size) for i in best), grid)
