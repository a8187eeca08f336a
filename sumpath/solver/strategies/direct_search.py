"""
Direct Search Oracle - Bounded depth-first search over grid cells.
"""

from typing import List, Sequence

from ..base import MoveOracle
from ..context import SearchBudget
from ..factory import register_oracle
from ..grid import Grid, neighbor_table


@register_oracle
class DirectSearchOracle(MoveOracle):
    """
    Depth-first search from every numbered cell.

    Blanks are walked through freely; numbers add to the running sum and
    count. A branch is pruned as soon as the sum overshoots the target,
    since values are positive and can never bring it back down.

    Suited to small boards, where walking blank corridors cell by cell
    stays cheap.
    """
    name = "dfs"
    description = "Direct DFS over cells (small boards)"
    max_steps = 100_000
    timeout_sec = 1.0

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Scratch buffer, reallocated at the start of every query
        self._visited: List[bool] = []

    def _search(self, grid: Grid, budget: SearchBudget) -> bool:
        values = grid.to_flat()
        neighbors = neighbor_table(grid.size)
        self._visited = [False] * len(values)

        for start, value in enumerate(values):
            if value <= 0 or value > self.target_sum:
                continue
            if self._dfs(start, value, 1, values, neighbors, budget):
                return True
            if budget.exhausted:
                return False

        return False

    def _dfs(self, index: int, total: int, count: int,
             values: Sequence[int], neighbors: Sequence[Sequence[int]],
             budget: SearchBudget) -> bool:
        if not budget.tick():
            return False

        if total == self.target_sum and count >= 2:
            return True
        if total >= self.target_sum:
            return False

        visited = self._visited
        visited[index] = True
        found = False

        for nxt in neighbors[index]:
            if visited[nxt]:
                continue

            value = values[nxt]
            if value <= 0:
                found = self._dfs(nxt, total, count, values, neighbors, budget)
            else:
                next_total = total + value
                if next_total > self.target_sum:
                    continue
                found = self._dfs(nxt, next_total, count + 1, values, neighbors, budget)

            if found or budget.exhausted:
                break

        visited[index] = False
        return found
