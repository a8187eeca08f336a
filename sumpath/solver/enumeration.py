"""
Path Enumeration Module - All clearing paths and disjoint subsets.

Used by board generation to measure how many independent moves a board
offers. Two paths are independent when they share no numbered cell:
clearing one leaves the other intact (blank cells stay blank).
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Sequence

from .context import SearchBudget
from .grid import Coordinate, Grid, TARGET_SUM, neighbor_table
from .path import CellPath

logger = logging.getLogger(__name__)


def find_clearing_paths(grid: Grid, budget: SearchBudget,
                        target: int = TARGET_SUM) -> List[CellPath]:
    """
    Enumerate clearing paths, one per distinct set of numbered cells.

    Depth-first search from every numbered cell; a branch stops as soon as
    it reaches the target (extending it could only add blanks) or
    overshoots. For each set of numbered cells the shortest chain seen is
    kept. Enumeration stops early when the budget runs out.

    Args:
        grid: Board to search (not modified)
        budget: Step/time bound
        target: Sum a path must reach

    Returns:
        Paths in discovery order
    """
    size = grid.size
    values = grid.to_flat()
    neighbors = neighbor_table(size)
    visited = [False] * len(values)
    chain: List[int] = []
    found: Dict[FrozenSet[int], tuple] = {}

    def dfs(index: int, total: int, count: int) -> None:
        if not budget.tick():
            return

        visited[index] = True
        chain.append(index)

        if total == target and count >= 2:
            key = frozenset(i for i in chain if values[i] > 0)
            if key not in found or len(chain) < len(found[key]):
                found[key] = tuple(chain)
        elif total < target:
            for nxt in neighbors[index]:
                if visited[nxt]:
                    continue
                value = values[nxt]
                if value <= 0:
                    dfs(nxt, total, count)
                elif total + value <= target:
                    dfs(nxt, total + value, count + 1)
                if budget.exhausted:
                    break

        chain.pop()
        visited[index] = False

    for start, value in enumerate(values):
        if value <= 0 or value > target:
            continue
        dfs(start, value, 1)
        if budget.exhausted:
            logger.debug(
                f"Path enumeration stopped after {budget.steps} steps "
                f"with {len(found)} paths"
            )
            break

    return [
        CellPath.create(((i % size, i // size) for i in chain_), grid)
        for chain_ in found.values()
    ]


def greedy_disjoint_paths(paths: Sequence[CellPath]) -> List[CellPath]:
    """
    Pick non-overlapping paths, shortest first.

    Args:
        paths: Candidate paths

    Returns:
        Paths whose numbered cells are pairwise disjoint
    """
    chosen: List[CellPath] = []
    used = set()
    for path in sorted(paths, key=lambda p: p.length):
        if used.isdisjoint(path.numbers):
            chosen.append(path)
            used.update(path.numbers)
    return chosen


def max_disjoint_paths(paths: Sequence[CellPath], budget: SearchBudget,
                       stop_at: Optional[int] = None) -> List[CellPath]:
    """
    Largest set of paths with pairwise disjoint numbered cells.

    Bounded backtracking seeded with the greedy answer. A branch is cut when
    even pairing every remaining free number could not beat the best set.
    On budget exhaustion the best set found so far is returned.

    Args:
        paths: Candidate paths
        budget: Step/time bound
        stop_at: Return as soon as a set of this size is found

    Returns:
        Selected paths
    """
    candidates = sorted(paths, key=lambda p: (p.number_count, p.length))
    masks = [frozenset(p.numbers) for p in candidates]
    all_numbers = set()
    for mask in masks:
        all_numbers.update(mask)

    best: List[int] = []
    greedy = greedy_disjoint_paths(candidates)
    if greedy:
        positions = {id(p): i for i, p in enumerate(candidates)}
        best = [positions[id(p)] for p in greedy]

    def done() -> bool:
        return stop_at is not None and len(best) >= stop_at

    def search(start: int, used: FrozenSet[Coordinate], chosen: List[int]) -> None:
        nonlocal best
        if not budget.tick():
            return

        if len(chosen) > len(best):
            best = list(chosen)
        if done():
            return

        free = len(all_numbers) - len(used)
        if len(chosen) + free // 2 <= len(best):
            return

        for i in range(start, len(candidates)):
            if not used.isdisjoint(masks[i]):
                continue
            chosen.append(i)
            search(i + 1, used | masks[i], chosen)
            chosen.pop()
            if budget.exhausted or done():
                return

    if not done():
        search(0, frozenset(), [])

    if budget.exhausted:
        logger.debug(f"Disjoint path search budget exhausted, best size {len(best)}")

    return [candidates[i] for i in best]
