"""
Number Graph Oracle - Move search on a compressed graph of numbered cells.

Blank cells never change a path's sum or count, so the search only needs
to know which numbers can reach each other through blanks. Each numbered
cell becomes a node; two nodes are joined when they touch directly or
border the same connected blank region (numbers act as walls).

Designed for larger boards where long blank corridors would otherwise be
re-walked cell by cell for every start.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..base import MoveOracle
from ..context import SearchBudget
from ..factory import register_oracle
from ..grid import Coordinate, Grid, neighbor_table
from .direct_search import DirectSearchOracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumberNode:
    """
    One numbered cell.

    Attributes:
        coordinate: (x, y) position
        value: Cell number
    """
    coordinate: Coordinate
    value: int


@dataclass
class NumberGraph:
    """
    Numbered cells connected through blank-only regions.

    Attributes:
        nodes: One node per numbered cell, row-major order
        edges: edges[i] holds (j, region) pairs; region is the blank region
               id the hop passes through, or None for direct contact
        region_count: Number of connected blank regions
    """
    nodes: List[NumberNode]
    edges: List[List[Tuple[int, Optional[int]]]]
    region_count: int

    @classmethod
    def build(cls, grid: Grid) -> "NumberGraph":
        """Build the graph from the current board (ephemeral, never cached)."""
        size = grid.size
        values = grid.to_flat()
        neighbors = neighbor_table(size)

        node_of = {}
        nodes: List[NumberNode] = []
        for index, value in enumerate(values):
            if value > 0:
                node_of[index] = len(nodes)
                nodes.append(NumberNode((index % size, index // size), value))

        # BFS flood-fill of blank regions; numbers stop the fill and are
        # collected as the region's border
        region_of = [-1] * len(values)
        borders: List[List[int]] = []
        for start, value in enumerate(values):
            if value > 0 or region_of[start] != -1:
                continue

            region = len(borders)
            border = set()
            region_of[start] = region
            queue = deque([start])
            while queue:
                index = queue.popleft()
                for nxt in neighbors[index]:
                    if values[nxt] > 0:
                        border.add(node_of[nxt])
                    elif region_of[nxt] == -1:
                        region_of[nxt] = region
                        queue.append(nxt)
            borders.append(sorted(border))

        edge_sets = [set() for _ in nodes]
        for index, node_index in node_of.items():
            for nxt in neighbors[index]:
                if values[nxt] > 0:
                    edge_sets[node_index].add((node_of[nxt], None))
        for region, border in enumerate(borders):
            for a in border:
                for b in border:
                    if a != b:
                        edge_sets[a].add((b, region))

        # Direct contact first, then by node order
        edges = [
            sorted(edge_set, key=lambda e: (e[1] is not None, e[0], -1 if e[1] is None else e[1]))
            for edge_set in edge_sets
        ]
        return cls(nodes=nodes, edges=edges, region_count=len(borders))

    @property
    def edge_count(self) -> int:
        return sum(len(e) for e in self.edges)


@register_oracle
class NumberGraphOracle(MoveOracle):
    """
    Depth-first search over the number graph.

    A blank region is used by at most one hop of a path, which keeps every
    reported path realizable on the real board. When that restriction
    pruned a branch and nothing was found, the answer is settled by a
    direct cell search on the remaining budget.
    """
    name = "graph"
    description = "Compressed number-graph DFS (large boards)"
    max_steps = 100_000
    timeout_sec = 1.0

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._used_nodes: List[bool] = []
        self._used_regions: List[bool] = []
        self._region_conflict = False

    def _search(self, grid: Grid, budget: SearchBudget) -> bool:
        graph = NumberGraph.build(grid)
        self._used_nodes = [False] * len(graph.nodes)
        self._used_regions = [False] * graph.region_count
        self._region_conflict = False

        for start, node in enumerate(graph.nodes):
            if node.value > self.target_sum:
                continue
            if self._dfs(graph, start, node.value, 1, budget):
                return True
            if budget.exhausted:
                return False

        if self._region_conflict:
            logger.debug(
                f"graph: no move with single-use regions "
                f"({len(graph.nodes)} nodes, {graph.region_count} regions), "
                f"confirming with cell search"
            )
            fallback = DirectSearchOracle(self.target_sum)
            return fallback._search(grid, budget)

        return False

    def _dfs(self, graph: NumberGraph, node: int, total: int, count: int,
             budget: SearchBudget) -> bool:
        if not budget.tick():
            return False

        if total == self.target_sum and count >= 2:
            return True

        self._used_nodes[node] = True
        found = False

        for nxt, region in graph.edges[node]:
            if self._used_nodes[nxt]:
                continue

            next_total = total + graph.nodes[nxt].value
            if next_total > self.target_sum:
                continue

            if region is not None:
                if self._used_regions[region]:
                    self._region_conflict = True
                    continue
                self._used_regions[region] = True

            found = self._dfs(graph, nxt, next_total, count + 1, budget)

            if region is not None:
                self._used_regions[region] = False
            if found or budget.exhausted:
                break

        self._used_nodes[node] = False
        return found
