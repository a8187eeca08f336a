"""
Tests for the move-existence oracles.

Usage:
    pytest tests/test_oracle.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sumpath.solver import (
    BLANK,
    DirectSearchOracle,
    Grid,
    NumberGraph,
    NumberGraphOracle,
    SearchBudget,
    create_oracle,
    create_oracle_for_size,
    get_oracle_names,
)

ORACLES = [DirectSearchOracle, NumberGraphOracle]


@pytest.mark.parametrize("oracle_cls", ORACLES)
def test_known_path_found(oracle_cls):
    # 1 + 3 + 6 down the first column
    grid = Grid.from_rows([
        [1, 2, -1],
        [3, 4, 5],
        [6, 2, 1],
    ])
    assert oracle_cls().has_any_move(grid)


@pytest.mark.parametrize("oracle_cls", ORACLES)
def test_all_nines_has_no_move(oracle_cls):
    grid = Grid.from_rows([[9, 9], [9, 9]])
    assert not oracle_cls().has_any_move(grid)


@pytest.mark.parametrize("oracle_cls", ORACLES)
def test_empty_board_has_no_move(oracle_cls):
    assert not oracle_cls().has_any_move(Grid.blank(4))


@pytest.mark.parametrize("oracle_cls", ORACLES)
def test_single_number_is_not_a_move(oracle_cls):
    grid = Grid.from_rows([[5, -1], [-1, -1]])
    assert not oracle_cls(target_sum=5).has_any_move(grid)


@pytest.mark.parametrize("oracle_cls", ORACLES)
def test_path_through_blank_corridor(oracle_cls):
    grid = Grid.from_rows([
        [3, -1, -1],
        [-1, -1, -1],
        [-1, -1, 7],
    ])
    assert oracle_cls().has_any_move(grid)


@pytest.mark.parametrize("oracle_cls", ORACLES)
def test_shared_single_blank_cannot_be_reused(oracle_cls):
    # 2 + 3 + 5 all touch the center blank, but a path can only pass
    # through it once; every other neighbour is a 9.
    grid = Grid.from_rows([
        [9, 2, 9],
        [3, -1, 5],
        [9, 9, 9],
    ])
    assert not oracle_cls().has_any_move(grid)


def test_number_graph_structure():
    grid = Grid.from_rows([
        [3, -1],
        [-1, 7],
    ])
    graph = NumberGraph.build(grid)

    assert [n.coordinate for n in graph.nodes] == [(0, 0), (1, 1)]
    assert [n.value for n in graph.nodes] == [3, 7]
    # The two blanks only touch diagonally: two separate regions
    assert graph.region_count == 2
    assert {target for target, _ in graph.edges[0]} == {1}
    assert {region for _, region in graph.edges[0]} == {0, 1}


def test_number_graph_direct_contact_has_no_region():
    grid = Grid.from_rows([[4, 6], [9, 9]])
    graph = NumberGraph.build(grid)

    assert graph.region_count == 0
    assert (1, None) in graph.edges[0]


def test_oracles_agree_on_random_boards():
    rng = np.random.default_rng(1234)
    bounds = dict(max_steps=10_000_000)

    for _ in range(40):
        values = rng.integers(1, 10, size=(4, 4))
        values[rng.random((4, 4)) < 0.35] = BLANK
        grid = Grid(values)

        direct = DirectSearchOracle(**bounds).has_any_move(grid)
        graph = NumberGraphOracle(**bounds).has_any_move(grid)
        assert direct == graph, f"disagree on\n{grid}"


def test_exhausted_budget_reports_no_move():
    grid = Grid.from_rows([
        [1, 2, -1],
        [3, 4, 5],
        [6, 2, 1],
    ])
    oracle = DirectSearchOracle(max_steps=1)
    assert not oracle.has_any_move(grid)

    budget = SearchBudget(max_steps=1, timeout_sec=None)
    assert not DirectSearchOracle().has_any_move(grid, budget)
    assert budget.exhausted


def test_repeated_queries_are_stable():
    grid = Grid.from_rows([[3, 8], [1, 7]])
    oracle = DirectSearchOracle()
    first = oracle.has_any_move(grid)
    assert first == oracle.has_any_move(grid)
    assert first


def test_factory():
    assert set(get_oracle_names()) >= {"dfs", "graph"}
    assert isinstance(create_oracle("dfs"), DirectSearchOracle)
    assert isinstance(create_oracle_for_size(5, threshold=6), DirectSearchOracle)
    assert isinstance(create_oracle_for_size(6, threshold=6), NumberGraphOracle)
    assert isinstance(create_oracle_for_size(9, threshold=6, name="dfs"), DirectSearchOracle)

    with pytest.raises(ValueError):
        create_oracle("lookahead")


def test_budget_counts_steps():
    budget = SearchBudget(max_steps=3, timeout_sec=None)
    assert budget.tick()
    assert budget.tick()
    assert budget.tick()
    assert not budget.tick()
    assert budget.exhausted
    assert budget.remaining_time() is None
