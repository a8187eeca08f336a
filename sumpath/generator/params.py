"""
Generation Parameters Module - Difficulty and budget knobs for board generation.
"""

from dataclasses import dataclass
from typing import Tuple

from ..solver import AUTO, MAX_VALUE, TARGET_SUM


@dataclass(frozen=True)
class GenerationParams:
    """
    Tunable inputs to :class:`BoardGenerator`.

    Attributes:
        target_sum: Sum a clearing path must reach
        max_value: Largest cell number K (cells get 1..K)
        max_easy_pairs: Allowed adjacent pairs summing to target (negative = no limit)
        easy_pair_safety: Iteration cap for easy-pair reduction
        max_attempts: Whole-pipeline retries before falling back
        timeout_sec: Wall-clock budget for all attempts
        planting_threshold: Sizes at or above this plant paths instead of counting exactly
        min_path_tiers: (max_size, required_paths) pairs, ascending by size
        plant_length_range: Inclusive (min, max) cells per planted path
        plant_attempts_per_path: Planting attempts allowed per missing path
        plant_value_retries: Value splits tried per planted walk before giving up
        enumeration_max_steps: Step bound for listing clearing paths
        enumeration_timeout_sec: Time bound for listing clearing paths
        disjoint_max_steps: Step bound for the disjoint-set backtracking
        oracle: "auto", "dfs" or "graph"
        graph_oracle_threshold: Smallest size served by the graph oracle under "auto"
    """
    target_sum: int = TARGET_SUM
    max_value: int = MAX_VALUE
    max_easy_pairs: int = 4
    easy_pair_safety: int = 200
    max_attempts: int = 20
    timeout_sec: float = 2.0
    planting_threshold: int = 6
    min_path_tiers: Tuple[Tuple[int, int], ...] = ((3, 2), (5, 3), (7, 4), (10, 5))
    plant_length_range: Tuple[int, int] = (2, 4)
    plant_attempts_per_path: int = 10
    plant_value_retries: int = 5
    enumeration_max_steps: int = 50_000
    enumeration_timeout_sec: float = 0.1
    disjoint_max_steps: int = 20_000
    oracle: str = AUTO
    graph_oracle_threshold: int = 6


def required_path_count(size: int, tiers: Tuple[Tuple[int, int], ...]) -> int:
    """
    Independent paths a board of ``size`` must offer.

    Args:
        size: Board side n
        tiers: (max_size, required_paths) pairs

    Returns:
        Required count for the first tier covering ``size``; the last
        tier applies beyond the table, and 1 when the table is empty
    """
    if not tiers:
        return 1
    ordered = sorted(tiers)
    for max_size, count in ordered:
        if size <= max_size:
            return count
    return ordered[-1][1]
