"""
Easy Pair Module - Difficulty shaping by breaking up trivial moves.

An easy pair is two 4-adjacent numbered cells that already sum to the
target on their own. Fewer easy pairs make a board harder.
"""

import logging
from typing import List, Tuple

import numpy as np

from ..solver import DIRECTIONS, MAX_VALUE, TARGET_SUM, Coordinate, Grid

logger = logging.getLogger(__name__)

EasyPair = Tuple[Coordinate, Coordinate]


def collect_easy_pairs(grid: Grid, target: int = TARGET_SUM) -> List[EasyPair]:
    """
    Find all adjacent numbered pairs summing to ``target``.

    Each pair is reported once, as (left, right) or (upper, lower),
    in row-major order of the first cell.

    Args:
        grid: Board to inspect

    Returns:
        List of coordinate pairs
    """
    v = grid.values.astype(np.int16)
    numbered = v > 0

    right = numbered[:, :-1] & numbered[:, 1:] & (v[:, :-1] + v[:, 1:] == target)
    down = numbered[:-1, :] & numbered[1:, :] & (v[:-1, :] + v[1:, :] == target)

    pairs: List[EasyPair] = []
    for y, x in zip(*np.nonzero(right)):
        pairs.append(((int(x), int(y)), (int(x) + 1, int(y))))
    for y, x in zip(*np.nonzero(down)):
        pairs.append(((int(x), int(y)), (int(x), int(y) + 1)))

    pairs.sort(key=lambda p: (p[0][1], p[0][0], p[1][1]))
    return pairs


def pick_non_easy_value(grid: Grid, x: int, y: int, rng: np.random.Generator,
                        max_value: int = MAX_VALUE, target: int = TARGET_SUM) -> int:
    """
    Choose a value for (x, y) that forms no easy pair with its neighbours.

    Args:
        grid: Board to inspect
        x, y: Cell to reassign
        rng: Random source
        max_value: Largest allowed value K

    Returns:
        Uniform pick from 1..K minus the forbidden values, or an
        unconstrained pick when every value is forbidden
    """
    forbidden = set()
    for dx, dy in DIRECTIONS:
        neighbour = grid.value(x + dx, y + dy)
        if neighbour > 0:
            bad = target - neighbour
            if 1 <= bad <= max_value:
                forbidden.add(bad)

    candidates = [v for v in range(1, max_value + 1) if v not in forbidden]
    if not candidates:
        return int(rng.integers(1, max_value + 1))
    return candidates[int(rng.integers(len(candidates)))]


def limit_easy_pairs(grid: Grid, max_pairs: int, rng: np.random.Generator,
                     max_value: int = MAX_VALUE, target: int = TARGET_SUM,
                     safety: int = 200) -> int:
    """
    Reassign cells until at most ``max_pairs`` easy pairs remain.

    Each round picks a random easy pair and a random side of it, then
    rewrites that cell with :func:`pick_non_easy_value`.

    Args:
        grid: Board to modify in place
        max_pairs: Target ceiling; negative disables the limit
        rng: Random source
        max_value: Largest allowed value K
        safety: Round cap guaranteeing termination

    Returns:
        Easy pair count after shaping
    """
    pairs = collect_easy_pairs(grid, target)
    if max_pairs < 0:
        return len(pairs)

    rounds = 0
    while len(pairs) > max_pairs:
        if rounds >= safety:
            logger.warning(
                f"Easy pair limit: safety cap of {safety} rounds reached, "
                f"{len(pairs)} pairs remain (max {max_pairs})"
            )
            break
        rounds += 1

        first, second = pairs[int(rng.integers(len(pairs)))]
        x, y = first if rng.random() < 0.5 else second
        grid.set_value(x, y, pick_non_easy_value(grid, x, y, rng, max_value, target))

        pairs = collect_easy_pairs(grid, target)

    logger.debug(f"Easy pairs: {len(pairs)} after {rounds} rounds (max {max_pairs})")
    return len(pairs)
