"""
Board Generator Module - Random boards with a guaranteed (best-effort) move supply.

Pipeline per attempt:
    1. Random fill with 1..K, keeping the center hole blank on odd sizes
    2. Reject fills without any clearing move
    3. Break up easy pairs down to the configured maximum
    4. Size-dependent move-count gate (exact counting or planting)
    5. Accept if a move still exists, the gate is satisfied and the final
       board is still within the easy-pair limit

Attempts repeat until one is accepted or the attempt/time budget runs out,
in which case the best candidate seen is returned and flagged as a fallback.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..solver import (
    BLANK,
    MAX_SIZE,
    MIN_SIZE,
    Grid,
    MoveOracle,
    create_oracle_for_size,
)
from .easy_pairs import collect_easy_pairs, limit_easy_pairs
from .move_count import select_gate
from .params import GenerationParams

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """
    A generated board and how it was obtained.

    Attributes:
        grid: The generated board
        attempts: Pipeline attempts used
        move_count: Independent clearing paths reported by the move-count gate
        required_moves: Count the gate asked for
        has_move: Oracle verdict on the final board
        is_fallback: True when no attempt passed every gate
        easy_pairs: Easy pairs left after shaping
        elapsed_ms: Total generation time
        warnings: Human-readable diagnostics for the host
    """
    grid: Grid
    attempts: int = 0
    move_count: int = 0
    required_moves: int = 0
    has_move: bool = False
    is_fallback: bool = False
    easy_pairs: int = 0
    elapsed_ms: float = 0.0
    warnings: List[str] = field(default_factory=list)

    @property
    def score(self):
        """Ranking key for fallback selection."""
        return (self.has_move, self.move_count)


def fill_random(grid: Grid, rng: np.random.Generator, max_value: int) -> None:
    """Assign every cell but the permanent hole a uniform value in 1..max_value."""
    values = rng.integers(1, max_value + 1, size=(grid.size, grid.size))
    if grid.hole is not None:
        hx, hy = grid.hole
        values[hy, hx] = BLANK
    grid.fill(values)


class BoardGenerator:
    """
    Produces boards that satisfy the difficulty and move-count gates.

    Example:
        generator = BoardGenerator()
        result = generator.generate(5, rng=np.random.default_rng(7))
        if result.is_fallback:
            print(result.warnings)
    """

    def __init__(self, params: Optional[GenerationParams] = None,
                 oracle: Optional[MoveOracle] = None):
        """
        Initialize the generator.

        Args:
            params: Default generation parameters
            oracle: Move oracle for the solvability gate; chosen per size when None
        """
        self.params = params or GenerationParams()
        self.oracle = oracle

    def _oracle_for(self, size: int, params: GenerationParams) -> MoveOracle:
        if self.oracle is not None:
            return self.oracle
        return create_oracle_for_size(
            size, params.graph_oracle_threshold, params.oracle,
            target_sum=params.target_sum,
        )

    def generate(self, size: int, params: Optional[GenerationParams] = None,
                 rng: Optional[np.random.Generator] = None) -> GenerationResult:
        """
        Generate a board.

        Args:
            size: Board side n (MIN_SIZE..MAX_SIZE)
            params: Overrides the generator's default parameters
            rng: Seedable random source; a fresh unseeded one when None

        Returns:
            GenerationResult (check ``is_fallback``)

        Raises:
            ValueError: If size is outside the supported range
        """
        if not MIN_SIZE <= size <= MAX_SIZE:
            raise ValueError(f"Board size must be {MIN_SIZE}..{MAX_SIZE}, got {size}")

        params = params or self.params
        if rng is None:
            rng = np.random.default_rng()

        oracle = self._oracle_for(size, params)
        gate = select_gate(size, params)
        start_time = time.perf_counter()

        grid = Grid.blank(size)
        best: Optional[GenerationResult] = None

        for attempt in range(1, max(1, params.max_attempts) + 1):
            fill_random(grid, rng, params.max_value)

            if not oracle.has_any_move(grid):
                logger.debug(f"Attempt {attempt}: random fill has no move, retrying")
                candidate = GenerationResult(
                    grid=grid.copy(),
                    attempts=attempt,
                    easy_pairs=len(collect_easy_pairs(grid, params.target_sum)),
                )
            else:
                limit_easy_pairs(
                    grid, params.max_easy_pairs, rng,
                    max_value=params.max_value,
                    target=params.target_sum,
                    safety=params.easy_pair_safety,
                )
                gate_result = gate.apply(grid, rng)
                has_move = oracle.has_any_move(grid)

                # Planting can add pairs, so count on the final board
                easy = len(collect_easy_pairs(grid, params.target_sum))
                easy_ok = params.max_easy_pairs < 0 or easy <= params.max_easy_pairs

                candidate = GenerationResult(
                    grid=grid.copy(),
                    attempts=attempt,
                    move_count=gate_result.move_count,
                    required_moves=gate_result.required,
                    has_move=has_move,
                    easy_pairs=easy,
                )

                if has_move and gate_result.satisfied and easy_ok:
                    candidate.elapsed_ms = (time.perf_counter() - start_time) * 1000
                    logger.info(
                        f"Generated {size}x{size} board in {attempt} attempt(s), "
                        f"{candidate.move_count} independent moves, "
                        f"{easy} easy pairs ({candidate.elapsed_ms:.1f}ms)"
                    )
                    return candidate

                logger.debug(
                    f"Attempt {attempt}: has_move={has_move}, "
                    f"moves {gate_result.move_count}/{gate_result.required}, "
                    f"easy pairs {easy}/{params.max_easy_pairs}"
                )

            if best is None or candidate.score > best.score:
                best = candidate

            if time.perf_counter() - start_time > params.timeout_sec:
                logger.debug(f"Generation time budget spent after {attempt} attempts")
                break

        best.attempts = attempt
        best.is_fallback = True
        best.elapsed_ms = (time.perf_counter() - start_time) * 1000
        message = (
            f"No {size}x{size} board passed every gate in {attempt} attempts; "
            f"using best candidate (has_move={best.has_move}, "
            f"moves {best.move_count}/{best.required_moves})"
        )
        best.warnings.append(message)
        logger.warning(message)
        return best
