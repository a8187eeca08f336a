"""
Base Oracle Module - Abstract base class for move-existence strategies.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .context import SearchBudget
from .grid import Grid, TARGET_SUM

logger = logging.getLogger(__name__)


class MoveOracle(ABC):
    """
    Abstract base class for answering "does any clearing path exist?".

    Subclasses implement ``_search`` and define name and description
    class attributes. Every search runs against an explicit
    :class:`SearchBudget`; an exhausted budget means "no move found so far".

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
        max_steps: Default step bound per query
        timeout_sec: Default time bound per query
    """
    name: str = "base"
    description: str = "Base oracle"
    max_steps: int = 100_000
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
        """Fresh budget with this oracle's default bounds."""
        return SearchBudget(max_steps=self.max_steps, timeout_sec=self.timeout_sec)

    def has_any_move(self, grid: Grid, budget: Optional[SearchBudget] = None) -> bool:
        """
        Check whether at least one clearable path exists.

        Args:
            grid: Board to search (not modified)
            budget: Optional shared budget; a fresh one is used otherwise

        Returns:
            True if a path was found before the budget ran out.
            A board without numbers always returns False.
        """
        if grid.is_empty:
            return False

        if budget is None:
            budget = self.new_budget()

        found = self._search(grid, budget)
        if not found and budget.exhausted:
            logger.debug(
                f"{self.name}: budget exhausted after {budget.steps} steps "
                f"({budget.elapsed_time() * 1000:.1f}ms), reporting no move"
            )
        return found

    @abstractmethod
    def _search(self, grid: Grid, budget: SearchBudget) -> bool:
        """
        Strategy-specific search.

        Args:
            grid: Board with at least one numbered cell
            budget: Budget to tick once per expanded state

        Returns:
            True if a clearable path exists
        """
        pass
