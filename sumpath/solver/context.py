"""
Search Budget Module - Step and wall-clock bounds shared by the searches.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SearchBudget:
    """
    Explicit bound on the work a single search may do.

    Every search calls ``tick()`` once per expanded state. When either the
    step limit or the timeout is exceeded the budget reports exhaustion and
    the search returns its best-effort answer.

    Attributes:
        max_steps: Maximum number of expanded states (None = unlimited)
        timeout_sec: Maximum computation time in seconds (None = unlimited)
        start_time: When the search started
        steps: States expanded so far
    """
    max_steps: Optional[int] = 100_000
    timeout_sec: Optional[float] = 1.0
    start_time: float = field(default_factory=time.perf_counter)
    steps: int = 0
    _exhausted: bool = field(default=False, init=False, repr=False)

    # Clock is sampled once every this many steps
    CLOCK_INTERVAL = 256

    def tick(self) -> bool:
        """
        Count one step.

        Returns:
            True while the search may continue
        """
        if self._exhausted:
            return False

        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            self._exhausted = True
        elif (self.timeout_sec is not None
              and self.steps % self.CLOCK_INTERVAL == 0
              and self.elapsed_time() > self.timeout_sec):
            self._exhausted = True
        return not self._exhausted

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def check_time(self) -> bool:
        """
        Check the clock without counting a step.

        Returns:
            True while the search may continue
        """
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            self._exhausted = True
        return not self._exhausted

    def elapsed_time(self) -> float:
        return time.perf_counter() - self.start_time

    def remaining_time(self) -> Optional[float]:
        """Seconds left before timeout, None when unlimited (may be negative)."""
        if self.timeout_sec is None:
            return None
        return self.timeout_sec - self.elapsed_time()
