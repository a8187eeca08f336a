"""
Path Session Module - Drag state machine for drawing clearing paths.

One session lives per board. A drag starts on a numbered cell, grows as
the pointer enters neighbouring cells, and ends on release, when a
clearable path removes its numbered cells from the grid.

Accepted input rules while dragging:
  - Re-entering an earlier path cell truncates the path back to it
  - Entering a diagonal neighbour inserts one blank bridge cell between
  - Anything else must be a 4-neighbour of the tail
  - With axis lock on, straight steps must stay on the first axis used
  - No cell may appear twice

Rejected input is ignored: no exception, no state change.
"""

from enum import Enum, auto
from typing import Callable, Dict, List, Optional
import logging

import numpy as np

from sumpath.solver import (
    TARGET_SUM,
    CellPath,
    Coordinate,
    Grid,
    bridge_candidates,
    is_adjacent,
    is_clearable,
    is_diagonal,
)

logger = logging.getLogger(__name__)


__all__ = [
    "AxisLock",
    "PathSession",
    "SessionState",
]


class SessionState(Enum):
    """
    Drag state machine states.

    States:
        IDLE: No drag in progress
        DRAGGING: Pointer is down, path is being drawn
    """
    IDLE = auto()
    DRAGGING = auto()


class AxisLock(Enum):
    """Direction a path is committed to when axis lock is on."""
    NONE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()


class PathSession:
    """
    Incrementally validated drag path over a grid.

    State Flow:
        IDLE --pointer_down(numbered cell)--> DRAGGING
        DRAGGING --pointer_enter(cell)--> DRAGGING (path grows/shrinks)
        DRAGGING --release()--> IDLE (clears cells if the path is clearable)

    Bridge selection: when both orthogonal corners of a diagonal step are
    eligible, one is chosen at random from ``rng``. This is deliberate
    nondeterminism; seed the generator for reproducible sessions.

    Example:
        session = PathSession(grid, lock_axis=False)
        session.pointer_down((0, 0))
        session.pointer_enter((1, 0))
        cleared = session.release()
    """

    def __init__(self, grid: Grid, lock_axis: bool = False,
                 target_sum: int = TARGET_SUM,
                 rng: Optional[np.random.Generator] = None,
                 on_path_changed: Optional[Callable[[CellPath], None]] = None):
        """
        Initialize path session.

        Args:
            grid: Board the path is drawn on (cleared in place on release)
            lock_axis: Forbid turning once a direction is established
            target_sum: Sum a path must reach to clear
            rng: Random source for bridge tie-breaks
            on_path_changed: Called with the current path after every accepted change
        """
        self.grid = grid
        self.lock_axis = lock_axis
        self.target_sum = target_sum
        self.on_path_changed = on_path_changed
        self._rng = rng if rng is not None else np.random.default_rng()

        self._state = SessionState.IDLE
        self._cells: List[Coordinate] = []
        self._index: Dict[Coordinate, int] = {}
        self._total = 0
        self._number_count = 0
        self._axis = AxisLock.NONE

    @property
    def state(self) -> SessionState:
        """Get current state machine state."""
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state == SessionState.DRAGGING

    @property
    def cells(self) -> List[Coordinate]:
        """Copy of the current path coordinates."""
        return list(self._cells)

    @property
    def total(self) -> int:
        return self._total

    @property
    def number_count(self) -> int:
        return self._number_count

    @property
    def axis(self) -> AxisLock:
        return self._axis

    @property
    def is_clearable(self) -> bool:
        return is_clearable(self._total, self._number_count, self.target_sum)

    def snapshot(self) -> CellPath:
        """Immutable view of the current path."""
        cells = tuple(self._cells)
        numbers = tuple(c for c in cells if self.grid.is_number(*c))
        return CellPath(cells=cells, numbers=numbers, total=self._total)

    def pointer_down(self, cell: Coordinate) -> bool:
        """
        Start a drag on a numbered cell.

        Args:
            cell: Pressed coordinate

        Returns:
            True if a drag started
        """
        if self._state != SessionState.IDLE:
            logger.debug(f"State[{self._state.name}]: pointer down ignored at {cell}")
            return False
        if not self.grid.is_number(*cell):
            return False

        self._reset_path()
        self._state = SessionState.DRAGGING
        self._append(cell)
        self._notify()
        return True

    def pointer_enter(self, cell: Coordinate) -> bool:
        """
        Extend, truncate or bridge the path into ``cell``.

        Args:
            cell: Entered coordinate

        Returns:
            True if the path changed
        """
        if self._state != SessionState.DRAGGING:
            return False
        if not self.grid.in_bounds(*cell):
            return False

        # Backtrack
        idx = self._index.get(cell)
        if idx is not None:
            if idx == len(self._cells) - 1:
                return False
            self._truncate(idx)
            self._notify()
            return True

        tail = self._cells[-1]
        bridge = None
        step_axis = None

        if is_adjacent(tail, cell):
            step_axis = AxisLock.HORIZONTAL if cell[0] != tail[0] else AxisLock.VERTICAL
            if self.lock_axis and self._axis not in (AxisLock.NONE, step_axis):
                logger.debug(f"Rejected {cell}: leaves {self._axis.name} axis")
                return False
        elif is_diagonal(tail, cell):
            candidates = bridge_candidates(self.grid, tail, cell, self._index)
            if not candidates:
                logger.debug(f"Rejected {cell}: no blank bridge from {tail}")
                return False
            if len(candidates) == 1:
                bridge = candidates[0]
            else:
                bridge = candidates[int(self._rng.integers(len(candidates)))]
        else:
            return False

        if bridge is not None:
            self._append(bridge)
        self._append(cell)

        if self.lock_axis and step_axis is not None and self._axis == AxisLock.NONE:
            self._axis = step_axis

        self._notify()
        return True

    def release(self) -> List[Coordinate]:
        """
        End the drag, clearing the path's numbers if it is clearable.

        The session always returns to IDLE.

        Returns:
            Coordinates of the cleared numbered cells (empty if nothing cleared)
        """
        if self._state != SessionState.DRAGGING:
            return []

        cleared: List[Coordinate] = []
        if self.is_clearable:
            cleared = self.grid.clear_cells(self._cells)
            logger.debug(f"Cleared {len(cleared)} cells: {cleared}")
        else:
            logger.debug(
                f"Released without clear (sum={self._total}, numbers={self._number_count})"
            )

        self.reset()
        return cleared

    def reset(self) -> None:
        """Drop the current path and return to IDLE."""
        self._reset_path()
        self._state = SessionState.IDLE
        self._notify()

    def _append(self, cell: Coordinate) -> None:
        self._index[cell] = len(self._cells)
        self._cells.append(cell)
        value = self.grid.value(*cell)
        if value > 0:
            self._total += value
            self._number_count += 1

    def _truncate(self, idx: int) -> None:
        for cell in self._cells[idx + 1:]:
            del self._index[cell]
        del self._cells[idx + 1:]
        self._recalculate()

    def _recalculate(self) -> None:
        self._total = 0
        self._number_count = 0
        for cell in self._cells:
            value = self.grid.value(*cell)
            if value > 0:
                self._total += value
                self._number_count += 1

    def _reset_path(self) -> None:
        self._cells.clear()
        self._index.clear()
        self._total = 0
        self._number_count = 0
        self._axis = AxisLock.NONE

    def _notify(self) -> None:
        if self.on_path_changed is not None:
            self.on_path_changed(self.snapshot())
