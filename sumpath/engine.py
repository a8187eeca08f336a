"""
Engine Module - Host-facing API tying board, session and searches together.

The host drives the engine with pointer events and receives domain
events through subscribed listeners. All work runs on the caller's
thread; every search is bounded by its own step/time budget.
"""

import logging
from typing import List, Optional

import numpy as np

from sumpath.events import (
    BoardEmpty,
    BoardReady,
    CellsRemoved,
    EngineEvent,
    EngineListener,
    NoMoreMoves,
    PathChanged,
)
from sumpath.generator import BoardGenerator, GenerationResult
from sumpath.level import LevelData
from sumpath.session import PathSession
from sumpath.settings import EngineSettings, clamp
from sumpath.solver import (
    MAX_SIZE,
    MIN_SIZE,
    CellPath,
    Coordinate,
    Grid,
    HintEngine,
    MoveOracle,
    create_oracle_for_size,
)

logger = logging.getLogger(__name__)


__all__ = [
    "PuzzleEngine",
]


class PuzzleEngine:
    """
    Sum to 10 path puzzle engine.

    Owns the current Grid, its PathSession and the cached answer to
    "is any move left?". The cache is tied to the grid revision and is
    invalidated explicitly on every clear.

    Example:
        engine = PuzzleEngine(seed=42)
        engine.subscribe(print)
        engine.setup_board(4)
        engine.on_cell_pointer_down((0, 0))
        engine.on_cell_pointer_enter((1, 0))
        engine.on_drag_released()
    """

    def __init__(self, settings: Optional[EngineSettings] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Initialize the engine.

        Args:
            settings: Engine configuration (defaults when None)
            rng: Random source for generation and bridge tie-breaks
            seed: Seed for a fresh random source when rng is None
        """
        self.settings = settings or EngineSettings()
        self._rng = rng if rng is not None else np.random.default_rng(seed)

        self._generator = BoardGenerator(self.settings.generation_params())
        self._hint = HintEngine(
            target_sum=self.settings.target_sum,
            max_steps=self.settings.hint_max_steps,
            timeout_sec=self.settings.hint_timeout_sec,
        )
        self._listeners: List[EngineListener] = []

        self._grid: Optional[Grid] = None
        self._session: Optional[PathSession] = None
        self._oracle: Optional[MoveOracle] = None

        self._move_cache: Optional[bool] = None
        self._cache_revision = -1

        self.last_generation: Optional[GenerationResult] = None

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    @property
    def session(self) -> Optional[PathSession]:
        return self._session

    @property
    def oracle(self) -> Optional[MoveOracle]:
        return self._oracle

    def subscribe(self, listener: EngineListener) -> None:
        """Register a callback for engine events."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EngineListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def setup_board(self, size: Optional[int] = None) -> GenerationResult:
        """
        Generate and install a fresh board.

        Args:
            size: Board side (default: settings.board_size); clamped to the
                supported range

        Returns:
            Generation diagnostics (``is_fallback`` flags a sub-optimal board)
        """
        if size is None:
            size = self.settings.board_size
        clamped = clamp(int(size), MIN_SIZE, MAX_SIZE)
        if clamped != size:
            logger.debug(f"Board size {size} clamped to {clamped}")

        result = self._generator.generate(clamped, rng=self._rng)
        self.last_generation = result
        self._install(result.grid)

        logger.info(
            f"Board ready: {clamped}x{clamped}, {result.move_count} independent moves"
            + (" (fallback)" if result.is_fallback else "")
        )
        self._emit(BoardReady(
            size=clamped,
            move_count=result.move_count,
            is_fallback=result.is_fallback,
            warnings=tuple(result.warnings),
        ))
        return result

    def load_board(self, grid: Grid) -> None:
        """Install an externally built board."""
        self.last_generation = None
        self._install(grid)
        logger.info(f"Board loaded: {grid.size}x{grid.size}, {grid.count_numbers()} numbers")
        self._emit(BoardReady(size=grid.size))

    def load_level(self, level: LevelData) -> None:
        """Install a level, generating a board when the level asks for it."""
        level = level.normalized()
        if level.use_auto_generation:
            self.setup_board(level.n)
        else:
            self.load_board(level.to_grid())

    def on_cell_pointer_down(self, cell: Coordinate) -> bool:
        if self._session is None:
            return False
        return self._session.pointer_down(cell)

    def on_cell_pointer_enter(self, cell: Coordinate) -> bool:
        if self._session is None:
            return False
        return self._session.pointer_enter(cell)

    def on_drag_released(self) -> List[Coordinate]:
        """
        Finish the current drag.

        Returns:
            Cleared coordinates (empty when the path was not clearable)
        """
        if self._session is None:
            return []

        cleared = self._session.release()
        if cleared:
            self.invalidate_move_cache()
            logger.info(f"Cleared {len(cleared)} cells")
            self._emit(CellsRemoved(tuple(cleared)))
            self._check_end_conditions()
        return cleared

    def request_hint(self) -> Optional[CellPath]:
        """Shortest clearable path on the current board, or None."""
        if self._grid is None:
            return None
        return self._hint.shortest_move(self._grid)

    def has_any_move(self) -> bool:
        """
        Cached move-existence check for the current board.

        Returns:
            True if at least one clearable path exists
        """
        if self._grid is None:
            return False

        if self._move_cache is not None and self._cache_revision == self._grid.revision:
            logger.debug(f"Move cache hit: {self._move_cache}")
            return self._move_cache

        self._move_cache = self._oracle.has_any_move(self._grid)
        self._cache_revision = self._grid.revision
        return self._move_cache

    def invalidate_move_cache(self) -> None:
        """Forget the cached move-existence answer."""
        self._move_cache = None
        self._cache_revision = -1

    @property
    def is_board_empty(self) -> bool:
        return self._grid is not None and self._grid.is_empty

    def _install(self, grid: Grid) -> None:
        if self._session is not None and self._session.is_dragging:
            self._session.reset()

        self._grid = grid
        self._oracle = create_oracle_for_size(
            grid.size,
            self.settings.graph_oracle_threshold,
            self.settings.oracle,
            target_sum=self.settings.target_sum,
            max_steps=self.settings.oracle_max_steps,
            timeout_sec=self.settings.oracle_timeout_sec,
        )
        self._session = PathSession(
            grid,
            lock_axis=self.settings.lock_axis,
            target_sum=self.settings.target_sum,
            rng=self._rng,
            on_path_changed=self._on_path_changed,
        )
        self.invalidate_move_cache()

    def _check_end_conditions(self) -> None:
        if self._grid.is_empty:
            logger.info("Board empty")
            self._emit(BoardEmpty())
            return

        if not self.has_any_move():
            logger.info("No more moves")
            self._emit(NoMoreMoves())

    def _on_path_changed(self, path: CellPath) -> None:
        self._emit(PathChanged(path))

    def _emit(self, event: EngineEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
