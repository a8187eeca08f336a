"""
sumpath - Engine for the Sum to 10 path puzzle.

Players drag a 4-connected path across an n x n board; when the numbers
on the path sum to exactly 10 they are cleared. This package provides the
board model, move-existence and hint searches, board generation and the
drag-path state machine. Rendering, timers and scoring belong to the host.

Public API:
    - PuzzleEngine: Host-facing facade (setup, pointer events, hints)
    - EngineSettings / load_settings / save_settings: Configuration
    - PathSession: Drag state machine
    - BoardGenerator: Board generation pipeline
    - Grid, CellPath, HintEngine, create_oracle: Search building blocks
"""

from .solver import CellPath, Grid, HintEngine, SearchBudget, create_oracle, create_oracle_for_size
from .generator import BoardGenerator, GenerationParams, GenerationResult
from .session import AxisLock, PathSession, SessionState
from .settings import EngineSettings, load_settings, save_settings
from .level import LevelData, load_level
from .events import BoardEmpty, BoardReady, CellsRemoved, EngineEvent, NoMoreMoves, PathChanged
from .engine import PuzzleEngine

__all__ = [
    "AxisLock",
    "BoardEmpty",
    "BoardGenerator",
    "BoardReady",
    "CellPath",
    "CellsRemoved",
    "EngineEvent",
    "EngineSettings",
    "GenerationParams",
    "GenerationResult",
    "Grid",
    "HintEngine",
    "LevelData",
    "NoMoreMoves",
    "PathChanged",
    "PathSession",
    "PuzzleEngine",
    "SearchBudget",
    "SessionState",
    "create_oracle",
    "create_oracle_for_size",
    "load_level",
    "load_settings",
    "save_settings",
]

__version__ = "0.1.0"
