"""
Events Module - Domain events raised by the engine to its host.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from sumpath.solver import CellPath, Coordinate


class EngineEvent:
    """Base class for everything delivered to engine listeners."""


@dataclass(frozen=True)
class PathChanged(EngineEvent):
    """The drag path grew, shrank or was reset (empty path)."""
    path: CellPath


@dataclass(frozen=True)
class CellsRemoved(EngineEvent):
    """A clearable path was released; these numbered cells are now blank."""
    cells: Tuple[Coordinate, ...]


@dataclass(frozen=True)
class NoMoreMoves(EngineEvent):
    """Numbers remain but no clearing path exists."""


@dataclass(frozen=True)
class BoardEmpty(EngineEvent):
    """Every numbered cell has been cleared."""


@dataclass(frozen=True)
class BoardReady(EngineEvent):
    """
    A new board was installed.

    Attributes:
        size: Board side n
        move_count: Independent moves reported by generation (0 for fixed boards)
        is_fallback: Generation could not satisfy every gate
        warnings: Non-fatal generation diagnostics
    """
    size: int
    move_count: int = 0
    is_fallback: bool = False
    warnings: Tuple[str, ...] = ()


EngineListener = Callable[[EngineEvent], None]
