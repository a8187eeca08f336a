"""
Level Module - Hand-authored boards stored as JSON.

A level either asks for an auto-generated board of side n, or carries a
fixed row-major cell list (-1 = blank, 1..k = number).
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np

from sumpath.solver import BLANK, MAX_SIZE, MAX_VALUE, MIN_SIZE, Grid

logger = logging.getLogger(__name__)


@dataclass
class LevelData:
    """
    Level definition.

    Attributes:
        n: Board side
        k: Largest number on the board
        use_auto_generation: Generate a board instead of using initial_board
        initial_board: Row-major cells, length n*n
    """
    n: int = 3
    k: int = 3
    use_auto_generation: bool = False
    initial_board: List[int] = field(default_factory=list)

    def get(self, x: int, y: int) -> int:
        """Cell value, or BLANK when the board list does not match n*n."""
        if len(self.initial_board) != self.n * self.n:
            return BLANK
        return self.initial_board[y * self.n + x]

    def normalized(self) -> "LevelData":
        """
        Copy with n and k clamped and the board padded/trimmed to n*n.

        Cells outside 1..k become BLANK.

        Returns:
            New LevelData instance
        """
        n = max(MIN_SIZE, min(MAX_SIZE, int(self.n)))
        k = max(1, min(MAX_VALUE, int(self.k)))
        size = n * n
        board = [int(v) for v in self.initial_board[:size]]
        board = [v if 1 <= v <= k else BLANK for v in board]
        board.extend([BLANK] * (size - len(board)))
        return LevelData(n=n, k=k, use_auto_generation=self.use_auto_generation,
                         initial_board=board)

    def to_grid(self) -> Grid:
        """Fixed board as a Grid (no permanent hole)."""
        level = self.normalized()
        values = np.array(level.initial_board, dtype=np.int8).reshape(level.n, level.n)
        return Grid(values)


def load_level(path: Path) -> Optional[LevelData]:
    """
    Load a level from JSON.

    Args:
        path: Level file

    Returns:
        Normalized LevelData, or None if the file is missing or invalid
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Level file not found: {path}")
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        level = LevelData(
            n=data.get("n", 3),
            k=data.get("k", 3),
            use_auto_generation=bool(data.get("use_auto_generation", False)),
            initial_board=list(data.get("initial_board", [])),
        ).normalized()
        logger.debug(f"Level loaded: {path} ({level.n}x{level.n})")
        return level

    except (json.JSONDecodeError, OSError, AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Failed to load level {path}: {e}")
        return None
