"""
Settings Module for the Sum to 10 path engine

Provides persistent storage for engine configuration using JSON.
Settings are stored in config.json in the working directory by default.
Out-of-range values are clamped rather than rejected.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from sumpath.generator import GenerationParams
from sumpath.solver import AUTO, MAX_SIZE, MAX_VALUE, MIN_SIZE, TARGET_SUM, get_oracle_names

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class EngineSettings:
    """
    Every recognized engine option.

    Board:
        board_size, max_value, target_sum, lock_axis
    Generation:
        max_easy_pairs, easy_pair_safety, max_generation_attempts,
        generation_timeout_sec, planting_threshold, min_path_tiers,
        plant_length_range, plant_attempts_per_path,
        enumeration_max_steps, enumeration_timeout_sec, disjoint_max_steps
    Search:
        oracle, graph_oracle_threshold, oracle_max_steps, oracle_timeout_sec,
        hint_max_steps, hint_timeout_sec
    Host:
        max_wave_size, debug_enabled
    """
    board_size: int = 3
    max_value: int = MAX_VALUE
    target_sum: int = TARGET_SUM
    lock_axis: bool = False

    max_easy_pairs: int = 4
    easy_pair_safety: int = 200
    max_generation_attempts: int = 20
    generation_timeout_sec: float = 2.0
    planting_threshold: int = 6
    min_path_tiers: Tuple[Tuple[int, int], ...] = ((3, 2), (5, 3), (7, 4), (10, 5))
    plant_length_range: Tuple[int, int] = (2, 4)
    plant_attempts_per_path: int = 10
    enumeration_max_steps: int = 50_000
    enumeration_timeout_sec: float = 0.1
    disjoint_max_steps: int = 20_000

    oracle: str = AUTO
    graph_oracle_threshold: int = 6
    oracle_max_steps: int = 100_000
    oracle_timeout_sec: float = 1.0
    hint_max_steps: int = 10_000
    hint_timeout_sec: float = 1.0

    max_wave_size: int = 8
    debug_enabled: bool = False

    def __post_init__(self):
        self.board_size = clamp(int(self.board_size), MIN_SIZE, MAX_SIZE)
        self.max_wave_size = clamp(int(self.max_wave_size), MIN_SIZE, MAX_SIZE)
        self.max_value = clamp(int(self.max_value), 1, MAX_VALUE)
        self.max_generation_attempts = max(1, int(self.max_generation_attempts))
        self.easy_pair_safety = max(0, int(self.easy_pair_safety))
        self.min_path_tiers = tuple(
            (int(size), int(count)) for size, count in self.min_path_tiers
        )
        low, high = (int(v) for v in self.plant_length_range)
        low = max(2, low)
        self.plant_length_range = (low, max(low, high))
        if self.oracle != AUTO and self.oracle not in get_oracle_names():
            logger.warning(f"Unknown oracle '{self.oracle}' in settings, using '{AUTO}'")
            self.oracle = AUTO

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        """
        Build settings from a plain dict, ignoring unknown keys.

        Args:
            data: Parsed JSON object

        Returns:
            EngineSettings with defaults for missing keys
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["min_path_tiers"] = [list(t) for t in self.min_path_tiers]
        data["plant_length_range"] = list(self.plant_length_range)
        return data

    def generation_params(self) -> GenerationParams:
        """Generation knobs derived from these settings."""
        return GenerationParams(
            target_sum=self.target_sum,
            max_value=self.max_value,
            max_easy_pairs=self.max_easy_pairs,
            easy_pair_safety=self.easy_pair_safety,
            max_attempts=self.max_generation_attempts,
            timeout_sec=self.generation_timeout_sec,
            planting_threshold=self.planting_threshold,
            min_path_tiers=self.min_path_tiers,
            plant_length_range=self.plant_length_range,
            plant_attempts_per_path=self.plant_attempts_per_path,
            enumeration_max_steps=self.enumeration_max_steps,
            enumeration_timeout_sec=self.enumeration_timeout_sec,
            disjoint_max_steps=self.disjoint_max_steps,
            oracle=self.oracle,
            graph_oracle_threshold=self.graph_oracle_threshold,
        )


# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = EngineSettings().to_dict()


def load_settings(path: Optional[Path] = None) -> EngineSettings:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (default: config.json)

    Returns:
        EngineSettings. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return EngineSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        loaded = EngineSettings.from_dict(result)
        logger.debug(f"Settings loaded: {loaded}")
        return loaded

    except (json.JSONDecodeError, OSError, TypeError, ValueError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return EngineSettings()


def save_settings(settings: EngineSettings, path: Optional[Path] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings to save
        path: Settings file (default: config.json)
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.debug(f"Settings saved: {path}")
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
