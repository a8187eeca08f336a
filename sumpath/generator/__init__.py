"""
Generator Package - Board generation with difficulty shaping.

Public API:
    - BoardGenerator: Full generation pipeline with retries and fallback
    - GenerationParams: Difficulty and budget knobs
    - GenerationResult: Generated board plus diagnostics
    - limit_easy_pairs(): Easy-pair reduction
    - select_gate(): Exact-count or planting move-count strategy
"""

from .params import GenerationParams, required_path_count
from .easy_pairs import collect_easy_pairs, limit_easy_pairs, pick_non_easy_value
from .move_count import (
    ExactCountGate,
    GateResult,
    MoveCountGate,
    PlantingGate,
    decompose_sum,
    plant_path,
    plant_paths,
    select_gate,
)
from .board_generator import BoardGenerator, GenerationResult, fill_random

__all__ = [
    "BoardGenerator",
    "ExactCountGate",
    "GateResult",
    "GenerationParams",
    "GenerationResult",
    "MoveCountGate",
    "PlantingGate",
    "collect_easy_pairs",
    "decompose_sum",
    "fill_random",
    "limit_easy_pairs",
    "pick_non_easy_value",
    "plant_path",
    "plant_paths",
    "required_path_count",
    "select_gate",
]
