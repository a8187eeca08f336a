"""
Tests for settings persistence and level files.

Usage:
    pytest tests/test_settings.py
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sumpath.engine import PuzzleEngine
from sumpath.level import LevelData, load_level
from sumpath.settings import DEFAULT_SETTINGS, EngineSettings, load_settings, save_settings
from sumpath.solver import BLANK


def test_defaults():
    settings = EngineSettings()
    assert settings.board_size == 3
    assert settings.max_value == 9
    assert settings.target_sum == 10
    assert settings.max_easy_pairs == 4
    assert settings.oracle == "auto"
    assert DEFAULT_SETTINGS["max_wave_size"] == 8


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.json") == EngineSettings()


def test_round_trip(tmp_path):
    path = tmp_path / "config.json"
    settings = EngineSettings(board_size=7, lock_axis=True, max_easy_pairs=2,
                              min_path_tiers=((4, 2), (10, 6)))
    save_settings(settings, path)

    assert load_settings(path) == settings


def test_partial_file_merges_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"board_size": 5, "unknown_key": 1}), encoding="utf-8")

    settings = load_settings(path)
    assert settings.board_size == 5
    assert settings.max_generation_attempts == 20


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == EngineSettings()

    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_settings(path) == EngineSettings()


def test_out_of_range_values_clamped():
    settings = EngineSettings(board_size=0, max_wave_size=50, max_value=20,
                              max_generation_attempts=0, plant_length_range=(1, 0))
    assert settings.board_size == 2
    assert settings.max_wave_size == 10
    assert settings.max_value == 9
    assert settings.max_generation_attempts == 1
    assert settings.plant_length_range == (2, 2)


def test_unknown_oracle_falls_back_to_auto(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"oracle": "bogus", "board_size": 4}), encoding="utf-8")

    settings = load_settings(path)
    assert settings.oracle == "auto"
    assert EngineSettings(oracle="graph").oracle == "graph"

    engine = PuzzleEngine(settings, seed=0)
    result = engine.setup_board()
    assert result.grid.size == 4


def test_generation_params_mapping():
    settings = EngineSettings(max_generation_attempts=7, generation_timeout_sec=0.5,
                              max_value=6)
    params = settings.generation_params()
    assert params.max_attempts == 7
    assert params.timeout_sec == 0.5
    assert params.max_value == 6


def test_level_normalized():
    level = LevelData(n=12, k=9, initial_board=[1, 2, 3]).normalized()
    assert level.n == 10
    assert len(level.initial_board) == 100
    assert level.initial_board[:4] == [1, 2, 3, BLANK]

    assert LevelData(n=2, k=0).normalized().k == 1


def test_level_values_outside_range_become_blank():
    level = LevelData(n=2, k=5, initial_board=[300, 5, 6, 0]).normalized()
    assert level.initial_board == [BLANK, 5, BLANK, BLANK]

    engine = PuzzleEngine(seed=0)
    engine.load_level(LevelData(n=2, k=9, initial_board=[3, 7, 200, -5]))
    assert engine.grid.to_list() == [[3, 7], [BLANK, BLANK]]


def test_level_get():
    level = LevelData(n=2, initial_board=[1, 2, 3, 4])
    assert level.get(1, 0) == 2
    assert level.get(0, 1) == 3
    assert LevelData(n=2, initial_board=[1]).get(0, 0) == BLANK


def test_load_level(tmp_path):
    path = tmp_path / "level.json"
    path.write_text(json.dumps({
        "n": 2, "k": 9, "use_auto_generation": False,
        "initial_board": [4, -1, -1, 6],
    }), encoding="utf-8")

    level = load_level(path)
    assert level.n == 2
    assert level.to_grid().to_list() == [[4, -1], [-1, 6]]


def test_load_level_failures(tmp_path):
    assert load_level(tmp_path / "missing.json") is None

    path = tmp_path / "level.json"
    path.write_text("not json", encoding="utf-8")
    assert load_level(path) is None
