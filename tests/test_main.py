"""
Tests for the console host entry point.

Usage:
    pytest tests/test_main.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from sumpath import EngineSettings


def test_logging_configured_before_settings_load(monkeypatch):
    calls = []

    def fake_logging(debug, log_file=None):
        calls.append("logging")

    def fake_settings(path):
        calls.append("settings")
        return EngineSettings()

    monkeypatch.setattr(main, "configure_logging", fake_logging)
    monkeypatch.setattr(main, "load_settings", fake_settings)

    assert main.main(["--generate-only", "--size", "2", "--seed", "1"]) == 0
    assert calls == ["logging", "settings"]


def test_oracle_flag_overrides_settings(monkeypatch):
    seen = []
    monkeypatch.setattr(main, "configure_logging", lambda debug, log_file=None: None)
    monkeypatch.setattr(main, "load_settings", lambda path: EngineSettings())

    real_engine = main.PuzzleEngine

    def recording_engine(settings, seed=None):
        seen.append(settings.oracle)
        return real_engine(settings, seed=seed)

    monkeypatch.setattr(main, "PuzzleEngine", recording_engine)

    assert main.main(["--generate-only", "--size", "3", "--oracle", "graph"]) == 0
    assert seen == ["graph"]


def test_oracle_choices_come_from_registry():
    assert main.parse_args(["--oracle", "dfs"]).oracle == "dfs"
    assert main.parse_args([]).oracle is None
