"""
Tests for the host-facing engine: events, move cache and board setup.

Usage:
    pytest tests/test_engine.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sumpath import (
    BoardEmpty,
    BoardReady,
    CellsRemoved,
    EngineSettings,
    LevelData,
    NoMoreMoves,
    PathChanged,
    PuzzleEngine,
)
from sumpath.solver import DirectSearchOracle, Grid, NumberGraphOracle


def make_engine(rows=None, **settings):
    engine = PuzzleEngine(EngineSettings(**settings), seed=0)
    events = []
    engine.subscribe(events.append)
    if rows is not None:
        engine.load_board(Grid.from_rows(rows))
    return engine, events


def drag(engine, *cells):
    assert engine.on_cell_pointer_down(cells[0])
    for cell in cells[1:]:
        assert engine.on_cell_pointer_enter(cell)
    return engine.on_drag_released()


def test_no_board_ignores_input():
    engine, events = make_engine()

    assert engine.grid is None
    assert not engine.on_cell_pointer_down((0, 0))
    assert not engine.on_cell_pointer_enter((0, 0))
    assert engine.on_drag_released() == []
    assert engine.request_hint() is None
    assert not engine.has_any_move()
    assert events == []


def test_load_board_emits_ready():
    engine, events = make_engine([[3, 7], [-1, 2]])

    assert events == [BoardReady(size=2)]
    assert isinstance(engine.oracle, DirectSearchOracle)


def test_clear_then_no_more_moves():
    engine, events = make_engine([[3, 7], [-1, 2]])

    cleared = drag(engine, (0, 0), (1, 0))

    assert cleared == [(0, 0), (1, 0)]
    domain = [e for e in events if not isinstance(e, (PathChanged, BoardReady))]
    assert domain == [CellsRemoved(((0, 0), (1, 0))), NoMoreMoves()]
    assert not engine.is_board_empty


def test_clear_last_numbers_reports_empty_board():
    engine, events = make_engine([[3, -1], [-1, 7]])

    drag(engine, (0, 0), (1, 1))

    assert engine.is_board_empty
    assert isinstance(events[-1], BoardEmpty)
    assert not any(isinstance(e, NoMoreMoves) for e in events)


def test_failed_release_emits_nothing_but_reset():
    engine, events = make_engine([[3, 6], [-1, -1]])

    assert drag(engine, (0, 0), (1, 0)) == []
    assert isinstance(events[-1], PathChanged)
    assert events[-1].path.cells == ()
    assert engine.grid.value(0, 0) == 3


def test_move_cache_follows_grid_revision():
    engine, _ = make_engine([[3, 7], [-1, -1]])

    assert engine.has_any_move()
    assert engine.has_any_move()

    engine.grid.set_value(1, 0, 8)
    assert not engine.has_any_move()

    engine.invalidate_move_cache()
    assert not engine.has_any_move()


def test_request_hint():
    engine, _ = make_engine([[4, -1], [-1, 6]])
    hint = engine.request_hint()

    assert hint.is_clearable()
    assert hint.cells[0] == (0, 0)
    assert hint.cells[-1] == (1, 1)


def test_setup_board_clamps_size():
    engine, events = make_engine()

    result = engine.setup_board(1)
    assert engine.grid.size == 2
    assert result.grid is engine.grid
    assert events[-1].size == 2
    assert engine.last_generation is result

    engine.setup_board(6)
    assert isinstance(engine.oracle, NumberGraphOracle)


def test_setup_board_replaces_drag():
    engine, _ = make_engine([[3, 7], [-1, -1]])
    engine.on_cell_pointer_down((0, 0))
    old_session = engine.session

    engine.setup_board(3)

    assert not old_session.is_dragging
    assert not engine.session.is_dragging


def test_lock_axis_setting_reaches_session():
    engine, _ = make_engine([[1, 1], [1, 1]], lock_axis=True)
    assert engine.session.lock_axis

    engine.on_cell_pointer_down((0, 0))
    assert engine.on_cell_pointer_enter((1, 0))
    assert not engine.on_cell_pointer_enter((1, 1))


def test_load_fixed_level():
    engine, events = make_engine()
    engine.load_level(LevelData(n=2, k=9, initial_board=[3, 7, -1, -1]))

    assert engine.grid.to_list() == [[3, 7], [-1, -1]]
    assert engine.has_any_move()
    assert events == [BoardReady(size=2)]


def test_load_auto_level():
    engine, events = make_engine()
    engine.load_level(LevelData(n=3, use_auto_generation=True))

    assert engine.grid.size == 3
    assert engine.grid.hole == (1, 1)
    assert isinstance(events[-1], BoardReady)


def test_seeded_engines_generate_same_board():
    first = PuzzleEngine(seed=21)
    second = PuzzleEngine(seed=21)
    assert first.setup_board(3).grid == second.setup_board(3).grid


def test_unsubscribe():
    engine, events = make_engine()
    engine.unsubscribe(events.append)
    engine.load_board(Grid.from_rows([[1, 9], [9, 1]]))
    assert events == []


def test_setup_board_defaults_to_configured_size():
    engine, events = make_engine(board_size=4)

    result = engine.setup_board()

    assert result.grid.size == 4
    assert events[-1].size == 4
