"""
Sum to 10 Path Puzzle - Console Entry Point

Runs the puzzle engine in a terminal. Cells are addressed as "x y"
(column, row), starting from 0 at the top-left corner.

Commands:
    d x y   pointer down on a cell
    e x y   pointer enters a cell (drag)
    u       release the drag
    h       show a hint
    n       new board of the current size
    p       print the board
    q       quit

Example:
    python main.py
    python main.py --size 6 --seed 7 --lock-axis
    python main.py --generate-only --size 8
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional, Set

from sumpath import (
    BoardEmpty,
    BoardReady,
    CellsRemoved,
    EngineEvent,
    NoMoreMoves,
    PathChanged,
    PuzzleEngine,
    load_level,
    load_settings,
)
from sumpath.solver import AUTO, Coordinate, get_oracle_info, get_oracle_names


logger = logging.getLogger(__name__)


def configure_logging(debug: bool, log_file: Optional[Path] = None) -> None:
    """Console output, plus a log file when requested."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


class Application:
    """
    Console host for the engine.

    Translates typed commands into pointer events, prints engine events
    and advances to a larger board (up to max_wave_size) whenever the
    current one is emptied or runs out of moves.
    """

    def __init__(self, engine: PuzzleEngine, size: int):
        """
        Initialize the application.

        Args:
            engine: Configured engine
            size: First board size
        """
        self.engine = engine
        self.size = size
        self.max_wave_size = engine.settings.max_wave_size
        self.path: Set[Coordinate] = set()
        self.hint: Set[Coordinate] = set()
        self._wave_over = False

        engine.subscribe(self._on_event)

    def _on_event(self, event: EngineEvent) -> None:
        if isinstance(event, PathChanged):
            self.path = set(event.path.cells)
            if event.path.cells:
                print(f"  path: {list(event.path.cells)} "
                      f"sum={event.path.total} numbers={event.path.number_count}")
        elif isinstance(event, CellsRemoved):
            print(f"  cleared {len(event.cells)} cells")
        elif isinstance(event, (BoardEmpty, NoMoreMoves)):
            reason = "board cleared" if isinstance(event, BoardEmpty) else "no more moves"
            print(f"  wave over: {reason}")
            self._wave_over = True
        elif isinstance(event, BoardReady):
            if event.is_fallback:
                for warning in event.warnings:
                    print(f"  warning: {warning}")

    def render(self) -> str:
        """Board as text; path cells in [], hint cells in <>."""
        grid = self.engine.grid
        if grid is None:
            return "(no board)"

        lines = ["     " + " ".join(f"{x:^3}" for x in range(grid.size))]
        for y in range(grid.size):
            row = []
            for x in range(grid.size):
                value = grid.value(x, y)
                text = str(value) if value > 0 else "."
                if (x, y) in self.path:
                    text = f"[{text}]"
                elif (x, y) in self.hint:
                    text = f"<{text}>"
                row.append(f"{text:^3}")
            lines.append(f"{y:>3}  " + " ".join(row))
        return "\n".join(lines)

    def new_board(self) -> None:
        self.hint = set()
        self.path = set()
        self._wave_over = False
        self.engine.setup_board(self.size)
        print(self.render())

    def next_wave(self) -> None:
        self.size = min(self.size + 1, self.max_wave_size)
        print(f"  next wave: {self.size}x{self.size}")
        self.new_board()

    def handle(self, line: str) -> bool:
        """
        Execute one command.

        Returns:
            False when the user asked to quit
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command == "q":
            return False

        if command in ("d", "e"):
            try:
                cell = (int(args[0]), int(args[1]))
            except (IndexError, ValueError):
                print("  usage: d x y | e x y")
                return True
            self.hint = set()
            if command == "d":
                accepted = self.engine.on_cell_pointer_down(cell)
            else:
                accepted = self.engine.on_cell_pointer_enter(cell)
            if not accepted:
                print(f"  ignored {cell}")
        elif command == "u":
            self.engine.on_drag_released()
            print(self.render())
            if self._wave_over:
                self.next_wave()
        elif command == "h":
            hint = self.engine.request_hint()
            if hint is None:
                print("  no hint available")
            else:
                self.hint = set(hint.cells)
                print(self.render())
        elif command == "n":
            self.new_board()
        elif command == "p":
            print(self.render())
        else:
            print("  commands: d x y, e x y, u, h, n, p, q")
        return True

    def run(self, new_board: bool = True) -> int:
        """
        Run the command loop.

        Args:
            new_board: Generate a board first (False when one is already loaded)

        Returns:
            Exit code
        """
        if new_board:
            self.new_board()
        else:
            print(self.render())
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            if not self.handle(line):
                break
        return 0


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sum to 10 Path Puzzle - console host for the puzzle engine"
    )
    parser.add_argument("--size", "-s", type=int, help="Board size (2-10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--lock-axis", action="store_true", help="Forbid turning while dragging")
    oracles = "; ".join(f"{o['name']}: {o['description']}" for o in get_oracle_info())
    parser.add_argument(
        "--oracle",
        choices=[AUTO] + get_oracle_names(),
        help=f"Move-existence search (default: from settings). {oracles}"
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=Path("config.json"),
        help="Settings file (default: config.json)"
    )
    parser.add_argument("--level", type=Path, help="Level JSON file to play instead of a generated board")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging (overrides saved setting)"
    )
    parser.add_argument(
        "--generate-only",
        action="store_true",
        help="Generate one board, print it and exit"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Initialize and run the console host."""
    args = parse_args(argv)

    configure_logging(args.debug, args.log_file)

    settings = load_settings(args.settings)
    if settings.debug_enabled:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.lock_axis:
        settings.lock_axis = True
    if args.oracle is not None:
        settings.oracle = args.oracle

    engine = PuzzleEngine(settings, seed=args.seed)
    size = args.size if args.size is not None else settings.board_size
    application = Application(engine, size)

    if args.generate_only:
        result = engine.setup_board(size)
        print(application.render())
        print(f"moves: {result.move_count}/{result.required_moves}, "
              f"attempts: {result.attempts}, fallback: {result.is_fallback}")
        return 0

    if args.level is not None:
        level = load_level(args.level)
        if level is None:
            logger.error(f"Could not load level: {args.level}")
            return 1
        engine.load_level(level)
        application.size = level.n
        return application.run(new_board=False)

    return application.run()


if __name__ == "__main__":
    sys.exit(main())
