#!/usr/bin/env python3
"""
Minesweeper - Terminal front end.

Usage:
    python main.py play [--level LEVEL] [--records PATH] [--restart-on-click]
    python main.py levels
"""
import argparse
import logging

from src.minesweeper import (
    LEVELS,
    CellState,
    EngineConfig,
    GameEngine,
    GameSnapshot,
    JsonRecordStore,
    MatchState,
    MinesweeperError,
)


HELP = """Commands:
  r ROW COL   reveal a cell
  m ROW COL   cycle mark (flag / question / none)
  n           new game
  l LEVEL     switch level
  h           show this help
  q           quit"""


def render(snapshot: GameSnapshot) -> str:
    """Render a snapshot as plain text."""
    lines = [
        f"[{snapshot.level_id}] mines: {snapshot.remaining_mines:03d}  "
        f"time: {snapshot.elapsed_display}  best: {snapshot.best_time_display}"
    ]
    width = len(str(snapshot.cols - 1))
    lines.append(" " * (width + 1) + " ".join(
        str(col).rjust(width) for col in range(snapshot.cols)
    ))
    for row, line in enumerate(snapshot.cells):
        symbols = []
        for view in line:
            if view.state == CellState.FLAGGED:
                # Wrong flags show once values are visible
                symbol = "X" if view.value is not None and view.value >= 0 else "F"
            elif view.state == CellState.QUESTION:
                symbol = "?"
            elif view.state == CellState.HIDDEN:
                symbol = "."
            elif view.value is not None and view.value < 0:
                symbol = "*"
            elif view.value == 0:
                symbol = " "
            else:
                symbol = str(view.value)
            symbols.append(symbol.rjust(width))
        lines.append(str(row).rjust(width) + " " + " ".join(symbols))
    if snapshot.state == MatchState.WIN:
        lines.append("*** WIN! ***")
    elif snapshot.state == MatchState.LOSE:
        lines.append("*** LOST (hit mine) ***")
    return "\n".join(lines)


def play(args: argparse.Namespace) -> None:
    """Run an interactive game in the terminal."""
    config = EngineConfig(
        level_id=args.level,
        restart_on_finished_reveal=args.restart_on_click,
    )
    engine = GameEngine(config, records=JsonRecordStore(args.records))
    print(HELP)
    print(render(engine.snapshot()))

    while True:
        try:
            command = input("> ").split()
        except EOFError:
            break
        if not command:
            continue

        action = command[0].lower()
        try:
            if action == "q":
                break
            elif action == "h":
                print(HELP)
                continue
            elif action == "n":
                engine.reset()
            elif action == "l" and len(command) == 2:
                engine.select_level(command[1])
            elif action in ("r", "m") and len(command) == 3:
                row, col = int(command[1]), int(command[2])
                engine.handle_press(row, col, is_secondary=action == "m")
            else:
                print(f"Unknown command: {' '.join(command)}")
                continue
        except MinesweeperError as exc:
            print(exc)
            continue
        except ValueError:
            print("Row and column must be integers")
            continue

        print(render(engine.snapshot()))

    engine.reset()


def levels(args: argparse.Namespace) -> None:
    """List the built-in levels."""
    print(f"{'Level':<14} {'Rows':>5} {'Cols':>5} {'Mines':>6}")
    print("-" * 33)
    for setting in LEVELS.values():
        print(
            f"{setting.level_id:<14} {setting.rows:>5} "
            f"{setting.cols:>5} {setting.mine_count:>6}"
        )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (e.g. INFO, DEBUG)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--level", choices=sorted(LEVELS), default="beginner", help="Difficulty"
    )
    play_parser.add_argument(
        "--records", default="records.json", help="Best-time file"
    )
    play_parser.add_argument(
        "--restart-on-click",
        action="store_true",
        help="Clicking a finished board starts a new game",
    )

    # Levels command
    subparsers.add_parser("levels", help="List difficulty levels")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "play":
        play(args)
    elif args.command == "levels":
        levels(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
