"""
Error types raised by the Minesweeper engine.

All of them are local validation failures: they are raised before any
state is touched, so the engine is unchanged when one propagates.
"""


class MinesweeperError(Exception):
    """Base class for engine errors."""


class OutOfBounds(MinesweeperError, IndexError):
    """A coordinate lies outside the active board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board settings that cannot produce a playable board."""


class UnknownLevel(MinesweeperError, KeyError):
    """A difficulty identifier that has no level setting."""

    def __init__(self, level_id: str) -> None:
        super().__init__(level_id)
        self.level_id = level_id

    def __str__(self) -> str:
        return f"Unknown level: {self.level_id!r}"
