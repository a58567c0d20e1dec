"""
Read-only view of the engine for rendering layers.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .clock import format_seconds

if TYPE_CHECKING:
    from .engine import MatchState


@dataclass(frozen=True)
class CellView:
    """
    What a renderer may know about one cell.

    ``value`` is None for a cell that is not revealed while the match is
    still running.
    """

    state: CellState
    value: Optional[int]

    @classmethod
    def of(cls, cell: Cell, show_value: bool) -> "CellView":
        """Build a view, hiding the value unless allowed."""
        if cell.is_revealed or show_value:
            return cls(cell.state, cell.value)
        return cls(cell.state, None)

    def to_observation(self) -> int:
        """Integer code, see ``Cell.to_observation``."""
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.QUESTION:
            return -3
        if self.state == CellState.HIDDEN or self.value is None:
            return -1
        if self.value < 0:
            return 9
        return self.value


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable picture of the engine at one moment."""

    cells: Tuple[Tuple[CellView, ...], ...]
    state: "MatchState"
    elapsed: int
    remaining_mines: int
    flag_count: int
    level_id: str
    rows: int
    cols: int
    mine_count: int
    best_time: Optional[int]

    @property
    def elapsed_display(self) -> str:
        """Elapsed time as mm:ss."""
        return format_seconds(self.elapsed)

    @property
    def best_time_display(self) -> str:
        """Best time as mm:ss, or --:-- when there is none."""
        return format_seconds(self.best_time)

    def cell(self, row: int, col: int) -> CellView:
        """View of the cell at (row, col)."""
        return self.cells[row][col]

    def to_array(self) -> np.ndarray:
        """
        Get board as numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = question mark
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        grid = np.full((self.rows, self.cols), -1, dtype=np.int8)
        for row, line in enumerate(self.cells):
            for col, view in enumerate(line):
                grid[row, col] = view.to_observation()
        return grid
