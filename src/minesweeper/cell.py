"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their state
(hidden/revealed/flagged/question) and value (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

MINE = -1


class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()
    QUESTION = auto()


# Marking cycle: hidden -> flagged -> question -> hidden
_NEXT_MARK = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.QUESTION,
    CellState.QUESTION: CellState.HIDDEN,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        state: Current visual state.
        value: None before generation, -1 for a mine, otherwise the
            number of mines in the surrounding cells (0-8).
    """

    state: CellState = CellState.HIDDEN
    value: Optional[int] = None

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if it was not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def cycle_mark(self) -> Optional[CellState]:
        """
        Advance the marking cycle.

        Returns:
            The new state, or None if the cell is already revealed.
        """
        if self.state == CellState.REVEALED:
            return None
        self.state = _NEXT_MARK[self.state]
        return self.state

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self.value == MINE

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_question(self) -> bool:
        """Check if cell carries a question mark."""
        return self.state == CellState.QUESTION

    def to_observation(self) -> int:
        """
        Convert cell to a compact integer code for renderers.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Question-marked cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.QUESTION:
            return -3
        if self.is_mine:
            return 9
        return self.value
