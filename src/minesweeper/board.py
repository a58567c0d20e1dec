"""
Board module for Minesweeper game.

Implements the grid of cells, mine placement, neighbour counting
and the reveal/mark primitives the engine drives.
"""
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from .cell import MINE, Cell, CellState
from .errors import OutOfBounds
from .levels import validate_dimensions


Position = Tuple[int, int]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    A fresh board is built for every match; cell values never change
    once generation has finished.
    """

    rows: int
    cols: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._grid = [
                [Cell() for _ in range(self.cols)]
                for _ in range(self.rows)
            ]

    # ========================================================================
    # Generation (Low-level)
    # ========================================================================

    @classmethod
    def generate(
        cls,
        rows: int,
        cols: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """
        Build a board with mines placed by rejection sampling.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mine_count: Mines to place.
            rng: Random source (a fresh unseeded one if omitted).

        Returns:
            Board with every cell value set.

        Raises:
            InvalidConfiguration: If the settings cannot be satisfied.
        """
        validate_dimensions(rows, cols, mine_count)
        if rng is None:
            rng = random.Random()
        board = cls(rows, cols)
        placed = 0
        while placed < mine_count:
            row = rng.randrange(rows)
            col = rng.randrange(cols)
            cell = board._grid[row][col]
            if not cell.is_mine:
                cell.value = MINE
                placed += 1
        board._calculate_adjacent_mines()
        return board

    @classmethod
    def generate_safe(
        cls,
        rows: int,
        cols: int,
        mine_count: int,
        safe: Position,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """
        Build a board on which the ``safe`` cell holds no mine.

        Regenerates until the condition holds, which keeps every valid
        layout equally likely.
        """
        if rng is None:
            rng = random.Random()
        while True:
            board = cls.generate(rows, cols, mine_count, rng)
            if not board.get_cell(*safe).is_mine:
                return board

    @classmethod
    def from_layout(
        cls, rows: int, cols: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with mines at fixed positions.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mines: (row, col) positions of every mine.
        """
        board = cls(rows, cols)
        for row, col in mines:
            board._check_position(row, col)
            board._grid[row][col].value = MINE
        validate_dimensions(rows, cols, board.mine_count)
        board._calculate_adjacent_mines()
        return board

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row, col, cell in self.cells():
            if not cell.is_mine:
                cell.value = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the Moore neighbourhood,
            clipped at the board edges.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_position(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)

    # ========================================================================
    # Cell Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> List[Position]:
        """
        Reveal a cell, flooding outward from empty cells.

        A zero-valued cell opens every hidden neighbour; neighbours that
        are zero themselves keep expanding, numbered ones stop the
        flood. Flagged and question-marked cells are left closed.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Positions revealed by this call, in reveal order. Empty if
            the target was not hidden.
        """
        self._check_position(row, col)
        if not self._grid[row][col].reveal():
            return []

        revealed = [(row, col)]
        stack = [(row, col)] if self._grid[row][col].value == 0 else []
        while stack:
            current_row, current_col = stack.pop()
            for neighbor_row, neighbor_col in self.neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.reveal():
                    continue
                revealed.append((neighbor_row, neighbor_col))
                if neighbor.value == 0:
                    stack.append((neighbor_row, neighbor_col))
        return revealed

    def cycle_mark(self, row: int, col: int) -> Optional[CellState]:
        """
        Advance the hidden -> flagged -> question -> hidden cycle.

        Returns:
            The cell's new state, or None if it is revealed.
        """
        self._check_position(row, col)
        return self._grid[row][col].cycle_mark()

    def reveal_mines(self) -> List[Position]:
        """
        Reveal every mine that is not flagged.

        Flags stay in place so correct and wrong flags can be told apart
        after a loss.

        Returns:
            Positions of the mines revealed.
        """
        revealed = []
        for row, col, cell in self.cells():
            if cell.is_mine and not cell.is_flagged:
                cell.state = CellState.REVEALED
                revealed.append((row, col))
        return revealed

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self._check_position(row, col)
        return self._grid[row][col]

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Iterate over (row, col, cell) in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col, self._grid[row][col]

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return sum(1 for _, _, cell in self.cells() if cell.is_mine)

    @property
    def is_cleared(self) -> bool:
        """
        Check the win condition.

        Every non-mine cell is revealed and no mine is revealed.
        """
        for _, _, cell in self.cells():
            if cell.is_mine == cell.is_revealed:
                return False
        return True

    @property
    def mine_revealed(self) -> bool:
        """Check if any mine has been revealed."""
        return any(
            cell.is_mine and cell.is_revealed for _, _, cell in self.cells()
        )
