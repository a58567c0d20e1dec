"""
Unit tests for Cell class.

Tests cell state management, reveal/mark behavior, and observation codes.
"""
import pytest
from minesweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_no_value(self) -> None:
        """Value stays unset until the board is generated."""
        cell = Cell()
        assert cell.value is None
        assert cell.is_mine is False

    def test_mine_cell_creation(self, mine_cell: Cell) -> None:
        """A value of -1 marks a mine."""
        assert mine_cell.is_mine is True


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    @pytest.mark.parametrize("state", [CellState.FLAGGED, CellState.QUESTION])
    def test_reveal_marked_cell_returns_false(self, state: CellState) -> None:
        """Marked cells cannot be revealed."""
        cell = Cell(state=state, value=0)
        assert cell.reveal() is False
        assert cell.state == state


# ============================================================================
# Cell Mark Tests
# ============================================================================

class TestCellMark:
    """Test the hidden -> flagged -> question -> hidden cycle."""

    @pytest.mark.parametrize(
        "start, expected",
        [
            (CellState.HIDDEN, CellState.FLAGGED),
            (CellState.FLAGGED, CellState.QUESTION),
            (CellState.QUESTION, CellState.HIDDEN),
        ],
    )
    def test_cycle_advances_one_step(
        self, start: CellState, expected: CellState
    ) -> None:
        """Each call moves to the next mark."""
        cell = Cell(state=start, value=0)
        assert cell.cycle_mark() == expected
        assert cell.state == expected

    def test_three_cycles_return_to_start(self, hidden_cell: Cell) -> None:
        """The cycle has length three."""
        for _ in range(3):
            hidden_cell.cycle_mark()
        assert hidden_cell.is_hidden is True

    def test_cycle_revealed_cell_returns_none(self, hidden_cell: Cell) -> None:
        """Cannot mark a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.cycle_mark() is None
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test integer observation codes."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        """Flagged cell should return -2."""
        hidden_cell.cycle_mark()
        assert hidden_cell.to_observation() == -2

    def test_question_cell_observation_is_negative_three(
        self, hidden_cell: Cell
    ) -> None:
        """Question-marked cell should return -3."""
        hidden_cell.cycle_mark()
        hidden_cell.cycle_mark()
        assert hidden_cell.to_observation() == -3

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_value(self, count: int) -> None:
        """Revealed cell returns its adjacent mine count."""
        cell = Cell(value=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
