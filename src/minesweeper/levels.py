"""
Difficulty presets for the Minesweeper engine.

Maps a level identifier to board dimensions and mine count.
"""
from dataclasses import dataclass
from typing import Dict

from .errors import InvalidConfiguration, UnknownLevel


# ============================================================================
# Level Setting
# ============================================================================

@dataclass(frozen=True)
class LevelSetting:
    """
    Board settings for one difficulty level.

    Attributes:
        level_id: Identifier used for lookup and record keys.
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    level_id: str
    rows: int
    cols: int
    mine_count: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        validate_dimensions(self.rows, self.cols, self.mine_count)

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols


def validate_dimensions(rows: int, cols: int, mine_count: int) -> None:
    """
    Ensure a board of this size can be generated.

    Raises:
        InvalidConfiguration: If dimensions are not positive, the mine
            count is negative, or there is no room for a safe cell.
    """
    if rows < 1 or cols < 1:
        raise InvalidConfiguration("Board dimensions must be positive")
    if mine_count < 0:
        raise InvalidConfiguration("Number of mines cannot be negative")
    if mine_count >= rows * cols:
        raise InvalidConfiguration(
            f"Too many mines (max {rows * cols - 1})"
        )


# Preset difficulty levels
BEGINNER = LevelSetting("beginner", 9, 9, 10)
INTERMEDIATE = LevelSetting("intermediate", 16, 16, 40)
EXPERT = LevelSetting("expert", 16, 30, 99)
CLASSIC = LevelSetting("classic", 9, 9, 9)

LEVELS: Dict[str, LevelSetting] = {
    level.level_id: level
    for level in (BEGINNER, INTERMEDIATE, EXPERT, CLASSIC)
}


def get_level(level_id: str) -> LevelSetting:
    """
    Look up a preset by identifier.

    Raises:
        UnknownLevel: If no preset has this identifier.
    """
    try:
        return LEVELS[level_id]
    except KeyError:
        raise UnknownLevel(level_id) from None
