"""
Pytest configuration and shared fixtures.
"""
import itertools
import random
import sys
from pathlib import Path
from typing import Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    Cell,
    EngineConfig,
    GameEngine,
    LevelSetting,
    ManualScheduler,
    MemoryRecordStore,
)


# ============================================================================
# Helpers
# ============================================================================

class ScriptedRandom(random.Random):
    """Random source whose ``randrange`` replays fixed positions forever."""

    def __init__(self, positions: Iterable[Tuple[int, int]]) -> None:
        super().__init__(0)
        flat = [value for position in positions for value in position]
        self._values = itertools.cycle(flat)

    def randrange(self, *args, **kwargs) -> int:
        return next(self._values)


TINY = LevelSetting("tiny", 2, 2, 1)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def wall_board() -> Board:
    """
    3x5 board with a column of mines in the middle.

    Values:
        0 2 * 2 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return Board.from_layout(3, 5, [(0, 2), (1, 2), (2, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board.from_layout(5, 5, [])


@pytest.fixture
def corner_board() -> Board:
    """2x2 board with one mine at (0, 0)."""
    return Board.from_layout(2, 2, [(0, 0)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell with no adjacent mines."""
    return Cell(value=0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(value=-1)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def scripted_random():
    """Factory for random sources that place mines at fixed positions."""
    return ScriptedRandom


@pytest.fixture
def tiny_setting() -> LevelSetting:
    """2x2 level with a single mine."""
    return TINY


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Clock source that only moves when advanced."""
    return ManualScheduler()


@pytest.fixture
def records() -> MemoryRecordStore:
    """Empty in-memory record store."""
    return MemoryRecordStore()


@pytest.fixture
def engine(scheduler: ManualScheduler, records: MemoryRecordStore) -> GameEngine:
    """Beginner engine with a seeded random source."""
    return GameEngine(
        records=records, scheduler=scheduler, rng=random.Random(1234)
    )


@pytest.fixture
def tiny_engine(
    scheduler: ManualScheduler, records: MemoryRecordStore
) -> GameEngine:
    """2x2 engine whose only mine always lands on (0, 0)."""
    engine = GameEngine(
        records=records, scheduler=scheduler, rng=ScriptedRandom([(0, 0)])
    )
    engine.select_setting(TINY)
    return engine


@pytest.fixture
def restart_engine(
    scheduler: ManualScheduler, records: MemoryRecordStore
) -> GameEngine:
    """2x2 engine that restarts when a finished board is clicked."""
    engine = GameEngine(
        EngineConfig(restart_on_finished_reveal=True),
        records=records,
        scheduler=scheduler,
        rng=ScriptedRandom([(0, 0)]),
    )
    engine.select_setting(TINY)
    return engine
