"""
Minesweeper rules engine.

Provides board generation, reveal and marking rules, the match state
machine, the game clock and best-time records.
"""
from .cell import Cell, CellState, MINE
from .board import Board
from .clock import (
    GameClock,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
    TimerHandle,
    format_seconds,
)
from .engine import EngineConfig, GameEngine, MatchState
from .errors import InvalidConfiguration, MinesweeperError, OutOfBounds, UnknownLevel
from .levels import BEGINNER, CLASSIC, EXPERT, INTERMEDIATE, LEVELS, LevelSetting, get_level
from .records import JsonRecordStore, MemoryRecordStore, RecordStore, record_key
from .snapshot import CellView, GameSnapshot

__all__ = [
    "Cell",
    "CellState",
    "MINE",
    "Board",
    "GameClock",
    "ManualScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
    "format_seconds",
    "EngineConfig",
    "GameEngine",
    "MatchState",
    "InvalidConfiguration",
    "MinesweeperError",
    "OutOfBounds",
    "UnknownLevel",
    "BEGINNER",
    "CLASSIC",
    "EXPERT",
    "INTERMEDIATE",
    "LEVELS",
    "LevelSetting",
    "get_level",
    "JsonRecordStore",
    "MemoryRecordStore",
    "RecordStore",
    "record_key",
    "CellView",
    "GameSnapshot",
]
