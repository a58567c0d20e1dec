"""
Game engine for Minesweeper.

Owns the board, the match state machine, the clock and the best-time
record for the selected level. Front ends drive it through a handful of
input operations and read it back through immutable snapshots.
"""
import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .board import Board
from .cell import CellState
from .clock import GameClock, Scheduler, ThreadingScheduler, format_seconds
from .errors import OutOfBounds
from .levels import LevelSetting, get_level
from .records import MemoryRecordStore, RecordStore, record_key
from .snapshot import CellView, GameSnapshot


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class MatchState(Enum):
    """Possible states of a match."""

    IDLE = "idle"
    PLAYING = "playing"
    WIN = "win"
    LOSE = "lose"

    @property
    def finished(self) -> bool:
        """Whether the match has ended."""
        return self in (MatchState.WIN, MatchState.LOSE)


@dataclass
class EngineConfig:
    """
    Configuration for a game engine.

    Attributes:
        level_id: Level selected when the engine is created.
        restart_on_finished_reveal: Whether revealing a cell after a win
            or loss starts a new match at that cell instead of doing
            nothing.
        tick_seconds: Real seconds between clock ticks.
    """

    level_id: str = "beginner"
    restart_on_finished_reveal: bool = False
    tick_seconds: float = 1.0


Observer = Callable[[GameSnapshot], None]


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Single-board Minesweeper rules engine.

    Every input operation either applies fully or leaves the engine
    untouched. Observers receive a fresh snapshot after each change and
    after each clock tick.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        records: Optional[RecordStore] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the engine in the idle state.

        Args:
            config: Engine configuration (default: beginner level).
            records: Best-time store (default: in-memory).
            scheduler: Clock tick source (default: timer thread).
            rng: Random source for mine placement.

        Raises:
            UnknownLevel: If ``config.level_id`` is not a preset.
        """
        self.config = config or EngineConfig()
        self.records = records if records is not None else MemoryRecordStore()
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._observers: List[Observer] = []
        self._clock = GameClock(
            scheduler or ThreadingScheduler(),
            interval=self.config.tick_seconds,
            on_tick=self._on_tick,
        )

        self._level = get_level(self.config.level_id)
        self._best_time: Optional[int] = None
        self._board: Optional[Board] = None
        self._state = MatchState.IDLE
        self._flag_count = 0
        self._load_level(self._level)

    # ========================================================================
    # Level Selection
    # ========================================================================

    def select_level(self, level_id: str) -> None:
        """
        Switch to a preset level and reset.

        Discards any match in progress.

        Raises:
            UnknownLevel: If the identifier is not a preset; the engine
                is unchanged.
        """
        self.select_setting(get_level(level_id))

    def select_setting(self, setting: LevelSetting) -> None:
        """Switch to an arbitrary level setting and reset."""
        with self._lock:
            self._load_level(setting)
        self._notify()

    def _load_level(self, setting: LevelSetting) -> None:
        self._level = setting
        self._best_time = self.records.get(record_key(setting.level_id))
        self._reset_state()
        logger.info(
            "Level %s selected (%dx%d, %d mines, best %s)",
            setting.level_id, setting.rows, setting.cols,
            setting.mine_count, format_seconds(self._best_time),
        )

    # ========================================================================
    # Input Operations
    # ========================================================================

    def start(self, row: int, col: int) -> None:
        """
        Start a match with a safe first reveal at (row, col).

        A match that is not idle is reset first.

        Raises:
            OutOfBounds: If the cell is outside the board.
        """
        self._check_position(row, col)
        with self._lock:
            self._start(row, col)
        self._notify()

    def reveal_cell(self, row: int, col: int) -> None:
        """
        Reveal a cell.

        Starts a match when idle. After a win or loss this either does
        nothing or starts a new match, depending on
        ``EngineConfig.restart_on_finished_reveal``.

        Raises:
            OutOfBounds: If the cell is outside the board.
        """
        self._check_position(row, col)
        with self._lock:
            if self._state == MatchState.IDLE:
                self._start(row, col)
            elif self._state.finished:
                if not self.config.restart_on_finished_reveal:
                    logger.debug("Reveal ignored, match is %s", self._state.value)
                    return
                self._start(row, col)
            elif not self._reveal(row, col):
                return
        self._notify()

    def toggle_mark(self, row: int, col: int) -> None:
        """
        Cycle the mark on a cell: hidden -> flagged -> question -> hidden.

        Only acts while a match is being played; revealed cells are left
        alone.

        Raises:
            OutOfBounds: If the cell is outside the board.
        """
        self._check_position(row, col)
        with self._lock:
            if self._state != MatchState.PLAYING:
                return
            previous = self._board.get_cell(row, col).state
            current = self._board.cycle_mark(row, col)
            if current is None:
                return
            if current == CellState.FLAGGED:
                self._flag_count += 1
            elif previous == CellState.FLAGGED:
                self._flag_count -= 1
            self._evaluate_win()
        self._notify()

    def handle_press(self, row: int, col: int, is_secondary: bool = False) -> None:
        """Dispatch a press: secondary marks, primary reveals."""
        if is_secondary:
            self.toggle_mark(row, col)
        else:
            self.reveal_cell(row, col)

    def reset(self) -> None:
        """Stop the clock and return to idle with no board."""
        with self._lock:
            self._reset_state()
        self._notify()

    # ========================================================================
    # State Machine (Low-level)
    # ========================================================================

    def _check_position(self, row: int, col: int) -> None:
        level = self._level
        if not (0 <= row < level.rows and 0 <= col < level.cols):
            raise OutOfBounds(row, col, level.rows, level.cols)

    def _start(self, row: int, col: int) -> None:
        if self._state != MatchState.IDLE:
            self._reset_state()
        level = self._level
        self._board = Board.generate_safe(
            level.rows, level.cols, level.mine_count, (row, col), self._rng
        )
        self._state = MatchState.PLAYING
        self._clock.stop()
        self._clock.start()
        logger.info("Match started on %s at (%d, %d)", level.level_id, row, col)
        self._reveal(row, col)

    def _reveal(self, row: int, col: int) -> bool:
        revealed = self._board.reveal(row, col)
        if not revealed:
            logger.debug("Reveal of (%d, %d) ignored, cell not hidden", row, col)
            return False
        if self._board.get_cell(row, col).is_mine:
            self._finish_lose(row, col)
        else:
            self._evaluate_win()
        return True

    def _evaluate_win(self) -> None:
        if self._state == MatchState.PLAYING and self._board.is_cleared:
            self._finish_win()

    def _finish_win(self) -> None:
        self._clock.stop()
        self._state = MatchState.WIN
        elapsed = self._clock.elapsed
        logger.info("Match won on %s in %s", self._level.level_id,
                    format_seconds(elapsed))
        if self._best_time is None or elapsed < self._best_time:
            self.records.set(record_key(self._level.level_id), elapsed)
            self._best_time = elapsed
            logger.info("New record for %s: %s", self._level.level_id,
                        format_seconds(elapsed))

    def _finish_lose(self, row: int, col: int) -> None:
        self._clock.stop()
        self._state = MatchState.LOSE
        self._board.reveal_mines()
        logger.info("Match lost on %s, mine at (%d, %d)",
                    self._level.level_id, row, col)

    def _reset_state(self) -> None:
        self._clock.reset()
        self._state = MatchState.IDLE
        self._flag_count = 0
        self._board = None

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Returns:
            Function that removes the callback again.
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.snapshot()
        for callback in list(self._observers):
            callback(snapshot)

    def _on_tick(self, elapsed: int) -> None:
        self._notify()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def state(self) -> MatchState:
        """Current match state."""
        return self._state

    @property
    def level(self) -> LevelSetting:
        """Selected level setting."""
        return self._level

    @property
    def board(self) -> Optional[Board]:
        """Board of the current match, or None when idle."""
        return self._board

    @property
    def elapsed(self) -> int:
        """Whole seconds since the match started."""
        return self._clock.elapsed

    @property
    def clock_running(self) -> bool:
        """Whether the clock is ticking."""
        return self._clock.running

    @property
    def flag_count(self) -> int:
        """Number of flags on the board."""
        return self._flag_count

    @property
    def remaining_mines(self) -> int:
        """Mines minus flags, never below zero."""
        return max(self._level.mine_count - self._flag_count, 0)

    @property
    def best_time(self) -> Optional[int]:
        """Record for the selected level in seconds, if any."""
        return self._best_time

    def snapshot(self) -> GameSnapshot:
        """
        Take an immutable picture of the engine.

        Values of unrevealed cells are withheld while a match is in
        progress. When idle the grid is all hidden.
        """
        with self._lock:
            level = self._level
            if self._board is None:
                hidden = CellView(CellState.HIDDEN, None)
                cells = tuple(
                    tuple(hidden for _ in range(level.cols))
                    for _ in range(level.rows)
                )
            else:
                show_values = self._state.finished
                cells = tuple(
                    tuple(
                        CellView.of(self._board.get_cell(row, col), show_values)
                        for col in range(level.cols)
                    )
                    for row in range(level.rows)
                )
            return GameSnapshot(
                cells=cells,
                state=self._state,
                elapsed=self._clock.elapsed,
                remaining_mines=self.remaining_mines,
                flag_count=self._flag_count,
                level_id=level.level_id,
                rows=level.rows,
                cols=level.cols,
                mine_count=level.mine_count,
                best_time=self._best_time,
            )
