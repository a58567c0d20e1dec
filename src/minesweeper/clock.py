"""
Game clock for Minesweeper.

The clock counts whole seconds while a match is being played. Ticks come
from a Scheduler so the engine can run on a real timer thread or be
driven by hand in tests and headless front ends.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)


def format_seconds(seconds: Optional[int]) -> str:
    """Format a number of seconds as mm:ss, or --:-- if absent."""
    if seconds is None:
        return "--:--"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


# ============================================================================
# Scheduler Interface
# ============================================================================

class TimerHandle(ABC):
    """Handle to a repeating callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop future callbacks. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        """Whether the callback is still scheduled."""
        pass


class Scheduler(ABC):
    """Source of repeating callbacks."""

    @abstractmethod
    def every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Call ``callback`` every ``interval`` seconds until cancelled.

        Args:
            interval: Period in seconds.
            callback: Zero-argument function to call.

        Returns:
            Handle used to cancel the callback.
        """
        pass


# ============================================================================
# Threaded Scheduler
# ============================================================================

class _ThreadHandle(TimerHandle):
    """Daemon thread that waits on an event between callbacks."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="minesweeper-clock", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Clock callback failed")

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def active(self) -> bool:
        return not self._stopped.is_set()


class ThreadingScheduler(Scheduler):
    """Scheduler backed by one daemon thread per repeating callback."""

    def every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        return _ThreadHandle(interval, callback)


# ============================================================================
# Manual Scheduler
# ============================================================================

class _ManualHandle(TimerHandle):

    def __init__(
        self, interval: float, callback: Callable[[], None], next_due: float
    ) -> None:
        self.interval = interval
        self.callback = callback
        self.next_due = next_due
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def active(self) -> bool:
        return not self._cancelled


class ManualScheduler(Scheduler):
    """
    Scheduler whose time only moves when ``advance`` is called.

    Callbacks fire synchronously inside ``advance``, in due order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: List[_ManualHandle] = []

    def every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        if interval <= 0:
            raise ValueError("Interval must be positive")
        handle = _ManualHandle(interval, callback, self.now + interval)
        self._handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        """Move time forward, firing every callback that falls due."""
        target = self.now + seconds
        while True:
            due = [
                handle for handle in self._handles
                if handle.active and handle.next_due <= target
            ]
            if not due:
                break
            handle = min(due, key=lambda h: h.next_due)
            self.now = handle.next_due
            handle.next_due += handle.interval
            handle.callback()
        self.now = target
        self._handles = [h for h in self._handles if h.active]

    @property
    def active_count(self) -> int:
        """Number of callbacks still scheduled."""
        return sum(1 for handle in self._handles if handle.active)


# ============================================================================
# Game Clock
# ============================================================================

class GameClock:
    """
    Elapsed-seconds counter driven by a Scheduler.

    At most one tick source is active at a time; starting a running
    clock is an error.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval: float = 1.0,
        on_tick: Optional[Callable[[int], None]] = None,
    ) -> None:
        """
        Initialize the clock.

        Args:
            scheduler: Provider of the repeating tick.
            interval: Real seconds per counted second.
            on_tick: Called with the new elapsed value after each tick.
        """
        self._scheduler = scheduler
        self._interval = interval
        self._on_tick = on_tick
        self._lock = threading.Lock()
        self._elapsed = 0
        self._handle: Optional[TimerHandle] = None
        self._token: Optional[object] = None

    def start(self) -> None:
        """
        Start counting from zero.

        Raises:
            RuntimeError: If the clock is already running.
        """
        with self._lock:
            if self._handle is not None:
                raise RuntimeError("Clock is already running")
            self._elapsed = 0
            token = object()
            self._token = token
            self._handle = self._scheduler.every(
                self._interval, lambda: self._tick(token)
            )

    def stop(self) -> None:
        """Stop counting, keeping the elapsed value."""
        with self._lock:
            handle = self._handle
            self._handle = None
            self._token = None
        if handle is not None:
            handle.cancel()

    def reset(self) -> None:
        """Stop counting and zero the elapsed value."""
        self.stop()
        with self._lock:
            self._elapsed = 0

    def _tick(self, token: object) -> None:
        with self._lock:
            # A late tick from a cancelled source must not count.
            if token is not self._token:
                return
            self._elapsed += 1
            elapsed = self._elapsed
        if self._on_tick is not None:
            self._on_tick(elapsed)

    @property
    def elapsed(self) -> int:
        """Whole seconds counted since the last start."""
        with self._lock:
            return self._elapsed

    @property
    def running(self) -> bool:
        """Whether a tick source is active."""
        with self._lock:
            return self._handle is not None

    @property
    def display(self) -> str:
        """Elapsed time as mm:ss."""
        return format_seconds(self.elapsed)
