"""
Elapsed-time clock for a game.

The clock is a plain counter of whole seconds. Something outside the
engine advances it, either a caller invoking tick() or the built-in
background ticker when auto_tick is enabled.
"""
import threading
from typing import Optional


class GameClock:
    """
    Counts seconds from the first reveal until the game ends.

    Attributes:
        interval: Seconds between automatic ticks.
        auto_tick: Whether start() launches a background ticker thread.
    """

    def __init__(self, interval: float = 1.0, auto_tick: bool = False) -> None:
        self.interval = interval
        self.auto_tick = auto_tick
        self._elapsed = 0
        self._running = False
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    # ========================================================================
    # Control
    # ========================================================================

    def start(self) -> None:
        """Zero the counter and start counting."""
        self.stop()
        with self._lock:
            self._elapsed = 0
            self._running = True
        if self.auto_tick:
            self._start_ticker()

    def stop(self) -> None:
        """Freeze the counter. Safe to call when already stopped."""
        with self._lock:
            self._running = False
        if self._stop_event is not None:
            self._stop_event.set()
            self._stop_event = None
        if self._thread is not None:
            if self._thread is not threading.current_thread():
                self._thread.join(timeout=max(self.interval, 1.0))
            self._thread = None

    def reset(self) -> None:
        """Stop and zero the counter."""
        self.stop()
        with self._lock:
            self._elapsed = 0

    def tick(self) -> None:
        """Advance by one second if running."""
        with self._lock:
            if self._running:
                self._elapsed += 1

    # ========================================================================
    # Background Ticker
    # ========================================================================

    def _start_ticker(self) -> None:
        # Each run gets its own event so an old thread cannot outlive stop().
        stop_event = threading.Event()

        def ticker() -> None:
            while not stop_event.wait(self.interval):
                self.tick()

        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=ticker, name="minesweeper-clock", daemon=True
        )
        self._thread.start()

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def elapsed(self) -> int:
        with self._lock:
            return self._elapsed

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running
