"""
Tick scheduling.

Each scheduler is an explicit handle owned by whoever drives the game. It
runs its callback on a background thread at a fixed interval until stop()
is called. Stopping and starting again is how the game is paused and
resumed.
"""
import logging
import time
from threading import Event, Thread, current_thread
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TickScheduler:
    """Calls `callback()` every `interval` seconds on a daemon thread."""

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "tick"):
        """
        Args:
            interval: Seconds between calls (1 / fps for the game loop)
            callback: Function to call on each tick
            name: Thread name, used in logs
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.name = name
        self.stop_event = Event()
        self.thread: Optional[Thread] = None

    @property
    def is_running(self) -> bool:
        return self.thread is not None and self.thread.is_alive() and not self.stop_event.is_set()

    def start(self):
        """Start ticking. Does nothing if already running."""
        if self.is_running:
            return
        # One event per run; an old loop still winding down keeps its own
        self.stop_event = Event()
        self.thread = Thread(target=self._loop, args=(self.stop_event,), name=self.name, daemon=True)
        self.thread.start()
        logger.debug(f"Scheduler {self.name} started ({self.interval:.3f}s)")

    def stop(self):
        """Stop ticking. Safe to call from inside the callback."""
        self.stop_event.set()
        thread = self.thread
        if thread is not None and thread.is_alive() and thread is not current_thread():
            thread.join(timeout=5)
        logger.debug(f"Scheduler {self.name} stopped")

    def _loop(self, stop_event: Event):
        next_tick = time.monotonic() + self.interval
        while not stop_event.wait(max(0.0, next_tick - time.monotonic())):
            self.callback()
            next_tick += self.interval
            # Skip missed ticks instead of bursting to catch up
            now = time.monotonic()
            if next_tick < now:
                next_tick = now + self.interval


class ElapsedClock(TickScheduler):
    """One tick per second, counting whole seconds while running."""

    def __init__(self, on_second: Optional[Callable[[int], None]] = None, interval: float = 1.0):
        super().__init__(interval, self._tick, name="clock")
        self.on_second = on_second
        self.seconds = 0

    def reset(self):
        self.seconds = 0

    def _tick(self):
        self.seconds += 1
        if self.on_second is not None:
            self.on_second(self.seconds)
