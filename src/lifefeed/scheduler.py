"""Periodic driver that ticks a composite grid on a background thread.

The reference animation advanced one generation every 35ms and repainted
afterwards. TickScheduler does the ticking and hands each completed
snapshot to an optional callback (a renderer, a recorder, a test probe).
Reset and rule changes can be issued on the grid from any thread; the
grid's own lock keeps them from interleaving with a tick.
"""

import threading
import time
from typing import Callable, Optional
import logging

from .core.composite_grid import CompositeGrid, GridSnapshot
from .core.errors import InvalidArgument

logger = logging.getLogger(__name__)

TickCallback = Callable[[GridSnapshot], None]


class TickScheduler:
    """Ticks a grid at a fixed interval until stopped.

    Attributes:
        grid: The grid being advanced
        interval: Seconds between ticks
    """

    def __init__(self, grid: CompositeGrid, interval_ms: Optional[float] = None,
                 on_tick: Optional[TickCallback] = None, max_ticks: Optional[int] = None):
        """Initialize the scheduler (not started).

        Args:
            grid: Grid to advance
            interval_ms: Tick period in milliseconds (grid config's interval if None)
            on_tick: Called with each new snapshot on the scheduler thread
            max_ticks: Stop by itself after this many ticks (run forever if None)

        Raises:
            InvalidArgument: If the interval or tick limit is not positive
        """
        if interval_ms is None:
            interval_ms = grid.config.tick_interval_ms
        if interval_ms <= 0:
            raise InvalidArgument(f"Tick interval must be positive, got {interval_ms}ms")
        if max_ticks is not None and max_ticks < 1:
            raise InvalidArgument(f"Tick limit must be positive, got {max_ticks}")

        self.grid = grid
        self.interval = interval_ms / 1000.0
        self.on_tick = on_tick
        self.max_ticks = max_ticks

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._ticks = 0
        self._error: Optional[BaseException] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def ticks(self) -> int:
        """Ticks performed since start()."""
        return self._ticks

    @property
    def error(self) -> Optional[BaseException]:
        """Exception that stopped the scheduler, if any."""
        return self._error

    def start(self) -> None:
        """Start ticking on a daemon thread."""
        if self.running:
            raise RuntimeError("Scheduler is already running")

        self._stop_event.clear()
        self._ticks = 0
        self._error = None
        self._thread = threading.Thread(target=self._run, name="lifefeed-ticker", daemon=True)
        self._thread.start()
        logger.info(f"Tick scheduler started ({self.interval * 1000:.0f}ms interval)")

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Ask the thread to finish after its current tick and wait for it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Tick scheduler did not stop within timeout")
            else:
                logger.info(f"Tick scheduler stopped after {self._ticks} ticks")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the scheduler thread ends; True if it has ended."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        deadline = time.monotonic()

        while not self._stop_event.is_set():
            snapshot = self.grid.tick()
            self._ticks += 1

            if self.on_tick is not None:
                try:
                    self.on_tick(snapshot)
                except Exception as e:
                    logger.exception(f"Tick callback failed at generation {snapshot.generation}")
                    self._error = e
                    break

            if self.max_ticks is not None and self._ticks >= self.max_ticks:
                break

            # Fixed-rate schedule; after an overrun, restart the schedule instead of bursting
            deadline += self.interval
            delay = deadline - time.monotonic()
            if delay < 0:
                deadline = time.monotonic()
                delay = 0.0
            self._stop_event.wait(delay)

    def __enter__(self) -> 'TickScheduler':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
