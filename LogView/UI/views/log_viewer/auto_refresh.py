"""
Auto-Refresh Module - Periodic reload scheduling

Handles:
- Background thread that ticks once immediately, then on a fixed cadence
- Cooperative cancellation through a per-run stop event
- Cancel-on-restart (only one run is ever active)
- Run generations so stale ticks can be recognised and dropped
"""
import logging
import time
from enum import Enum
from threading import Event, Lock, Thread
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class AutoRefreshScheduler:
    """
    Calls ``tick(generation)`` immediately and then every ``interval`` seconds
    until stopped

    ``stop()`` never waits for the worker thread: it sets the run's stop event,
    which ends the current wait at once. A tick already in progress finishes;
    no tick is started after the event is set.
    """

    def __init__(self, tick: Callable[[int], None], interval: float = 1.0):
        """
        Initialize the scheduler

        Args:
            tick: Called with the run generation on every tick
            interval: Seconds between the starts of consecutive ticks
        """
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.tick = tick
        self.interval = interval

        self._lock = Lock()
        self._generation = 0
        self._stop_event: Optional[Event] = None
        self._thread: Optional[Thread] = None

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return SchedulerState.RUNNING
            return SchedulerState.IDLE

    @property
    def is_running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    @property
    def generation(self) -> int:
        """Generation of the most recent run"""
        with self._lock:
            return self._generation

    def is_current(self, generation: int) -> bool:
        """True when the generation belongs to the active run"""
        with self._lock:
            return (
                generation == self._generation
                and self._stop_event is not None
                and not self._stop_event.is_set()
            )

    def start(self) -> int:
        """
        Start a new run, cancelling any active one

        Returns:
            The generation number of the new run
        """
        with self._lock:
            if self._stop_event is not None:
                self._stop_event.set()

            self._generation += 1
            generation = self._generation
            stop_event = Event()
            self._stop_event = stop_event
            self._thread = Thread(
                target=self._run,
                args=(generation, stop_event),
                name=f"auto-refresh-{generation}",
                daemon=True,
            )
            self._thread.start()

        logger.info("Auto-refresh started (every %.2fs, run %d)", self.interval, generation)
        return generation

    def stop(self) -> None:
        """Cancel the active run, if any"""
        with self._lock:
            if self._stop_event is None or self._stop_event.is_set():
                return
            self._stop_event.set()
            generation = self._generation

        logger.info("Auto-refresh stopped (run %d)", generation)

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the most recent worker thread to exit"""
        with self._lock:
            thread = self._thread
        if thread is not None:
            thread.join(timeout)

    def _run(self, generation: int, stop_event: Event) -> None:
        """Worker loop - runs in background thread"""
        next_tick = time.monotonic()

        while not stop_event.is_set():
            try:
                self.tick(generation)
            except Exception:
                # A failing reload must not end the schedule
                logger.exception("Auto-refresh tick failed (run %d)", generation)

            next_tick += self.interval
            now = time.monotonic()
            if next_tick < now:
                # Overran one or more slots; resume on the cadence
                missed = int((now - next_tick) // self.interval) + 1
                next_tick += missed * self.interval

            if stop_event.wait(next_tick - now):
                break
