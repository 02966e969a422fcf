"""Background-thread source emitting a tick counter at a fixed interval."""

from __future__ import annotations

import threading

from loguru import logger

from pushbridge.core.constants import DEFAULT_INTERVAL_SECONDS
from pushbridge.core.errors import BridgeConfigurationError
from pushbridge.sources.base import PushSource


class IntervalSource(PushSource):
    """Emits 1, 2, 3, ... every interval_seconds while active.

    With a limit, the source finishes the stream after that many ticks.
    The source counts as running from activate() until deactivate() or the
    limit, whether or not an old worker is still finishing a slow tick, so an
    immediate restart always gets a fresh worker. deactivate() only signals
    the worker, so a tick racing the stop can still be delivered. The counter
    is shared across restarts and never repeats a value.
    """

    def __init__(
        self,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        limit: int | None = None,
    ) -> None:
        super().__init__()
        if interval_seconds <= 0:
            raise BridgeConfigurationError(
                "interval_seconds must be positive",
                code="invalid_interval",
                details={"interval_seconds": interval_seconds},
            )
        if limit is not None and limit < 0:
            raise BridgeConfigurationError(
                "limit must not be negative",
                code="invalid_limit",
                details={"limit": limit},
            )
        self.interval_seconds = float(interval_seconds)
        self.limit = limit
        self.ticks = 0
        self._lock = threading.Lock()
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def name(self) -> str:
        return "interval"

    @property
    def running(self) -> bool:
        stop = self._stop
        return stop is not None and not stop.is_set()

    def activate(self) -> None:
        with self._lock:
            if self.running:
                logger.debug("interval source already running")
                return
            stop = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop,),
                name="pushbridge-interval",
                daemon=True,
            )
            self._stop = stop
            self._thread = thread
        thread.start()
        logger.debug("interval source started ({}s)", self.interval_seconds)

    def deactivate(self) -> None:
        with self._lock:
            stop = self._stop
        if stop is not None:
            stop.set()
            logger.debug("interval source stop requested")

    def join(self, timeout: float | None = None) -> None:
        """Wait for the current worker thread to exit."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _next_tick(self, stop: threading.Event) -> tuple[int | None, bool]:
        """Claim the next tick for this worker. Returns (tick, finished)."""
        with self._lock:
            if stop.is_set():
                return None, False
            tick = None
            if self.limit is None or self.ticks < self.limit:
                self.ticks += 1
                tick = self.ticks
            finished = self.limit is not None and self.ticks >= self.limit
            if finished:
                stop.set()
            return tick, finished

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval_seconds):
            tick, finished = self._next_tick(stop)
            if tick is not None:
                self._emit(tick)
            if finished:
                logger.debug("interval source reached limit {}", self.limit)
                self._finish()
                return
