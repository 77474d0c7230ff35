"""
Location stream adapter.

Single-consumer bounded queue between the device location service and the
placement session. Fixes are handed to the handler strictly in submission
order, one at a time. The subscription can be paused while the consuming
surface is not visible and resumed later; pausing never touches session
state, so origin and placement flag survive pause/resume.
"""

import logging
import threading
import time
from dataclasses import dataclass
from queue import Queue, Empty, Full
from typing import Any, Callable, Optional, Tuple

from geoar_core import config
from geoar_core.errors import PreconditionError
from geoar_core.metrics import get_metrics

logger = logging.getLogger(__name__)

# (lat, lng, timestamp, accuracy)
RawFix = Tuple[Optional[float], Optional[float], Optional[float], Optional[float]]
FixHandler = Callable[[Optional[float], Optional[float], Optional[float], Optional[float]], Any]

_STOP = object()


@dataclass
class LocationStreamConfig:
    """
    Configuration for the location stream.

    Attributes:
        max_queue_size: Bounded queue capacity (fixes)
        poll_timeout_s: Worker wake-up interval while idle (s)
    """

    max_queue_size: int = 64
    poll_timeout_s: float = 0.5

    def __post_init__(self):
        """Validate configuration."""
        assert self.max_queue_size > 0, "max_queue_size must be positive"
        assert self.poll_timeout_s > 0, "poll_timeout must be positive"


class LocationStream:
    """
    Serialised delivery of location fixes to one handler.

    Usage:
        stream = LocationStream(session.on_location_fix)
        stream.start()

        # From the platform location callback (any thread)
        stream.submit(lat, lng, timestamp, accuracy)

        # Surface hidden / shown
        stream.pause()
        stream.resume()

        stream.stop()

    Hosts without threads call drain() from their own loop instead of start().
    """

    def __init__(self, handler: FixHandler, config: Optional[LocationStreamConfig] = None):
        """
        Initialize stream.

        Args:
            handler: Called as handler(lat, lng, timestamp, accuracy) per fix
            config: Stream configuration (uses defaults if None)
        """
        self.handler = handler
        self.config = config or LocationStreamConfig()
        self._queue: Queue = Queue(maxsize=self.config.max_queue_size)
        self._active = True
        self._running = False
        self._worker: Optional[threading.Thread] = None
        self._state_lock = threading.Lock()
        self.metrics = get_metrics()
        self.last_fix_wall_time: Optional[float] = None

    @property
    def is_active(self) -> bool:
        """True while the subscription accepts fixes."""
        return self._active

    @property
    def is_running(self) -> bool:
        """True while the worker thread is consuming."""
        return self._running

    def submit(
        self,
        lat: Optional[float],
        lng: Optional[float],
        timestamp: Optional[float] = None,
        accuracy: Optional[float] = None,
    ) -> bool:
        """
        Queue one fix for delivery.

        Returns:
            True if queued, False if dropped (paused or queue full)
        """
        # Check and enqueue together so no fix lands behind the stop sentinel
        with self._state_lock:
            if not self._active:
                self.metrics.increment_drop('stream_paused')
                return False

            try:
                self._queue.put_nowait((lat, lng, timestamp, accuracy))
            except Full:
                logger.warning("Location queue full, dropping fix")
                self.metrics.increment_drop('queue_full')
                return False

        self.last_fix_wall_time = time.time()
        return True

    def pause(self):
        """Stop accepting fixes. Already queued fixes are still delivered."""
        with self._state_lock:
            if not self._active:
                return
            self._active = False
        logger.info("Location stream paused")

    def resume(self):
        """Accept fixes again."""
        with self._state_lock:
            if self._active:
                return
            self._active = True
        logger.info("Location stream resumed")

    def start(self):
        """Start the consumer thread and accept fixes, also after stop()."""
        with self._state_lock:
            if self._running:
                return
            self._active = True
            self._running = True
            self._worker = threading.Thread(target=self._consume_loop, daemon=True)
            self._worker.start()
        logger.info("Location stream started")

    def stop(self, timeout: float = 5.0):
        """
        Stop accepting fixes and shut the consumer down after queued fixes.

        Args:
            timeout: Seconds to wait for the worker to finish
        """
        with self._state_lock:
            self._active = False
            worker = self._worker
            if not self._running:
                return

        # Blocking put so the sentinel is not lost on a full queue
        self._queue.put(_STOP)
        if worker is not None:
            worker.join(timeout=timeout)

        with self._state_lock:
            self._running = False
            self._worker = None
        logger.info("Location stream stopped")

    def drain(self) -> int:
        """
        Deliver all queued fixes on the calling thread.

        Returns:
            Number of fixes delivered

        Raises:
            PreconditionError: If the consumer thread is running
        """
        if self._running:
            raise PreconditionError("drain() while the consumer thread is running")

        delivered = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except Empty:
                break
            if item is _STOP:
                continue
            self._deliver(item)
            delivered += 1
        return delivered

    def pending(self) -> int:
        """Approximate number of queued fixes."""
        return self._queue.qsize()

    def _consume_loop(self):
        while True:
            try:
                item = self._queue.get(timeout=self.config.poll_timeout_s)
            except Empty:
                continue

            if item is _STOP:
                break

            self._deliver(item)

    def _deliver(self, item: RawFix):
        try:
            self.handler(*item)
        except Exception as e:
            # One bad fix must not end the subscription
            logger.exception(f"Location handler failed: {e}")
            self.metrics.increment('handler_errors')


def create_default_stream(handler: FixHandler) -> LocationStream:
    """
    Create location stream from STREAM_CONFIG.

    Args:
        handler: Fix handler, normally PlacementSession.on_location_fix

    Returns:
        Configured LocationStream
    """
    stream_config = LocationStreamConfig(
        max_queue_size=config.STREAM_CONFIG["max_queue_size"],
        poll_timeout_s=config.STREAM_CONFIG["poll_timeout_s"],
    )

    return LocationStream(handler, stream_config)
