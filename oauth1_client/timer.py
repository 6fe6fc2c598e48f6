"""
Cancellable countdown used to signal request timeouts.

The timer only owns a duration and a start/stop contract. Whoever waits
for the response (the transport) decides what to do when it expires.
"""

import logging
import threading
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class RequestTimer:
    """
    One-shot countdown with expiry callbacks.

    Calling ``start`` again restarts the countdown. ``stop`` cancels a
    pending countdown; callbacks already fired are not undone.
    """

    def __init__(self, duration: float, callback: Optional[Callable[[], None]] = None):
        if duration < 0:
            raise ValueError("timer duration cannot be negative")

        self.duration = duration
        self._callbacks: List[Callable[[], None]] = []
        if callback is not None:
            self._callbacks.append(callback)

        self._expired = threading.Event()
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def add_callback(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    @property
    def active(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def expired(self) -> bool:
        return self._expired.is_set()

    def start(self) -> None:
        """Start (or restart) the countdown."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._expired.clear()
            self._timer = threading.Timer(self.duration, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def stop(self) -> None:
        """Cancel the countdown if it is still pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the timer expires; returns True if it did."""
        return self._expired.wait(timeout)

    def _fire(self):
        with self._lock:
            self._timer = None
        self._expired.set()
        logger.debug("Request timer expired after %s seconds", self.duration)
        for callback in list(self._callbacks):
            callback()
