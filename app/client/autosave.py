from __future__ import annotations
from typing import Callable, Optional
import logging
import threading

logger = logging.getLogger(__name__)


class DebouncedSaver:
    """Run ``action`` once ``delay`` seconds after the last ``schedule()`` call.

    Each schedule() replaces the pending timer, so a burst of triggers fires a
    single action. The owner must call close() on teardown; a closed saver
    drops its pending timer and ignores further triggers.
    """

    def __init__(self, action: Callable[[], None], delay: float):
        self._action = action
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._closed = False

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self) -> None:
        with self._lock:
            if self._closed:
                logger.debug("autosave: schedule ignored after close")
                return
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.delay, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self) -> None:
        with self._lock:
            if self._closed or self._timer is None or threading.current_thread() is not self._timer:
                return
            self._timer = None
        self._run()

    def _run(self) -> None:
        try:
            self._action()
        except Exception:
            logger.exception("autosave: action failed")

    def cancel(self) -> bool:
        """Drop the pending run, if any. Returns whether one was pending."""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is None:
            return False
        timer.cancel()
        return True

    def flush(self) -> bool:
        """Run the pending action now instead of waiting. Returns whether one ran."""
        if not self.cancel() or self._closed:
            return False
        self._run()
        return True

    def close(self) -> None:
        with self._lock:
            self._closed = True
        if self.cancel():
            logger.info("autosave: pending save cancelled on close")
