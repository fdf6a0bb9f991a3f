# src/floatmap/interaction/timer.py
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AnimationTimer:
    """Fixed-period timer driving the animation phase.

    The callback runs on a daemon thread. ``stop`` is idempotent and waits
    for the thread, so no callback fires after it returns.
    """

    def __init__(self, callback: Callable[[], None], period: float = 0.1, name: str = "animation-timer"):
        if period <= 0:
            raise ValueError(f"Timer period must be positive: {period}")
        self.callback = callback
        self.period = period
        self.name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._callback_lock = threading.RLock()
        self._stopped = False

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self._stop_event.clear()
        self._stopped = False
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"Started {self.name} ({self.period * 1000:.0f} ms period)")

    def stop(self):
        if self._thread is None:
            return
        self._stop_event.set()
        # Blocks until any in-flight callback has finished
        with self._callback_lock:
            self._stopped = True
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=max(1.0, self.period * 10))
        self._thread = None
        logger.info(f"Stopped {self.name}")

    def _run(self):
        while not self._stop_event.wait(self.period):
            with self._callback_lock:
                if self._stopped:
                    break
                try:
                    self.callback()
                except Exception as e:
                    logger.error(f"Timer callback failed: {e}")
                    self._stop_event.set()
                    raise

    def __enter__(self) -> 'AnimationTimer':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
