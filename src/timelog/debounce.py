"""Trailing-edge debouncing of editor change notifications."""

import threading
from typing import Any, Callable, Optional


class Debouncer:
    """Collapse bursts of calls into one call after a quiet period.

    Each call restarts the timer; only the arguments of the last call are
    delivered. The wrapped callback runs on the timer thread, so hosts must
    not invoke it concurrently from elsewhere.
    """

    def __init__(self, callback: Callable[..., Any], delay_ms: int):
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        self.callback = callback
        self.delay_ms = delay_ms
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._args = args
            self._kwargs = kwargs
            self._timer = threading.Timer(self.delay_ms / 1000, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None

    def flush(self) -> Any:
        """Run the pending call immediately and return its result."""
        with self._lock:
            if self._timer is None:
                return None
            self._timer.cancel()
            self._timer = None
            args, kwargs = self._args, self._kwargs
        return self.callback(*args, **kwargs)

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None or threading.current_thread() is not self._timer:
                return
            self._timer = None
            args, kwargs = self._args, self._kwargs
        self.callback(*args, **kwargs)
