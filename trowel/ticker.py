"""
Background ticker for periodic redraws.

Runs a callable at a fixed interval on a daemon thread until stopped. The
progress indicator uses it to animate its status line without blocking
the caller.

Example Usage:
    import logging

    lg = logging.getLogger(__name__)

    ticker = Ticker(lg, redraw, secs=0.08)
    ticker.start()
    ...
    ticker.stop()
"""

import threading
from collections.abc import Callable
from typing import Any


class Ticker:
    """
    Periodic execution on a background thread.

    The first call happens one interval after start(). Errors raised by the
    handler are logged and ticking continues.
    """

    def __init__(self, lg: Any, handler: Callable[[], None], secs: float = 0.1):
        """
        Initialize the ticker.

        Args:
            lg: Logger instance for error logging
            handler: Callable run on each tick
            secs: Interval between ticks in seconds
        """
        if secs <= 0:
            raise ValueError(f"Ticker interval must be positive, got {secs}")

        self._lg = lg
        self._handler = handler
        self._secs = secs
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def secs(self) -> float:
        return self._secs

    def is_running(self) -> bool:
        """Check if the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """
        Start ticking on a daemon thread.

        Raises:
            RuntimeError: If ticker is already running
        """
        if self.is_running():
            raise RuntimeError("Ticker is already running")

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="trowel-ticker", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while not self._stop_event.wait(timeout=self._secs):
            try:
                self._handler()
            except Exception:
                # Log error and keep ticking
                self._lg.exception("Error in ticker handler")

    def stop(self, timeout: float | None = None) -> None:
        """
        Stop the ticker and wait for the thread to finish.

        A tick in progress completes before this returns. Calling stop()
        from inside a tick does not wait for itself.

        Args:
            timeout: Maximum seconds to wait for the thread (None = no limit)
        """
        self._stop_event.set()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
