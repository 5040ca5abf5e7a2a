"""
Progress indicator with a live spinner and elapsed-time suffix.

A Progress owns a single status line (or as many rows as the message wraps
into). A background ticker redraws it in place; exactly one of succeed(),
fail() or cancel() replaces the spinner with a fixed outcome glyph and the
final elapsed time. Later terminal calls are no-ops, so guard-style cleanup
is always safe:

    progress = console.progress("Fetching bricks")
    try:
        fetch()
        progress.succeed()
    finally:
        progress.fail()  # no-op when succeed() already ran

Or as a context manager:

    with console.progress("Writing files"):
        write_files()

While a Progress is running it owns the output stream: write to the
console only after it completed.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from . import style
from .stdio import resolve_output
from .term.cursor import clear_rows, rows_spanned, terminal_columns
from .ticker import Ticker

_lg = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60

DEFAULT_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
SUCCESS_GLYPH = "✓"
FAILURE_GLYPH = "✗"
CANCEL_GLYPH = "⊘"


class ProgressState(Enum):
    """Lifecycle of a progress indicator."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ProgressState.SUCCEEDED,
            ProgressState.FAILED,
            ProgressState.CANCELED,
        )


@dataclass(frozen=True)
class ProgressOptions:
    """
    Animation settings for a progress indicator.

    Attributes:
        interval: Seconds between redraws
        frames: Spinner frames cycled on each redraw
    """

    interval: float = 0.08
    frames: tuple[str, ...] = DEFAULT_FRAMES

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if not self.frames:
            raise ValueError("frames must not be empty")


def format_elapsed(secs: float) -> str:
    """
    Format elapsed seconds for the status line.

    Examples:
        >>> format_elapsed(0.123)
        '0.1s'
        >>> format_elapsed(65.25)
        '1m5.2s'
    """
    secs = max(secs, 0.0)
    if secs < SECONDS_PER_MINUTE:
        return f"{secs:.1f}s"
    minutes, rest = divmod(secs, SECONDS_PER_MINUTE)
    return f"{int(minutes)}m{rest:.1f}s"


class Progress:
    """
    Redrawing status line for an in-flight operation.

    Created in the RUNNING state by default: the first frame is written
    immediately and the ticker starts. Pass start=False to create an IDLE
    indicator and call start() later.
    """

    def __init__(
        self,
        message: str,
        stdout: Any = None,
        *,
        options: ProgressOptions | None = None,
        color: bool = True,
        start: bool = True,
    ) -> None:
        """
        Initialize the indicator.

        Args:
            message: Operation description shown next to the spinner
            stdout: Output stream (default: resolved through trowel.stdio)
            options: Animation settings
            color: Whether to apply ANSI styling
            start: Start immediately
        """
        self._message = message
        self._stdout = stdout if stdout is not None else resolve_output()
        self._options = options or ProgressOptions()
        self._color = color
        self._state = ProgressState.IDLE
        self._lock = threading.RLock()
        self._rows = 0
        self._frame = 0
        self._started_at: float | None = None
        self._finished_at: float | None = None
        self._ticker: Ticker | None = None

        if start:
            self.start()

    # -- properties ---------------------------------------------------------

    @property
    def state(self) -> ProgressState:
        return self._state

    @property
    def message(self) -> str:
        return self._message

    @property
    def is_running(self) -> bool:
        return self._state is ProgressState.RUNNING

    @property
    def elapsed(self) -> float:
        """Seconds since start, frozen once the indicator completed."""
        if self._started_at is None:
            return 0.0
        end = self._finished_at
        if end is None:
            end = time.monotonic()
        return end - self._started_at

    # -- rendering ----------------------------------------------------------

    def _time_suffix(self) -> str:
        elapsed = format_elapsed(self.elapsed)
        return style.dark_gray.wrap(f"({elapsed})", enabled=self._color)

    def _render(self, line: str) -> None:
        """Replace the rows of the previous render with line."""
        self._stdout.write(clear_rows(self._rows) + line)
        self._stdout.flush()
        self._rows = rows_spanned(line, terminal_columns(self._stdout))

    def _frame_line(self) -> str:
        frames = self._options.frames
        frame = frames[self._frame % len(frames)]
        frame = style.light_green.wrap(frame, enabled=self._color)
        return f"{frame} {self._message}... {self._time_suffix()}"

    def _tick(self) -> None:
        with self._lock:
            if self._state is not ProgressState.RUNNING:
                return
            self._frame += 1
            self._render(self._frame_line())

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Move from IDLE to RUNNING: draw the first frame and start ticking."""
        with self._lock:
            if self._state is not ProgressState.IDLE:
                return
            self._state = ProgressState.RUNNING
            self._started_at = time.monotonic()
            _lg.debug("progress started: %s", self._message)
            self._render(self._frame_line())
            self._ticker = Ticker(_lg, self._tick, secs=self._options.interval)
            self._ticker.start()

    def update(self, message: str) -> None:
        """Replace the message of a running indicator."""
        with self._lock:
            if self._state is not ProgressState.RUNNING:
                return
            self._message = message
            self._render(self._frame_line())

    def _finish(
        self, state: ProgressState, glyph: str, message: str | None
    ) -> None:
        with self._lock:
            if self._state is not ProgressState.RUNNING:
                return
            self._state = state
            self._finished_at = time.monotonic()
            if message is not None:
                self._message = message
            ticker, self._ticker = self._ticker, None

        # Outside the lock: a pending tick may be waiting for it
        if ticker is not None:
            ticker.stop()

        with self._lock:
            _lg.debug("progress %s: %s", state.value, self._message)
            self._render(f"{glyph} {self._message} {self._time_suffix()}\n")
            self._rows = 0

    def succeed(self, message: str | None = None) -> None:
        """
        Complete successfully.

        Args:
            message: Replacement text for the final line
        """
        self._finish(
            ProgressState.SUCCEEDED,
            style.light_green.wrap(SUCCESS_GLYPH, enabled=self._color),
            message,
        )

    def fail(self, message: str | None = None) -> None:
        """
        Complete with an error.

        Args:
            message: Replacement text for the final line
        """
        self._finish(
            ProgressState.FAILED,
            style.light_red.wrap(FAILURE_GLYPH, enabled=self._color),
            message,
        )

    def cancel(self) -> None:
        """Complete as canceled."""
        self._finish(
            ProgressState.CANCELED,
            style.dark_gray.wrap(CANCEL_GLYPH, enabled=self._color),
            None,
        )

    def __enter__(self) -> Progress:
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Succeed on normal exit, cancel on interrupt, fail otherwise."""
        if exc_type is None:
            self.succeed()
        elif issubclass(exc_type, KeyboardInterrupt):
            self.cancel()
        else:
            self.fail()
