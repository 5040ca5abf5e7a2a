"""
Console facade for styled output, progress indicators and prompts.

A Console resolves its streams through trowel.stdio on every call, so one
instance can be created up front and still honour overrides installed
later (e.g. by tests).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from . import prompts, style
from .config import should_use_color
from .progress import Progress, ProgressOptions
from .stdio import resolve_output

AnsiCodes = tuple[style.AnsiCode, ...]


class Console:
    """
    Semantic output writer.

    Each line method writes exactly one line to the active output stream:
    info (plain), err (light red), warn (bold yellow, tagged), success
    (light green), alert (bold light cyan) and detail (dark gray). write()
    emits its text without a newline. delayed() queues a message that
    flush() writes later.

    Example:
        console = Console()
        console.info("Generating files")
        with console.progress("Writing templates"):
            write_templates()
        if console.confirm("Overwrite README.md?"):
            overwrite()
        console.success("Done")
    """

    def __init__(
        self,
        *,
        color: bool | None = None,
        quiet: bool = False,
        progress_options: ProgressOptions | None = None,
    ):
        """
        Initialize the console.

        Args:
            color: Force styling on/off, or None to follow the environment
                   (see trowel.config)
            quiet: Suppress all line output except errors
            progress_options: Animation settings for progress indicators
        """
        self._color = color
        self._quiet = quiet
        self._progress_options = progress_options
        self._queue: list[str | None] = []

    @property
    def quiet(self) -> bool:
        """Check if quiet mode is enabled."""
        return self._quiet

    @property
    def pending(self) -> list[str | None]:
        """Messages queued by delayed() and not yet flushed."""
        return list(self._queue)

    @property
    def stdout(self) -> Any:
        """The currently resolved output stream."""
        return resolve_output()

    def use_color(self, stream: Any = None) -> bool:
        """Determine if styling applies to the given (or active) stream."""
        if self._color is not None:
            return self._color
        return should_use_color(stream if stream is not None else resolve_output())

    def _emit(self, text: str) -> None:
        stdout = resolve_output()
        stdout.write(text)
        stdout.flush()

    def _line(self, message: str | None, codes: AnsiCodes = ()) -> None:
        text = "" if message is None else str(message)
        enabled = self.use_color()
        for code in codes:
            text = code.wrap(text, enabled=enabled)
        self._emit(f"{text}\n")

    def write(self, message: str | None) -> None:
        """Write a message without a trailing newline."""
        if self._quiet or message is None:
            return
        self._emit(str(message))

    def info(self, message: str | None = None) -> None:
        """Write an unstyled line."""
        if self._quiet:
            return
        self._line(message)

    def err(self, message: str | None) -> None:
        """Write an error line. Never suppressed by quiet mode."""
        self._line(message, (style.light_red,))

    def warn(self, message: str | None, tag: str = "WARN") -> None:
        """Write a warning line prefixed with [tag]."""
        if self._quiet:
            return
        text = "" if message is None else message
        self._line(f"[{tag}] {text}", (style.bold, style.yellow))

    def success(self, message: str | None) -> None:
        """Write a success line."""
        if self._quiet:
            return
        self._line(message, (style.light_green,))

    def alert(self, message: str | None) -> None:
        """Write an alert line."""
        if self._quiet:
            return
        self._line(message, (style.bold, style.light_cyan))

    def detail(self, message: str | None) -> None:
        """Write a low-emphasis detail line."""
        if self._quiet:
            return
        self._line(message, (style.dark_gray,))

    def delayed(self, message: str | None) -> None:
        """Queue a message for a later flush()."""
        self._queue.append(message)

    def flush(self, sink: Callable[[str | None], None] | None = None) -> None:
        """
        Write and clear queued messages.

        Args:
            sink: Callable receiving each message (default: info)
        """
        writeln = sink or self.info
        queued, self._queue = self._queue, []
        for message in queued:
            writeln(message)

    def progress(self, message: str) -> Progress:
        """
        Start a progress indicator on the active output stream.

        The indicator owns the stream until succeed(), fail() or cancel()
        is called.
        """
        stdout = resolve_output()
        return Progress(
            message,
            stdout,
            options=self._progress_options,
            color=self.use_color(stdout),
        )

    def prompt(self, message: str, default: Any = None, *, hidden: bool = False) -> str:
        """Prompt for text. See trowel.prompts.prompt_text."""
        return prompts.prompt_text(
            message, default, hidden=hidden, color=self.use_color()
        )

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question. See trowel.prompts.confirm."""
        return prompts.confirm(message, default, color=self.use_color())

    def choose_one(
        self, message: str, choices: Sequence[str], default: str | None = None
    ) -> str:
        """Pick one of several choices. See trowel.prompts.choose_one."""
        return prompts.choose_one(message, choices, default, color=self.use_color())


# Global console instance
_global_console: Console | None = None


def get_console(
    *,
    color: bool | None = None,
    quiet: bool = False,
) -> Console:
    """
    Get or create the global console instance.

    Args:
        color: Force styling on/off
        quiet: Suppress non-essential output

    Returns:
        Console instance (a new one when arguments are given)
    """
    global _global_console

    # If arguments are provided, create a new console
    if color is not None or quiet:
        return Console(color=color, quiet=quiet)

    # Return or create the global console
    if _global_console is None:
        _global_console = Console()

    return _global_console


def reset_console() -> None:
    """Reset the global console instance."""
    global _global_console
    _global_console = None
