"""
Byte-oriented terminal input.

Wraps a text stream (normally sys.stdin) with the operations the prompt
engine needs: line reads, single-byte reads and the line-mode/echo-mode
toggles that raw-mode sessions flip. On a TTY the toggles map onto the
termios ICANON and ECHO local flags; on anything else they only record
the requested value.
"""

from __future__ import annotations

import os
from collections import deque
from typing import Any

try:
    import termios
except ImportError:  # pragma: no cover - Windows
    termios = None  # type: ignore[assignment]

# Index of the local-mode flags in a termios attribute list
_LFLAG = 3


class TerminalInput:
    """
    Terminal input adapter with line/echo mode control.

    Example:
        stdin = TerminalInput(sys.stdin)
        stdin.echo_mode = False
        try:
            byte = stdin.read_byte()
        finally:
            stdin.echo_mode = True
    """

    def __init__(self, stream: Any) -> None:
        """
        Initialize the adapter.

        Args:
            stream: Underlying text stream (e.g. sys.stdin or io.StringIO)
        """
        self._stream = stream
        self._pending: deque[int] = deque()
        # Recorded modes for streams without termios support
        self._line_mode = True
        self._echo_mode = True

    @property
    def stream(self) -> Any:
        """The wrapped stream."""
        return self._stream

    def fileno(self) -> int | None:
        """Return the underlying file descriptor, or None if there is none."""
        try:
            return int(self._stream.fileno())
        except (AttributeError, OSError, ValueError):
            return None

    def isatty(self) -> bool:
        """Check if the stream is attached to a terminal."""
        try:
            return bool(self._stream.isatty())
        except (AttributeError, OSError, ValueError):
            return False

    def _termios_fd(self) -> int | None:
        """File descriptor usable with termios, or None."""
        if termios is None or not self.isatty():
            return None
        return self.fileno()

    def _get_flag(self, flag: int) -> bool | None:
        fd = self._termios_fd()
        if fd is None:
            return None
        try:
            attrs = termios.tcgetattr(fd)
        except termios.error:
            return None
        return bool(attrs[_LFLAG] & flag)

    def _set_flag(self, flag: int, enabled: bool) -> bool:
        fd = self._termios_fd()
        if fd is None:
            return False
        try:
            attrs = termios.tcgetattr(fd)
            if enabled:
                attrs[_LFLAG] |= flag
            else:
                attrs[_LFLAG] &= ~flag
            termios.tcsetattr(fd, termios.TCSANOW, attrs)
        except termios.error:
            return False
        return True

    @property
    def line_mode(self) -> bool:
        """Whether input is buffered until a line terminator (ICANON)."""
        value = self._get_flag(termios.ICANON) if termios is not None else None
        return self._line_mode if value is None else value

    @line_mode.setter
    def line_mode(self, enabled: bool) -> None:
        self._line_mode = enabled
        if termios is not None:
            self._set_flag(termios.ICANON, enabled)

    @property
    def echo_mode(self) -> bool:
        """Whether typed characters are echoed back (ECHO)."""
        value = self._get_flag(termios.ECHO) if termios is not None else None
        return self._echo_mode if value is None else value

    @echo_mode.setter
    def echo_mode(self, enabled: bool) -> None:
        self._echo_mode = enabled
        if termios is not None:
            self._set_flag(termios.ECHO, enabled)

    def read_byte(self) -> int | None:
        """
        Read a single byte, blocking until one is available.

        On a TTY the byte is read straight from the file descriptor so no
        buffered data is held back. Other streams are read one character
        at a time and re-encoded as UTF-8.

        Returns:
            The byte value, or None at end of stream
        """
        if self._pending:
            return self._pending.popleft()

        fd = self.fileno() if self.isatty() else None
        if fd is not None:
            data = os.read(fd, 1)
            return data[0] if data else None

        buffer = getattr(self._stream, "buffer", None)
        if buffer is not None:
            data = buffer.read(1)
            return data[0] if data else None

        char = self._stream.read(1)
        if not char:
            return None
        self._pending.extend(char.encode("utf-8"))
        return self._pending.popleft()

    def read_line(self) -> str | None:
        """
        Read one line without its terminator.

        Returns:
            The line, or None at end of stream
        """
        if self._pending:
            head = bytes(self._pending).decode("utf-8", errors="replace")
            self._pending.clear()
            if "\n" in head:
                line, _, rest = head.partition("\n")
                self._pending.extend(rest.encode("utf-8"))
                return line.rstrip("\r")
            tail = self._stream.readline()
            return (head + tail).rstrip("\r\n")

        line = self._stream.readline()
        if not line:
            return None
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        return line.rstrip("\r\n")


def as_terminal_input(stream: Any) -> Any:
    """
    Adapt a stream to the terminal-input interface.

    Objects that already provide read_byte/read_line and the mode toggles
    are returned unchanged.
    """
    if all(hasattr(stream, attr) for attr in ("read_byte", "read_line", "line_mode")):
        return stream
    return TerminalInput(stream)
