"""
Key sequence recognition over a sliding byte window.

Arrow keys arrive as three-byte escape sequences; enter as a single byte.
KeyWindow buffers at most three bytes and reports a Key as soon as the
buffer ends with one of the known sequences.
"""

from __future__ import annotations

from collections import deque
from enum import Enum

ESCAPE = 0x1B
LEFT_BRACKET = 0x5B
LINE_FEED = 0x0A
CARRIAGE_RETURN = 0x0D
BACKSPACE = 0x08
DELETE = 0x7F

UP_ARROW = (ESCAPE, LEFT_BRACKET, 0x41)  # ESC [ A
DOWN_ARROW = (ESCAPE, LEFT_BRACKET, 0x42)  # ESC [ B

WINDOW_CAPACITY = 3


class Key(Enum):
    """Keys recognized by the selection prompt."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"


KEY_SEQUENCES: dict[Key, tuple[tuple[int, ...], ...]] = {
    Key.UP: (UP_ARROW,),
    Key.DOWN: (DOWN_ARROW,),
    Key.ENTER: ((LINE_FEED,), (CARRIAGE_RETURN,)),
}


class KeyWindow:
    """
    Bounded buffer of recent input bytes.

    The window is cleared when a sequence completes, and before a new byte
    is added to a full window that produced no match.

    Example:
        window = KeyWindow()
        for byte in (0x1B, 0x5B, 0x42):
            key = window.feed(byte)
        assert key is Key.DOWN
    """

    def __init__(self, capacity: int = WINDOW_CAPACITY) -> None:
        self._capacity = capacity
        self._buffer: deque[int] = deque()

    @property
    def buffer(self) -> tuple[int, ...]:
        """Bytes currently held."""
        return tuple(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()

    def _match(self) -> Key | None:
        window = tuple(self._buffer)
        for key, sequences in KEY_SEQUENCES.items():
            for seq in sequences:
                if window[-len(seq) :] == seq:
                    return key
        return None

    def feed(self, byte: int) -> Key | None:
        """
        Add a byte and report a completed key, if any.

        Args:
            byte: Raw input byte

        Returns:
            The recognized Key, or None while no sequence has completed
        """
        if len(self._buffer) >= self._capacity:
            self._buffer.clear()
        self._buffer.append(byte)

        key = self._match()
        if key is not None:
            self._buffer.clear()
        return key
