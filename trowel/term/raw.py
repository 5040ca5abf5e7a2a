"""
Scoped raw-mode acquisition.

A RawModeSession disables line buffering and echo on a terminal input and
restores the exact prior mode bits on release. Acquiring while the input is
already raw is a no-op session, so nested sessions never restore an
intermediate state: only the session that changed the modes puts them back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

_lg = logging.getLogger(__name__)


class RawModeSession:
    """
    Handle for one raw-mode acquisition.

    Example:
        session = RawModeSession.acquire(stdin)
        try:
            byte = stdin.read_byte()
        finally:
            session.release()
    """

    def __init__(self, stdin: Any, saved: tuple[bool, bool] | None) -> None:
        self._stdin = stdin
        self._saved = saved
        self._released = False

    @classmethod
    def acquire(cls, stdin: Any) -> RawModeSession:
        """
        Disable line mode and echo on the input.

        Fails silently on inputs that cannot change modes; the returned
        session then reports active=False and restores nothing.

        Args:
            stdin: Terminal input (see trowel.term.input.TerminalInput)

        Returns:
            Session whose release() restores the prior modes
        """
        try:
            saved = (bool(stdin.line_mode), bool(stdin.echo_mode))
        except (AttributeError, OSError) as e:
            _lg.debug("raw mode unavailable: %s", e)
            return cls(stdin, None)

        if saved == (False, False):
            # Already raw, leave restoration to whoever enabled it
            return cls(stdin, None)

        try:
            stdin.line_mode = False
            stdin.echo_mode = False
        except (AttributeError, OSError) as e:
            _lg.debug("raw mode unavailable: %s", e)
            cls._restore(stdin, saved)
            return cls(stdin, None)

        return cls(stdin, saved)

    @property
    def active(self) -> bool:
        """Whether this session changed the input modes."""
        return self._saved is not None and not self._released

    @property
    def saved(self) -> tuple[bool, bool] | None:
        """The (line_mode, echo_mode) pair restored on release."""
        return self._saved

    @staticmethod
    def _restore(stdin: Any, saved: tuple[bool, bool]) -> None:
        line_mode, echo_mode = saved
        try:
            stdin.line_mode = line_mode
        finally:
            stdin.echo_mode = echo_mode

    def release(self) -> None:
        """Restore the modes saved at acquisition. Safe to call repeatedly."""
        if self._released:
            return
        self._released = True
        if self._saved is not None:
            self._restore(self._stdin, self._saved)

    def __enter__(self) -> RawModeSession:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


@contextmanager
def raw_mode(stdin: Any) -> Iterator[RawModeSession]:
    """
    Run a block with raw mode enabled on the input.

    The prior modes are restored when the block exits, including on
    exceptions and KeyboardInterrupt.
    """
    session = RawModeSession.acquire(stdin)
    try:
        yield session
    finally:
        session.release()
