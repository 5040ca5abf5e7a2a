"""Tests for trowel.term.raw module."""

from __future__ import annotations

import pytest

from tests.helpers.stdio import FakeStdin
from trowel.term.raw import RawModeSession, raw_mode


class TestRawModeSession:
    """Tests for RawModeSession."""

    def test_acquire_disables_modes(self):
        """Test acquiring turns off line and echo mode."""
        stdin = FakeStdin()
        session = RawModeSession.acquire(stdin)
        assert stdin.modes == (False, False)
        assert session.active
        assert session.saved == (True, True)
        session.release()
        assert stdin.modes == (True, True)
        assert not session.active

    def test_restores_exact_prior_modes(self):
        """Test a partially raw input gets its own modes back."""
        stdin = FakeStdin(line_mode=True, echo_mode=False)
        with RawModeSession.acquire(stdin):
            assert stdin.modes == (False, False)
        assert stdin.modes == (True, False)

    def test_release_is_idempotent(self):
        """Test releasing twice restores only once."""
        stdin = FakeStdin()
        session = RawModeSession.acquire(stdin)
        session.release()
        session.release()
        assert stdin.history == [
            ("line_mode", False),
            ("echo_mode", False),
            ("line_mode", True),
            ("echo_mode", True),
        ]

    def test_already_raw_is_noop(self):
        """Test acquiring on a raw input changes and restores nothing."""
        stdin = FakeStdin(line_mode=False, echo_mode=False)
        session = RawModeSession.acquire(stdin)
        assert not session.active
        assert session.saved is None
        session.release()
        assert stdin.history == []
        assert stdin.modes == (False, False)

    def test_nested_sessions_restore_outer_state(self):
        """Test only the outermost session restores the original modes."""
        stdin = FakeStdin()
        with raw_mode(stdin) as outer:
            with raw_mode(stdin) as inner:
                assert not inner.active
            assert stdin.modes == (False, False)
            assert outer.active
        assert stdin.modes == (True, True)

    def test_stream_without_modes(self):
        """Test inputs that cannot change modes yield an inactive session."""
        session = RawModeSession.acquire(object())
        assert not session.active
        session.release()


class TestRawModeContext:
    """Tests for the raw_mode context manager."""

    def test_restores_on_exception(self):
        """Test modes are restored when the block raises."""
        stdin = FakeStdin()
        with pytest.raises(RuntimeError):
            with raw_mode(stdin):
                raise RuntimeError("boom")
        assert stdin.modes == (True, True)

    def test_restores_on_interrupt(self):
        """Test modes are restored on KeyboardInterrupt."""
        stdin = FakeStdin()
        with pytest.raises(KeyboardInterrupt):
            with raw_mode(stdin):
                raise KeyboardInterrupt
        assert stdin.modes == (True, True)

    def test_sequential_sessions(self):
        """Test repeated sessions each restore the original modes."""
        stdin = FakeStdin()
        for _ in range(3):
            with raw_mode(stdin):
                assert stdin.modes == (False, False)
            assert stdin.modes == (True, True)
