"""Tests for trowel.console module."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from tests.helpers.stdio import DOWN, ENTER, FakeTTYOutput
from trowel import style
from trowel.console import Console, get_console, reset_console
from trowel.progress import Progress, ProgressOptions, ProgressState
from trowel.stdio import overrides

# Long enough that no tick fires during a test
SLOW = ProgressOptions(interval=60)


class TestConsoleLines:
    """Tests for the styled line methods."""

    def test_info(self, terminal, output):
        """Test info writes an unstyled line."""
        terminal()
        Console().info("hello")
        assert output.getvalue() == "hello\n"

    def test_info_without_message(self, terminal, output):
        """Test info with no message writes an empty line."""
        terminal()
        Console().info()
        assert output.getvalue() == "\n"

    def test_err(self, terminal, output):
        """Test err writes a light red line."""
        terminal()
        Console().err("boom")
        assert output.getvalue() == f"{style.light_red.wrap('boom')}\n"

    def test_warn(self, terminal, output):
        """Test warn writes a bold yellow tagged line."""
        terminal()
        Console().warn("careful")
        expected = style.yellow.wrap(style.bold.wrap("[WARN] careful"))
        assert output.getvalue() == f"{expected}\n"

    def test_warn_custom_tag(self, terminal, output):
        """Test warn with a custom tag."""
        terminal()
        Console(color=False).warn("old config", tag="DEPRECATED")
        assert output.getvalue() == "[DEPRECATED] old config\n"

    def test_success(self, terminal, output):
        """Test success writes a light green line."""
        terminal()
        Console().success("done")
        assert output.getvalue() == f"{style.light_green.wrap('done')}\n"

    def test_alert(self, terminal, output):
        """Test alert writes a bold light cyan line."""
        terminal()
        Console().alert("heads up")
        expected = style.light_cyan.wrap(style.bold.wrap("heads up"))
        assert output.getvalue() == f"{expected}\n"

    def test_detail(self, terminal, output):
        """Test detail writes a dark gray line."""
        terminal()
        Console().detail("more")
        assert output.getvalue() == f"{style.dark_gray.wrap('more')}\n"

    def test_write_has_no_newline(self, terminal, output):
        """Test write emits text as-is."""
        terminal()
        console = Console()
        console.write("a")
        console.write(None)
        console.write("b")
        assert output.getvalue() == "ab"

    def test_styled_text_is_written_rendered(self, terminal, output):
        """Test StyledText tokens can be written directly."""
        terminal()
        token = style.StyledText("ok").styled(style.bold)
        Console().info(token)
        assert output.getvalue() == f"{style.bold.wrap('ok')}\n"

    def test_each_call_is_one_line(self, terminal, output):
        """Test every line method appends exactly one newline."""
        terminal()
        console = Console(color=False)
        console.info("a")
        console.err("b")
        console.warn("c")
        console.success("d")
        console.alert("e")
        console.detail("f")
        assert output.getvalue().splitlines() == ["a", "b", "[WARN] c", "d", "e", "f"]


class TestColorPolicy:
    """Tests for color resolution."""

    def test_color_false(self, terminal, output):
        """Test styling can be disabled explicitly."""
        terminal()
        Console(color=False).err("boom")
        assert output.getvalue() == "boom\n"

    def test_no_color_env(self, terminal, output):
        """Test NO_COLOR disables styling."""
        terminal()
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            Console().success("done")
        assert output.getvalue() == "done\n"

    def test_explicit_color_beats_environment(self, terminal, output):
        """Test constructor argument takes precedence over NO_COLOR."""
        terminal()
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            Console(color=True).success("done")
        assert output.getvalue() == f"{style.light_green.wrap('done')}\n"

    def test_auto_mode_non_tty(self, terminal, output):
        """Test auto mode leaves plain output unstyled."""
        terminal()
        with patch.dict(os.environ, {"TROWEL_COLOR": "auto"}):
            Console().err("boom")
        assert output.getvalue() == "boom\n"

    def test_auto_mode_tty(self):
        """Test auto mode styles terminal output."""
        out = FakeTTYOutput()
        with overrides(stdout=out):
            with patch.dict(os.environ, {"TROWEL_COLOR": "auto"}):
                Console().err("boom")
        assert out.getvalue() == f"{style.light_red.wrap('boom')}\n"


class TestQuiet:
    """Tests for quiet mode."""

    def test_suppresses_everything_but_errors(self, terminal, output):
        """Test quiet mode only lets errors through."""
        terminal()
        console = Console(quiet=True, color=False)
        console.info("a")
        console.warn("b")
        console.success("c")
        console.alert("d")
        console.detail("e")
        console.write("f")
        console.err("g")
        assert output.getvalue() == "g\n"

    def test_quiet_property(self):
        """Test the quiet property reflects construction."""
        assert Console(quiet=True).quiet is True
        assert Console().quiet is False


class TestDelayed:
    """Tests for delayed messages."""

    def test_flush_writes_in_order(self, terminal, output):
        """Test queued messages are written in order on flush."""
        terminal()
        console = Console()
        console.delayed("one")
        console.delayed("two")
        assert output.getvalue() == ""
        assert console.pending == ["one", "two"]

        console.flush()
        assert output.getvalue() == "one\ntwo\n"
        assert console.pending == []

    def test_flush_is_idempotent(self, terminal, output):
        """Test a second flush writes nothing."""
        terminal()
        console = Console()
        console.delayed("one")
        console.flush()
        console.flush()
        assert output.getvalue() == "one\n"

    def test_flush_to_sink(self, terminal, output):
        """Test flush can route messages to another writer."""
        terminal()
        console = Console()
        seen = []
        console.delayed("one")
        console.delayed(None)
        console.flush(seen.append)
        assert seen == ["one", None]
        assert output.getvalue() == ""

    def test_flush_with_styled_sink(self, terminal, output):
        """Test flush with a line method as sink."""
        terminal()
        console = Console()
        console.delayed("later")
        console.flush(console.detail)
        assert output.getvalue() == f"{style.dark_gray.wrap('later')}\n"

    def test_sink_may_queue_more(self, terminal, output):
        """Test messages queued during a flush wait for the next one."""
        terminal()
        console = Console(color=False)

        def sink(message):
            console.info(message)
            console.delayed("again")

        console.delayed("first")
        console.flush(sink)
        assert output.getvalue() == "first\n"
        assert console.pending == ["again"]


class TestStreamResolution:
    """Tests for per-call stream resolution."""

    def test_console_follows_later_overrides(self, output):
        """Test a console created earlier writes to streams installed later."""
        console = Console(color=False)
        with overrides(stdout=output):
            console.info("inside")
        assert output.getvalue() == "inside\n"

    def test_stdout_property(self, terminal, output):
        """Test the stdout property returns the resolved stream."""
        terminal()
        assert Console().stdout is output


class TestDelegation:
    """Tests for progress and prompt delegation."""

    def test_progress(self, terminal, output):
        """Test progress starts an indicator on the active stream."""
        terminal()
        progress = Console(color=False, progress_options=SLOW).progress("Working")
        try:
            assert isinstance(progress, Progress)
            assert progress.state is ProgressState.RUNNING
            assert "Working..." in output.getvalue()
        finally:
            progress.succeed()
        assert "✓ Working" in output.getvalue()

    def test_progress_context_manager(self, terminal, output):
        """Test progress used as a context manager succeeds on exit."""
        terminal()
        with Console(color=False, progress_options=SLOW).progress("Working") as p:
            pass
        assert p.state is ProgressState.SUCCEEDED

    def test_prompt(self, terminal):
        """Test prompt reads from the active input."""
        terminal("Alice\n")
        assert Console().prompt("name", default="Bob") == "Alice"

    def test_hidden_prompt(self, terminal, output):
        """Test hidden prompt masks the answer."""
        terminal(b"secret\n")
        assert Console().prompt("password", hidden=True) == "secret"
        assert "secret" not in output.getvalue()

    def test_confirm(self, terminal):
        """Test confirm reads from the active input."""
        terminal("yes\n")
        assert Console().confirm("proceed?") is True

    def test_choose_one(self, terminal):
        """Test choose_one reads keys from the active input."""
        terminal(DOWN + ENTER)
        assert Console().choose_one("pick", ["a", "b"]) == "b"

    def test_prompt_respects_color(self, terminal, output):
        """Test prompts are unstyled when the console is."""
        terminal("x\n")
        Console(color=False).prompt("name")
        assert "\x1b[2m" not in output.getvalue()


class TestGlobalConsole:
    """Tests for the global console."""

    def test_get_console_singleton(self):
        """Test get_console returns the same instance."""
        assert get_console() is get_console()

    def test_get_console_with_arguments(self):
        """Test arguments produce a fresh console."""
        console = get_console(quiet=True)
        assert console is not get_console()
        assert console.quiet is True

    def test_reset_console(self):
        """Test reset_console drops the global instance."""
        first = get_console()
        reset_console()
        assert get_console() is not first

    @pytest.mark.parametrize("color", [True, False])
    def test_get_console_color(self, color):
        """Test the color argument is honoured."""
        assert get_console(color=color).use_color() is color
