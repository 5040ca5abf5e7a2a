"""
Scoped overrides for the process's standard streams.

Every component resolves its output and input through resolve_output()
and resolve_input(). Tests (or embedding applications) substitute streams
for a dynamic scope with overrides(); the active record lives in a
ContextVar, so it follows synchronous calls and asyncio tasks started
within the block and is restored when the block exits.

Example:
    out = io.StringIO()
    with overrides(stdout=out, stdin=io.StringIO("Alice\\n")):
        name = Console().prompt("Name?")
    assert "Alice" in out.getvalue()
"""

from __future__ import annotations

import sys
import weakref
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, TypeVar

from .term.input import as_terminal_input

T = TypeVar("T")

StreamProvider = Callable[[], Any]


@dataclass(frozen=True)
class StdioOverrides:
    """
    One override scope.

    A scope that provides only one of the streams defers the other to its
    parent scope, and ultimately to the real process streams.
    """

    stdout: StreamProvider | None = None
    stdin: StreamProvider | None = None
    parent: StdioOverrides | None = None

    def resolve_stdout(self) -> Any:
        scope: StdioOverrides | None = self
        while scope is not None:
            if scope.stdout is not None:
                return scope.stdout()
            scope = scope.parent
        return sys.stdout

    def resolve_stdin(self) -> Any:
        scope: StdioOverrides | None = self
        while scope is not None:
            if scope.stdin is not None:
                return scope.stdin()
            scope = scope.parent
        return sys.stdin


_CURRENT: ContextVar[StdioOverrides | None] = ContextVar(
    "trowel.stdio_overrides", default=None
)

# Adapters are cached per stream so buffered bytes survive between reads
_ADAPTERS: weakref.WeakKeyDictionary[Any, Any] = weakref.WeakKeyDictionary()


def _as_provider(value: Any) -> StreamProvider | None:
    """Accept either a zero-argument provider or a stream object."""
    if value is None:
        return None
    if callable(value) and not hasattr(value, "write") and not hasattr(value, "read"):
        return value
    return lambda: value


def current_overrides() -> StdioOverrides | None:
    """Return the innermost active override scope, or None."""
    return _CURRENT.get()


def resolve_output() -> Any:
    """Return the active output stream."""
    scope = _CURRENT.get()
    return scope.resolve_stdout() if scope is not None else sys.stdout


def resolve_input() -> Any:
    """
    Return the active input as a terminal-input object.

    Plain text streams are wrapped in trowel.term.input.TerminalInput.
    """
    scope = _CURRENT.get()
    stream = scope.resolve_stdin() if scope is not None else sys.stdin
    try:
        adapter = _ADAPTERS.get(stream)
    except TypeError:
        # Not weak-referenceable
        return as_terminal_input(stream)
    if adapter is None:
        adapter = as_terminal_input(stream)
        _ADAPTERS[stream] = adapter
    return adapter


@contextmanager
def overrides(stdout: Any = None, stdin: Any = None) -> Iterator[StdioOverrides]:
    """
    Substitute the standard streams for the duration of a block.

    Args:
        stdout: Output stream, or a zero-argument callable returning one
        stdin: Input stream, or a zero-argument callable returning one

    Yields:
        The active override scope
    """
    scope = StdioOverrides(
        stdout=_as_provider(stdout),
        stdin=_as_provider(stdin),
        parent=_CURRENT.get(),
    )
    token = _CURRENT.set(scope)
    try:
        yield scope
    finally:
        _CURRENT.reset(token)


def run_with_overrides(
    body: Callable[[], T], *, stdout: Any = None, stdin: Any = None
) -> T:
    """
    Run body with the given streams active and return its result.

    Example:
        answer = run_with_overrides(
            lambda: console.confirm("Continue?"),
            stdin=io.StringIO("y\\n"),
        )
    """
    with overrides(stdout=stdout, stdin=stdin):
        return body()
