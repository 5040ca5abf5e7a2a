"""
Interactive prompts: free text, hidden input, confirmation and single
choice selection.

Every prompt writes its question, reads an answer and then redraws the
question once in place, followed by the accepted answer. Raw mode and
cursor visibility are restored on every exit path, including end of input
and KeyboardInterrupt. End of input is treated as accepting the default.

Streams are resolved through trowel.stdio unless passed explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from . import style
from .config import non_interactive_forced
from .exceptions import NonInteractiveError
from .stdio import resolve_input, resolve_output
from .term.cursor import (
    CLEAR_TO_END,
    HIDE_CURSOR,
    RESTORE_CURSOR,
    SAVE_CURSOR,
    SHOW_CURSOR,
    erase_rows,
    rows_spanned,
    terminal_columns,
)
from .term.input import as_terminal_input
from .term.keys import BACKSPACE, CARRIAGE_RETURN, DELETE, LINE_FEED, Key, KeyWindow
from .term.raw import raw_mode

_lg = logging.getLogger(__name__)

AFFIRMATIVE = frozenset({"y", "yes", "yea", "yeah", "yep", "yup"})
NEGATIVE = frozenset({"n", "no", "nope"})

HIDDEN_PLACEHOLDER = "******"

POINTER = "❯"
SELECTED_MARKER = "◉"
UNSELECTED_MARKER = "◯"


def parse_bool(answer: str) -> bool | None:
    """
    Interpret a yes/no answer.

    Returns:
        True or False for a recognized answer, None otherwise
    """
    word = answer.strip().lower()
    if word in AFFIRMATIVE:
        return True
    if word in NEGATIVE:
        return False
    return None


def _streams(stdout: Any, stdin: Any) -> tuple[Any, Any]:
    """Resolve the stream pair, adapting an explicit input if needed."""
    out = stdout if stdout is not None else resolve_output()
    inp = as_terminal_input(stdin) if stdin is not None else resolve_input()
    return out, inp


def _answer(text: str, color: bool) -> str:
    return style.dim.wrap(style.light_cyan.wrap(text, enabled=color), enabled=color)


def _redraw(stdout: Any, prompt: str, answer: str, color: bool) -> None:
    """Replace the prompt rows above the cursor with prompt + answer."""
    rows = rows_spanned(prompt, terminal_columns(stdout))
    stdout.write(f"{erase_rows(rows)}{prompt}{_answer(answer, color)}\n")
    stdout.flush()


def _read_line(stdin: Any, stdout: Any) -> str | None:
    """Read a visible line; on end of input move below the prompt ourselves."""
    line = stdin.read_line()
    if line is None:
        stdout.write("\n")
        return None
    return line.strip()


def _drop_last_char(value: bytearray) -> None:
    """Remove the last UTF-8 encoded character from value."""
    while value and (value[-1] & 0xC0) == 0x80:
        value.pop()
    if value:
        value.pop()


def _read_hidden(stdin: Any, stdout: Any) -> str | None:
    """
    Read a line byte by byte with echo disabled.

    Backspace and delete remove the last character; line feed or carriage
    return ends the input.

    Returns:
        Decoded input, or None if input ended before anything was typed
    """
    value = bytearray()
    ended = False
    with raw_mode(stdin):
        while True:
            byte = stdin.read_byte()
            if byte is None:
                ended = True
                break
            if byte in (LINE_FEED, CARRIAGE_RETURN):
                break
            if byte in (DELETE, BACKSPACE):
                _drop_last_char(value)
                continue
            value.append(byte)

    # Echo is off, so the terminator was not echoed
    stdout.write("\n")
    if ended and not value:
        return None
    return value.decode("utf-8", errors="replace")


def prompt_text(
    message: str,
    default: Any = None,
    *,
    hidden: bool = False,
    stdout: Any = None,
    stdin: Any = None,
    color: bool = True,
) -> str:
    """
    Prompt for a line of text.

    Args:
        message: The prompt message (may span several lines)
        default: Value returned for empty input or end of input
        hidden: Read without echo and show a placeholder instead of the answer
        stdout: Output stream (default: resolved)
        stdin: Input stream (default: resolved)
        color: Whether to apply ANSI styling

    Returns:
        The entered text, or the default ("" if none)

    Raises:
        NonInteractiveError: If non-interactive mode is forced and there is
            no default
    """
    default_text = "" if default is None else str(default)
    if non_interactive_forced():
        if default_text:
            return default_text
        raise NonInteractiveError(
            "Cannot prompt for text input in non-interactive mode", prompt=message
        )

    stdout, stdin = _streams(stdout, stdin)
    suffix = (
        " " + style.dark_gray.wrap(f"({default_text})", enabled=color)
        if default_text
        else ""
    )
    prompt = f"{message}{suffix} "
    stdout.write(prompt)
    stdout.flush()

    if hidden and stdin.isatty():
        raw = _read_hidden(stdin, stdout)
    else:
        if hidden:
            _lg.debug("input is not a terminal, reading hidden prompt as a plain line")
        raw = _read_line(stdin, stdout)

    response = raw if raw else default_text
    _redraw(stdout, prompt, HIDDEN_PLACEHOLDER if hidden else response, color)
    return response


def confirm(
    message: str,
    default: bool = False,
    *,
    stdout: Any = None,
    stdin: Any = None,
    color: bool = True,
) -> bool:
    """
    Ask a yes/no question.

    Answers are matched case-insensitively against AFFIRMATIVE and
    NEGATIVE; anything else, including empty input, gives the default.

    Args:
        message: The confirmation question
        default: Answer used for empty, unrecognized or missing input
        stdout: Output stream (default: resolved)
        stdin: Input stream (default: resolved)
        color: Whether to apply ANSI styling

    Returns:
        The answer
    """
    if non_interactive_forced():
        return default

    stdout, stdin = _streams(stdout, stdin)
    hint = "Y/n" if default else "y/N"
    prompt = f"{message} {style.dark_gray.wrap(f'({hint})', enabled=color)} "
    stdout.write(prompt)
    stdout.flush()

    raw = _read_line(stdin, stdout)
    parsed = parse_bool(raw) if raw else None
    response = default if parsed is None else parsed

    _redraw(stdout, prompt, "Yes" if response else "No", color)
    return response


def _render_choices(
    stdout: Any, message: str, choices: Sequence[str], index: int, color: bool
) -> None:
    lines = [message]
    for i, choice in enumerate(choices):
        if i == index:
            pointer = style.green.wrap(POINTER, enabled=color)
            marker = style.light_cyan.wrap(SELECTED_MARKER, enabled=color)
            label = style.light_cyan.wrap(choice, enabled=color)
            lines.append(f"{pointer} {marker} {label}")
        else:
            lines.append(f"  {UNSELECTED_MARKER} {choice}")
    stdout.write("\n".join(lines))
    stdout.flush()


def choose_one(
    message: str,
    choices: Sequence[str],
    default: str | None = None,
    *,
    stdout: Any = None,
    stdin: Any = None,
    color: bool = True,
) -> str:
    """
    Let the user pick one choice with the arrow keys.

    Up and down move the selection (wrapping around), enter confirms. The
    list is redrawn in place after each move and replaced by a single
    confirmation line when done. End of input accepts the current selection.

    Args:
        message: The prompt message
        choices: Choices to pick from
        default: Initially selected choice (first choice if absent)
        stdout: Output stream (default: resolved)
        stdin: Input stream (default: resolved)
        color: Whether to apply ANSI styling

    Returns:
        The chosen value

    Raises:
        ValueError: If choices is empty
        NonInteractiveError: If the input is not a terminal, or
            non-interactive mode is forced and there is no usable default

    Example:
        env = choose_one("Environment:", ["dev", "staging", "prod"])
    """
    options = [str(c) for c in choices]
    if not options:
        raise ValueError("choices must not be empty")

    if non_interactive_forced():
        if default in options:
            return str(default)
        raise NonInteractiveError(
            "Cannot prompt for selection in non-interactive mode", prompt=message
        )

    stdout, stdin = _streams(stdout, stdin)
    if not stdin.isatty():
        raise NonInteractiveError(
            "Cannot prompt for selection without an interactive terminal",
            prompt=message,
        )

    index = options.index(default) if default in options else 0
    window = KeyWindow()

    stdout.write(SAVE_CURSOR + HIDE_CURSOR)
    try:
        with raw_mode(stdin):
            _render_choices(stdout, message, options, index, color)
            while True:
                byte = stdin.read_byte()
                if byte is None:
                    break
                key = window.feed(byte)
                if key is Key.ENTER:
                    break
                if key is Key.UP:
                    index = (index - 1) % len(options)
                elif key is Key.DOWN:
                    index = (index + 1) % len(options)
                else:
                    continue
                stdout.write(RESTORE_CURSOR + CLEAR_TO_END)
                _render_choices(stdout, message, options, index, color)
    finally:
        stdout.write(RESTORE_CURSOR + CLEAR_TO_END + SHOW_CURSOR)
        stdout.flush()

    result = options[index]
    stdout.write(f"{message} {_answer(result, color)}\n")
    stdout.flush()
    return result
