"""
Cursor control sequences and redraw arithmetic.

rows_spanned() is the single place that decides how many terminal rows a
piece of output occupies; prompts and the progress indicator both size
their erase sequences with it.
"""

from __future__ import annotations

import math
import os
from typing import Any

from rich.cells import cell_len

from ..style import strip_ansi

SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CURSOR_UP = "\x1b[A"
CLEAR_LINE = "\x1b[2K"
CLEAR_TO_END = "\x1b[J"
CARRIAGE_RETURN = "\r"

DEFAULT_COLUMNS = 80


def terminal_columns(stream: Any = None) -> int:
    """
    Get the width of the terminal behind a stream.

    Only a stream attached to a terminal is measured. Anything else (files,
    pipes, in-memory buffers) gets DEFAULT_COLUMNS, so output sent to a
    substituted stream never depends on the terminal running the process.

    Args:
        stream: Output stream; its file descriptor is queried when it is a TTY

    Returns:
        Column count, DEFAULT_COLUMNS when it cannot be determined
    """
    try:
        if stream is not None and stream.isatty():
            columns = os.get_terminal_size(stream.fileno()).columns
            if columns > 0:
                return columns
    except (AttributeError, OSError, ValueError):
        pass
    return DEFAULT_COLUMNS


def rows_spanned(text: str, columns: int | None = None) -> int:
    """
    Count the terminal rows text occupies.

    Embedded line breaks always start a new row. When columns is given,
    lines longer than the terminal width are counted as wrapping; escape
    sequences do not contribute to the width.

    Args:
        text: Rendered text, possibly containing ANSI sequences
        columns: Terminal width, or None to ignore soft wrapping

    Returns:
        Number of rows, at least 1
    """
    lines = text.split("\n")
    if not columns or columns <= 0:
        return len(lines)

    rows = 0
    for line in lines:
        width = cell_len(strip_ansi(line))
        rows += max(1, math.ceil(width / columns))
    return rows


def erase_rows(count: int) -> str:
    """
    Move up and clear the rows above the cursor.

    Used after the user pressed enter: the cursor sits on the row below the
    prompt, and the prompt occupied count rows.
    """
    return (CURSOR_UP + CLEAR_LINE) * max(count, 0)


def clear_rows(count: int) -> str:
    """
    Clear the current row and the count - 1 rows above it.

    Leaves the cursor at column 0 of the topmost cleared row.
    """
    return CARRIAGE_RETURN + CLEAR_LINE + (CURSOR_UP + CLEAR_LINE) * max(count - 1, 0)
