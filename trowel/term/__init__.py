"""
Low-level terminal primitives: byte input, raw-mode sessions, key
sequence recognition and cursor redraw helpers.
"""

from .cursor import clear_rows, erase_rows, rows_spanned, terminal_columns
from .input import TerminalInput, as_terminal_input
from .keys import Key, KeyWindow
from .raw import RawModeSession, raw_mode

__all__ = [
    "Key",
    "KeyWindow",
    "RawModeSession",
    "TerminalInput",
    "as_terminal_input",
    "clear_rows",
    "erase_rows",
    "raw_mode",
    "rows_spanned",
    "terminal_columns",
]
