"""
ANSI styling primitives.

Each AnsiCode pairs an SGR open code with the close code that undoes only
that attribute (bold 1/22, cyan 36/39, ...). Wrapping an already styled
value therefore nests cleanly: the inner close never resets the outer style.

Example:
    >>> bold.wrap("hi")
    '\\x1b[1mhi\\x1b[22m'
    >>> light_cyan.wrap(bold.wrap("hi"))
    '\\x1b[96m\\x1b[1mhi\\x1b[22m\\x1b[39m'
    >>> style("hi", "bold nonsense")
    '\\x1b[1mhi\\x1b[22m'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import overload

ESC = "\x1b"

# Matches SGR sequences and other CSI sequences (cursor movement, erase)
_ANSI_PATTERN = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b[78]")

# 256-color foreground range
_COLOR_256_MAX = 255


@dataclass(frozen=True)
class AnsiCode:
    """A single SGR attribute with its matching close code."""

    name: str
    open: int | str
    close: int

    @property
    def start(self) -> str:
        """Escape sequence that enables the attribute."""
        return f"{ESC}[{self.open}m"

    @property
    def end(self) -> str:
        """Escape sequence that disables the attribute."""
        return f"{ESC}[{self.close}m"

    @overload
    def wrap(self, value: str, *, enabled: bool = True) -> str: ...

    @overload
    def wrap(self, value: None, *, enabled: bool = True) -> None: ...

    def wrap(self, value: str | None, *, enabled: bool = True) -> str | None:
        """
        Surround a value with this attribute's open and close sequences.

        Args:
            value: Text to style (None is passed through)
            enabled: When False the value is returned unchanged

        Returns:
            Styled text, or the value itself when styling does not apply
        """
        if value is None or not enabled:
            return value
        return f"{self.start}{value}{self.end}"

    def __call__(self, value: str) -> str:
        return self.wrap(value)


# Text attributes
reset_all = AnsiCode("reset_all", 0, 0)
bold = AnsiCode("bold", 1, 22)
dim = AnsiCode("dim", 2, 22)
italic = AnsiCode("italic", 3, 23)
underlined = AnsiCode("underlined", 4, 24)

# Foreground colors
black = AnsiCode("black", 30, 39)
red = AnsiCode("red", 31, 39)
green = AnsiCode("green", 32, 39)
yellow = AnsiCode("yellow", 33, 39)
blue = AnsiCode("blue", 34, 39)
magenta = AnsiCode("magenta", 35, 39)
cyan = AnsiCode("cyan", 36, 39)
light_gray = AnsiCode("light_gray", 37, 39)
default_color = AnsiCode("default", 39, 39)
dark_gray = AnsiCode("dark_gray", 90, 39)
light_red = AnsiCode("light_red", 91, 39)
light_green = AnsiCode("light_green", 92, 39)
light_yellow = AnsiCode("light_yellow", 93, 39)
light_blue = AnsiCode("light_blue", 94, 39)
light_magenta = AnsiCode("light_magenta", 95, 39)
light_cyan = AnsiCode("light_cyan", 96, 39)
white = AnsiCode("white", 97, 39)

_NAMED: dict[str, AnsiCode] = {
    code.name: code
    for code in (
        reset_all,
        bold,
        dim,
        italic,
        underlined,
        black,
        red,
        green,
        yellow,
        blue,
        magenta,
        cyan,
        light_gray,
        default_color,
        dark_gray,
        light_red,
        light_green,
        light_yellow,
        light_blue,
        light_magenta,
        light_cyan,
        white,
    )
}

# Spellings accepted in addition to the canonical names
_ALIASES = {
    "grey": "light_gray",
    "gray": "light_gray",
    "dark_grey": "dark_gray",
    "light_grey": "light_gray",
    "bright_red": "light_red",
    "bright_green": "light_green",
    "bright_yellow": "light_yellow",
    "bright_blue": "light_blue",
    "bright_magenta": "light_magenta",
    "bright_cyan": "light_cyan",
    "underline": "underlined",
}


def color_256(color_code: int) -> AnsiCode:
    """
    Create a 256-color foreground code.

    Args:
        color_code: Color code (0-255), clamped into range

    Returns:
        AnsiCode using the extended color sequence
    """
    color_code = max(0, min(color_code, _COLOR_256_MAX))
    return AnsiCode(f"color-{color_code}", f"38;5;{color_code}", 39)


def _parse_color_256(name: str) -> AnsiCode | None:
    """Parse a 256-color name such as 'color-244'."""
    if not name.startswith("color-"):
        return None
    try:
        code = int(name.split("-", 1)[1])
    except ValueError:
        return None
    if 0 <= code <= _COLOR_256_MAX:
        return color_256(code)
    return None


def from_name(name: str) -> AnsiCode | None:
    """
    Convert a style name to an AnsiCode.

    Supports the named palette ("bold", "light_cyan", ...), common aliases
    ("bright_red", "grey") and 256-color names ("color-0" to "color-255").
    Case and surrounding whitespace are ignored; "-" and "_" are equivalent
    for named styles.

    Args:
        name: Style name

    Returns:
        Matching AnsiCode, or None if the name is not recognized
    """
    if not name:
        return None

    key = name.strip().lower()
    code = _parse_color_256(key)
    if code is not None:
        return code

    key = key.replace("-", "_")
    key = _ALIASES.get(key, key)
    return _NAMED.get(key)


def style(text: str, names: str, *, enabled: bool = True) -> str:
    """
    Apply a whitespace separated list of style names to text.

    Codes are applied left to right, so the first name is the innermost
    wrap. Unknown names are skipped.

    Args:
        text: Text to style
        names: Style names, e.g. "bold light_cyan"
        enabled: When False the text is returned unchanged

    Returns:
        Styled text
    """
    for name in names.split():
        code = from_name(name)
        if code is not None:
            text = code.wrap(text, enabled=enabled)
    return text


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_PATTERN.sub("", text)


@dataclass(frozen=True)
class StyledText:
    """
    Immutable pair of raw text and an ordered tuple of style codes.

    Rendering applies codes in order, so codes[0] is the innermost wrap.

    Example:
        token = StyledText("done").styled(bold).styled(light_green)
        console.write(str(token))
    """

    text: str
    codes: tuple[AnsiCode, ...] = ()

    def styled(self, code: AnsiCode | None) -> StyledText:
        """Return a new token with an additional outer style."""
        if code is None:
            return self
        return StyledText(self.text, (*self.codes, code))

    def render(self, *, enabled: bool = True) -> str:
        """Render the token to an escaped string."""
        value = self.text
        for code in self.codes:
            value = code.wrap(value, enabled=enabled)
        return value

    def __str__(self) -> str:
        return self.render()
