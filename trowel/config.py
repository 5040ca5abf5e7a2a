"""
Environment-driven output and input policy.

Decides whether styling is applied and whether prompts may read from the
terminal. Constructor arguments on Console take precedence over the
environment; these helpers supply the defaults.

Environment variables:
    NO_COLOR                Any non-empty value disables styling (https://no-color.org/)
    TROWEL_COLOR            "always" (default), "auto" (TTY output only) or "never"
    TROWEL_NON_INTERACTIVE  "1", "true" or "yes" forces non-interactive prompts
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

COLOR_ENV = "TROWEL_COLOR"
NON_INTERACTIVE_ENV = "TROWEL_NON_INTERACTIVE"

_TRUTHY = ("1", "true", "yes")


class ColorMode(Enum):
    """When styled output is emitted."""

    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


def _is_tty(stream: Any) -> bool:
    """Check if a stream is attached to a terminal."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        # Closed or detached streams
        return False


def color_mode() -> ColorMode:
    """
    Resolve the color mode from the environment.

    Unknown TROWEL_COLOR values fall back to ALWAYS.

    Returns:
        The active ColorMode
    """
    if os.environ.get("NO_COLOR"):
        return ColorMode.NEVER

    value = os.environ.get(COLOR_ENV, "").strip().lower()
    try:
        return ColorMode(value) if value else ColorMode.ALWAYS
    except ValueError:
        return ColorMode.ALWAYS


def should_use_color(stream: Any = None) -> bool:
    """
    Determine if styled output should be written to a stream.

    Args:
        stream: Output stream consulted in AUTO mode

    Returns:
        True if ANSI styling should be applied
    """
    mode = color_mode()
    if mode is ColorMode.AUTO:
        return _is_tty(stream)
    return mode is ColorMode.ALWAYS


def non_interactive_forced() -> bool:
    """Check if non-interactive mode is forced via environment."""
    return os.environ.get(NON_INTERACTIVE_ENV, "").strip().lower() in _TRUTHY
