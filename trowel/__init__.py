"""
Terminal interaction engine.

Styled output, a progress indicator with elapsed time, and raw-mode
interactive prompts (text with defaults, hidden input, yes/no
confirmation and arrow-key selection). Streams are resolved through
trowel.stdio, so tests can substitute them without touching the terminal.

Example:
    from trowel import Console

    console = Console()
    console.info("Fetching bricks")

    progress = console.progress("Downloading")
    try:
        download()
        progress.succeed()
    except Exception:
        progress.fail()
        raise

    if console.confirm("Overwrite existing files?"):
        name = console.prompt("Project name?", default="my_app")
        flavor = console.choose_one("Flavor:", ["core", "full"], default="core")
"""

from importlib.metadata import PackageNotFoundError, version

from . import prompts, style
from .config import ColorMode, color_mode, non_interactive_forced, should_use_color
from .console import Console, get_console, reset_console
from .exceptions import NonInteractiveError, TrowelError
from .progress import Progress, ProgressOptions, ProgressState, format_elapsed
from .prompts import choose_one, confirm, prompt_text
from .stdio import (
    StdioOverrides,
    current_overrides,
    overrides,
    resolve_input,
    resolve_output,
    run_with_overrides,
)
from .style import AnsiCode, StyledText
from .term import Key, KeyWindow, RawModeSession, TerminalInput, raw_mode

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("trowel")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Console
    "Console",
    "get_console",
    "reset_console",
    # Styling
    "AnsiCode",
    "StyledText",
    "style",
    # Progress
    "Progress",
    "ProgressOptions",
    "ProgressState",
    "format_elapsed",
    # Prompts
    "prompts",
    "prompt_text",
    "confirm",
    "choose_one",
    # Streams
    "StdioOverrides",
    "current_overrides",
    "overrides",
    "resolve_input",
    "resolve_output",
    "run_with_overrides",
    # Terminal
    "Key",
    "KeyWindow",
    "RawModeSession",
    "TerminalInput",
    "raw_mode",
    # Configuration
    "ColorMode",
    "color_mode",
    "non_interactive_forced",
    "should_use_color",
    # Errors
    "NonInteractiveError",
    "TrowelError",
]
