"""
Exception hierarchy for trowel.

All library errors derive from TrowelError so callers can catch every
terminal-interaction failure with a single except clause.
"""

from typing import Any


class TrowelError(Exception):
    """
    Base exception for all trowel errors.

    Example:
        try:
            env = console.choose_one("Environment:", ["dev", "prod"])
        except TrowelError as e:
            console.err(str(e))
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class NonInteractiveError(TrowelError):
    """
    Raised when interactive input is required but not available.

    The input stream is not attached to a terminal (or non-interactive mode
    is forced through TROWEL_NON_INTERACTIVE), so raw-mode input such as
    list selection cannot be performed. Callers should fall back to a
    non-interactive default instead of waiting on input.
    """

    pass
