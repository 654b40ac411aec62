"""Exceptions raised by tempokit.

Every error raised on purpose derives from ``TempokitError``. Parse failures
also derive from ``ValueError`` so callers that already catch bad input as
``ValueError`` keep working.
"""

from typing import Any

from typing_extensions import override


class TempokitError(Exception):
    """Base class for all tempokit errors."""


class CancellationError(TempokitError):
    """Raised when a cancellable operation is stopped by its signal.

    The signal's reason is kept untouched in ``reason``; it may be any value.
    """

    def __init__(self, reason: Any = None):
        super().__init__(reason)
        self.reason: Any = reason

    @override
    def __str__(self) -> str:
        return f"Operation cancelled (reason: {self.reason!r})"


class ParseError(TempokitError, ValueError):
    """Base class for duration and date parse failures."""

    def __init__(self, message: str, *, text: str, pattern: str | None = None):
        super().__init__(message)
        self.text: str = text
        self.pattern: str | None = pattern


class FormatError(ParseError):
    """The input does not match the expected grammar or pattern."""


class DateOverflowError(ParseError):
    """The input matches the pattern but is not a valid calendar moment.

    Example: ``"2026-02-30"`` is well formed but February has no 30th day.
    """
