"""Error taxonomy for name, symbol, and quantity conversions.

Every class carries the offending input as ``value`` so callers can report
exactly what was rejected. They all derive from :class:`ValueError`: each one
signals malformed caller input, never a transient condition.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "TransEOSError",
    "InvalidName",
    "InvalidNameLength",
    "InvalidNameCharacter",
    "InvalidThirteenthCharacter",
    "InvalidNameValue",
    "InvalidSymbol",
    "InvalidSymbolLength",
    "InvalidSymbolCharacter",
    "InvalidSymbolPrecision",
    "InvalidQuantity",
    "ActionError",
]


class TransEOSError(ValueError):
    """Base class for input validation failures raised by transeos."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.value = value


class InvalidName(TransEOSError):
    """Raised when an account name cannot be encoded or decoded."""


class InvalidNameLength(InvalidName):
    """Raised when a name is longer than 13 characters."""


class InvalidNameCharacter(InvalidName):
    """Raised when a name contains a character outside ``.1-5a-z``.

    ``position`` is the zero-based index of the first offending character.
    """

    def __init__(self, message: str, value: Any = None, position: int | None = None) -> None:
        super().__init__(message, value)
        self.position = position


class InvalidThirteenthCharacter(InvalidName):
    """Raised when the 13th character needs more than the 4 bits available."""


class InvalidNameValue(InvalidName):
    """Raised when an integer is not a 64-bit unsigned name value."""


class InvalidSymbol(TransEOSError):
    """Raised when a symbol code or symbol word is malformed."""


class InvalidSymbolLength(InvalidSymbol):
    """Raised when a symbol code is longer than 7 characters."""


class InvalidSymbolCharacter(InvalidSymbol):
    """Raised when a symbol code contains anything but ``A-Z``."""


class InvalidSymbolPrecision(InvalidSymbol):
    """Raised when a symbol precision does not fit in one byte."""


class InvalidQuantity(TransEOSError):
    """Raised when an amount or its decimal-place count is malformed."""


class ActionError(TransEOSError):
    """Raised when contract action arguments are missing or inconsistent."""
