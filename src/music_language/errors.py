"""
Exceptions raised by the music language.

Everything derives from MusicError so callers can catch the whole family.
The concrete classes also derive from the builtin they refine, so code that
already catches ValueError keeps working.
"""

from __future__ import annotations


class MusicError(Exception):
    """Base class for music language errors."""


class ParseError(MusicError, ValueError):
    """A notation symbol does not match the grammar."""

    def __init__(self, message: str, symbol: str) -> None:
        super().__init__(message)
        self.symbol = symbol


class ChannelCapacityExceeded(MusicError, RuntimeError):
    """A piece uses more instruments than the device has channels."""

    def __init__(self, message: str, capacity: int) -> None:
        super().__init__(message)
        self.capacity = capacity


class PreconditionViolation(MusicError, ValueError):
    """A constructor or combinator received an invalid argument."""
