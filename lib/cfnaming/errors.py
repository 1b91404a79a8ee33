"""Exception types raised by cfnaming."""

from __future__ import annotations


class NamingError(Exception):
    """Base class for naming failures."""


class InvalidInput(NamingError, ValueError):
    """A required string argument is missing or has the wrong shape."""


class PatternMismatch(NamingError, LookupError):
    """An extractor could not recover a component from the given string."""

    def __init__(self, value: object, expected: str) -> None:
        super().__init__(f"{value!r} does not look like {expected}.")
        self.value = value
        self.expected = expected


__all__ = ["NamingError", "InvalidInput", "PatternMismatch"]
