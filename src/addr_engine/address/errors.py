"""Typed faults raised while parsing or evaluating addresses."""

from __future__ import annotations


class AddressError(RuntimeError):
    """Base class for semantic address faults."""


class InvalidPatternError(AddressError):
    """The text between ``/ /`` is not a valid regular expression."""

    def __init__(self, pattern: str, *, position: int, reason: str) -> None:
        super().__init__(f"Invalid pattern /{pattern}/ at {position}: {reason}")
        self.pattern = pattern
        self.position = position
        self.reason = reason


class EmptyBufferError(AddressError):
    """``$`` was resolved against a buffer with no lines."""

    def __init__(self, message: str = "Buffer has no lines; '$' is undefined") -> None:
        super().__init__(message)


class RangeTooLargeError(AddressError):
    """An operator would materialize more indices than the configured limit."""

    def __init__(self, operator: str, *, requested: int, limit: int) -> None:
        super().__init__(
            f"'{operator}' would select {requested} lines, limit is {limit}"
        )
        self.operator = operator
        self.requested = requested
        self.limit = limit


class PatternTimeoutError(AddressError):
    """A search pattern ran past the configured matching time budget."""

    def __init__(self, pattern: str, *, timeout: float) -> None:
        super().__init__(f"Pattern /{pattern}/ did not finish within {timeout}s")
        self.pattern = pattern
        self.timeout = timeout


__all__ = [
    "AddressError",
    "EmptyBufferError",
    "InvalidPatternError",
    "PatternTimeoutError",
    "RangeTooLargeError",
]
