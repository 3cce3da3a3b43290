"""Exceptions raised by fuzzkill."""


class FuzzkillError(Exception):
    """Base class for fuzzkill errors."""


class InvalidPattern(FuzzkillError):
    """Raised when a regex query does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason
